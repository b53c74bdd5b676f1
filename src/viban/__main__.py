"""CLI entry point for viban."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging
from .repositories import ProjectRegistry


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="viban",
        description="Kanban board with a web API and an MCP server for AI assistants",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--web",
        nargs="?",
        type=int,
        const=0,
        default=None,
        metavar="PORT",
        help="Start the web API (default mode, port 3000 unless given)",
    )
    mode.add_argument(
        "--mcp",
        action="store_true",
        help="Start the MCP server on stdio for AI integration",
    )
    parser.add_argument(
        "--project",
        type=Path,
        default=None,
        help="Project directory to open (default: VIBAN_PROJECT_PATH or last used project)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Overlay command line arguments on environment settings."""
    settings_kwargs: dict = {}
    if args.project:
        settings_kwargs["project_path"] = args.project
    if args.web:
        settings_kwargs["port"] = args.web
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file
    return Settings(**settings_kwargs)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    settings = build_settings(args)

    setup_logging(settings.verbose, settings.log_file, mode="mcp" if args.mcp else "web")

    registry = ProjectRegistry(settings.registry_file)

    # Import here so --help stays fast
    from .cli.serve import run_mcp, run_web

    if args.mcp:
        raise SystemExit(run_mcp(settings, registry))
    raise SystemExit(run_web(settings, registry))


if __name__ == "__main__":
    main()
