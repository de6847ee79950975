"""Command-line entry point for forgemate."""

import argparse
import sys

from . import __version__
from .cli import CLIHandler
from .logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def _add_model_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "model", nargs="?", help="Path to a model definition JSON file"
    )
    parser.add_argument("--url", help="Fetch the model definition JSON from a URL")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="forgemate",
        description="Generate Laravel and TypeScript scaffolding from model definitions",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )

    config_group = parser.add_argument_group("configuration")
    config_group.add_argument("--config", metavar="FILE", help="JSON configuration file")
    config_group.add_argument(
        "--project-path", metavar="DIR", help="Laravel project root for custom stubs"
    )
    config_group.add_argument(
        "--use-custom-stubs",
        action="store_true",
        help="Look up stubs in the project's stubs directory first",
    )
    config_group.add_argument(
        "--stubs-dir",
        metavar="DIR",
        help="Custom stubs directory (implies --use-custom-stubs)",
    )
    config_group.add_argument(
        "--relationship-naming",
        choices=["camel", "snake"],
        help="Case style for relationship accessor names",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render a single stub or template")
    _add_model_args(render)
    source = render.add_mutually_exclusive_group(required=True)
    source.add_argument("--stub", help="Stub name, e.g. backend/model")
    source.add_argument("--template", metavar="FILE", help="Path to a template file")
    render.add_argument("--output", "-o", metavar="FILE", help="Write output to a file")
    render.add_argument(
        "--plain", action="store_true", help="Print without syntax highlighting"
    )

    scaffold = subparsers.add_parser("scaffold", help="Render every stub for a model")
    _add_model_args(scaffold)
    scaffold.add_argument(
        "--output-dir", metavar="DIR", help="Write files under this project root"
    )
    scaffold.add_argument(
        "--force", action="store_true", help="Overwrite files that already exist"
    )
    scaffold.add_argument(
        "--dry-run", action="store_true", help="Only show which files would be generated"
    )
    scaffold.add_argument(
        "--migration-date",
        metavar="DATE",
        help="Date used in the migration file name (default: now)",
    )

    names = subparsers.add_parser("names", help="Show naming tokens for a model name")
    names.add_argument("name", help="Model name in PascalCase")
    names.add_argument("--table-name", help="Explicit table name override")

    subparsers.add_parser("stubs", help="List available stubs")

    return parser


def main(argv=None) -> int:
    """Run the CLI and return an exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    logger.debug("Parsed arguments: %s", args)

    return CLIHandler().run(args)


if __name__ == "__main__":
    sys.exit(main())
