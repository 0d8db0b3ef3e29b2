"""
tracegrid.cli - Command-line interface.

Main entry point for the tracegrid CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tracegrid import __version__
from tracegrid.commands import catalog_cmd, matrix_cmd, summary_cmd


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tracegrid",
        description="Traceability matrices for engineering model artifacts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tracegrid matrix                          # CSV matrix to stdout
  tracegrid matrix --output trace.csv       # Write CSV file
  tracegrid matrix --format json            # Full matrix as JSON
  tracegrid matrix --relation-type implements --only valid
  tracegrid summary                         # Coverage, orphans, unlinked
  tracegrid catalog                         # Relation keywords

Configuration:
  .tracegrid.toml is searched upward from the current directory.

For detailed command help: tracegrid <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"tracegrid {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "--symbols",
        type=Path,
        help="Override the symbol index file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # matrix command
    matrix_parser = subparsers.add_parser(
        "matrix",
        help="Generate traceability matrix",
    )
    matrix_parser.add_argument(
        "--format",
        choices=["csv", "json", "markdown"],
        help="Output format (default: from config, csv)",
    )
    matrix_parser.add_argument(
        "--output",
        type=Path,
        help="Output file path (default: stdout)",
        metavar="PATH",
    )
    _add_filter_arguments(matrix_parser)
    matrix_parser.add_argument(
        "--no-metadata",
        action="store_true",
        help="Omit the metadata block",
    )
    matrix_parser.add_argument(
        "--no-summary",
        action="store_true",
        help="Omit the summary block",
    )

    # summary command
    summary_parser = subparsers.add_parser(
        "summary",
        help="Show coverage, orphaned and unlinked symbols",
    )
    _add_filter_arguments(summary_parser)
    summary_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output JSON",
    )

    # catalog command
    catalog_parser = subparsers.add_parser(
        "catalog",
        help="List relation keywords",
    )
    catalog_parser.add_argument(
        "--by-file-type",
        action="store_true",
        help="Group relation keywords by artifact file kind",
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version",
    )

    # completion command
    completion_parser = subparsers.add_parser(
        "completion",
        help="Shell tab-completion setup",
    )
    completion_parser.add_argument(
        "--shell",
        choices=["bash", "zsh", "fish", "tcsh"],
        help="Generate completion script for a specific shell",
    )

    return parser


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--relation-type",
        dest="relationship_types",
        action="append",
        metavar="NAME",
        help="Only include this relation (repeatable)",
    )
    parser.add_argument(
        "--source-type",
        dest="source_types",
        action="append",
        metavar="KIND",
        help="Only include rows of this kind (repeatable)",
    )
    parser.add_argument(
        "--target-type",
        dest="target_types",
        action="append",
        metavar="KIND",
        help="Only include columns of this kind (repeatable)",
    )
    parser.add_argument(
        "--only",
        choices=["valid", "broken", "empty"],
        help="Keep only rows/columns touching valid, broken or empty cells",
    )


def configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install tracegrid[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)
    configure_logging(args)

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "matrix":
            return matrix_cmd.run(args)
        elif args.command == "summary":
            return summary_cmd.run(args)
        elif args.command == "catalog":
            return catalog_cmd.run(args)
        elif args.command == "version":
            print(f"tracegrid {__version__}")
            return 0
        elif args.command == "completion":
            return completion_command(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


def completion_command(args: argparse.Namespace) -> int:
    """Handle completion command - generate shell completion scripts."""
    try:
        import argcomplete  # noqa: F401
    except ImportError:
        print("Error: argcomplete not installed.", file=sys.stderr)
        print("Install with: pip install tracegrid[completion]", file=sys.stderr)
        return 1

    if args.shell:
        import subprocess

        cmd = ["register-python-argcomplete"]
        if args.shell in ("fish", "tcsh"):
            cmd.append(f"--shell={args.shell}")
        cmd.append("tracegrid")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError:
            print("Error: register-python-argcomplete not found.", file=sys.stderr)
            return 1
        if result.returncode != 0:
            print(f"Error generating completion script: {result.stderr}", file=sys.stderr)
            return 1
        print(result.stdout)
        return 0

    print("""
Shell Completion Setup for tracegrid
====================================

Bash (add to ~/.bashrc):
  eval "$(register-python-argcomplete tracegrid)"

Zsh (add to ~/.zshrc):
  autoload -U bashcompinit
  bashcompinit
  eval "$(register-python-argcomplete tracegrid)"

Fish (add to ~/.config/fish/config.fish):
  register-python-argcomplete --shell fish tracegrid | source
""")
    return 0


if __name__ == "__main__":
    sys.exit(main())
