"""
Command-line interface for complexitylens.

Batch mode (``scan``) reports every function in a file or directory;
interactive mode (``at``) reports the function enclosing an offset.
"""

import argparse
import dataclasses
import logging
import os
import sys
from typing import Optional, List

from complexitylens import __version__
from complexitylens.config import (
    ConfigStore,
    ScanConfig,
    create_default_config,
    find_config,
    load_scan_config,
)
from complexitylens.core.engine import AnalysisEngine
from complexitylens.formatters import get_formatter
from complexitylens.parsers import list_supported_languages

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="complexitylens",
        description="Cyclomatic complexity per function for JavaScript and TypeScript.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  complexitylens scan ./src                   # Scan a directory
  complexitylens scan app.js --format json    # Output as JSON
  complexitylens scan . --fail-at 20          # Exit 1 if any function reaches 20
  complexitylens at app.ts 1234               # Function enclosing offset 1234
  complexitylens init                         # Create config file
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Scan command
    scan_parser = subparsers.add_parser("scan", help="Report complexity of every function")
    scan_parser.add_argument(
        "target",
        nargs="?",
        default=".",
        help="Target file or directory to scan (default: current directory)",
    )
    _add_common_options(scan_parser)
    scan_parser.add_argument(
        "-o", "--output",
        help="Output file (default: stdout)",
    )
    scan_parser.add_argument(
        "--fail-at",
        type=int,
        metavar="N",
        help="Exit with status 1 if any function has complexity N or more",
    )
    scan_parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    # At command
    at_parser = subparsers.add_parser("at", help="Report the function enclosing an offset")
    at_parser.add_argument("file", help="Source file")
    at_parser.add_argument("offset", type=int, help="Character offset into the file")
    at_parser.add_argument(
        "-l", "--language",
        help="Language tag (default: detected from the file extension)",
    )
    _add_common_options(at_parser)
    at_parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    # Init command
    init_parser = subparsers.add_parser("init", help="Create a configuration file")
    init_parser.add_argument(
        "-f", "--force",
        action="store_true",
        help="Overwrite existing config file",
    )

    # Languages command
    subparsers.add_parser("languages", help="List supported languages")

    return parser


def _add_common_options(parser: argparse.ArgumentParser):
    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
    )
    parser.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        default=None,
        help="Output format (default: from config, else text)",
    )
    parser.add_argument(
        "--count-logical",
        action="store_true",
        help="Count && || ?? as branch points",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )


def _load_config(args: argparse.Namespace, start_dir: str) -> ScanConfig:
    """Load configuration and apply command-line overrides."""
    path = args.config or find_config(start_dir)
    config = load_scan_config(path) if path else ScanConfig()

    if args.count_logical:
        config.complexity = dataclasses.replace(config.complexity, count_logical_operators=True)
    if args.format:
        config.output.format = args.format
    if args.verbose:
        config.output.verbose = True
    return config


def cmd_scan(args: argparse.Namespace) -> int:
    """Execute the scan command."""
    config = _load_config(args, args.target)
    engine = AnalysisEngine(ConfigStore.static(config))

    logger.info("Scanning %s", os.path.abspath(args.target))
    result = engine.scan(args.target)

    formatter = get_formatter(
        config.output.format,
        use_color=config.output.color and not args.no_color and not args.output,
        verbose=config.output.verbose,
        config=config.complexity,
    )
    output = formatter.format_result(result)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
        if config.output.format == "text":
            print(f"Results written to {args.output}")
    else:
        print(output)

    if args.fail_at is not None and result.functions_at_or_above(args.fail_at):
        return 1
    return 0


def cmd_at(args: argparse.Namespace) -> int:
    """Execute the at command."""
    config = _load_config(args, args.file)
    engine = AnalysisEngine(ConfigStore.static(config))

    language = args.language or engine.detect_language(args.file)
    if language is None:
        print(f"Cannot detect language of {args.file}; use --language", file=sys.stderr)
        return 1

    with open(args.file, "r", encoding="utf-8", errors="replace") as f:
        text = f.read()

    highlight = engine.highlight(text, language, args.offset)
    if highlight is None:
        print(f"No function encloses offset {args.offset} in {args.file}", file=sys.stderr)
        return 1

    formatter = get_formatter(
        config.output.format,
        use_color=config.output.color and not args.no_color,
        config=config.complexity,
    )
    print(formatter.format_highlight(args.file, highlight))
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    """Execute the init command."""
    config_file = ".complexitylens.yaml"

    if os.path.exists(config_file) and not args.force:
        print(f"Configuration file {config_file} already exists.")
        print("Use --force to overwrite.")
        return 1

    content = create_default_config()

    with open(config_file, "w", encoding="utf-8") as f:
        f.write(content)

    print(f"Created configuration file: {config_file}")
    return 0


def cmd_languages(args: argparse.Namespace) -> int:
    """Execute the languages command."""
    for language in list_supported_languages():
        print(language)
    return 0


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    _configure_logging(getattr(args, "verbose", False))

    try:
        if args.command == "scan":
            return cmd_scan(args)
        elif args.command == "at":
            return cmd_at(args)
        elif args.command == "init":
            return cmd_init(args)
        elif args.command == "languages":
            return cmd_languages(args)
        else:
            parser.print_help()
            return 0

    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if os.environ.get("DEBUG"):
            raise
        return 1


if __name__ == "__main__":
    sys.exit(main())
