"""Main CLI entry point for the kitty-xml-validator command-line tool.

Validates the tag nesting of one document and prints either the success
sentence or one line per diagnostic.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from kitty_xml_validator import __version__
from kitty_xml_validator.api.validator import XMLTagValidator
from kitty_xml_validator.character.reader import InputReadError
from kitty_xml_validator.shared.config import ConfigError, ValidatorConfig
from kitty_xml_validator.shared.logging import configure_logging, get_logger
from kitty_xml_validator.shared.result import ValidationResult

EXIT_OK = 0
EXIT_FAILURE = 1


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="kitty-xml-validator",
        description="Check that the tags of an XML document are properly nested"
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parser.add_argument(
        "path",
        type=Path,
        help="XML file to validate"
    )
    parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        help="Output format (default: text, or the config file's choice)"
    )
    parser.add_argument(
        "--encoding", "-e",
        help="Decode the file with this encoding instead of detecting it"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file"
    )
    parser.add_argument(
        "--fail-on-errors",
        action="store_true",
        help="Exit with status 1 when the document is not well-formed"
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    verbosity.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def load_config(args: argparse.Namespace) -> ValidatorConfig:
    """Build the effective configuration from the config file and flags.

    Raises:
        ConfigError: If the config file or an override is unusable
    """
    config = ValidatorConfig.from_file(args.config) if args.config else ValidatorConfig()

    overrides = {}
    if args.encoding:
        overrides["reader__encoding"] = args.encoding
    if args.format:
        overrides["report__output_format"] = args.format
    if args.fail_on_errors:
        overrides["report__fail_on_errors"] = True

    return config.override(**overrides) if overrides else config


def format_result(result: ValidationResult, format_type: str) -> str:
    """Format a validation result for output; always newline-terminated."""
    if format_type == "json":
        return json.dumps(result.to_dict(), indent=2) + "\n"

    report = result.report
    return report if report.endswith("\n") else report + "\n"


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, quiet=args.quiet)

    logger = get_logger(__name__, None, "cli")

    try:
        config = load_config(args)
    except ConfigError as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_FAILURE

    validator = XMLTagValidator(config)
    logger.info("Parsing XML file", extra={"file_path": str(args.path)})

    try:
        result = validator.validate_file(args.path)
    except InputReadError as e:
        print(f"Error reading file: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT

    sys.stdout.write(format_result(result, config.report.output_format))

    if config.report.fail_on_errors and not result.is_well_formed:
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
