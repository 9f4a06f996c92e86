"""Command-line interface for modgrapher.

Reads `go mod graph` output from a file or standard input, builds the module
graph and prints it.
"""

import argparse
import contextlib
import io
import sys
from collections.abc import Iterator, Sequence
from typing import TextIO

import structlog

from modgrapher.config import OUTPUT_FORMATS, ModGrapherConfig, load_config
from modgrapher.graph.builder import parse_mod_graph
from modgrapher.graph.errors import ModGraphError
from modgrapher.graph.validator import GraphValidator
from modgrapher.log_config import bind_context, clear_context, configure_logging
from modgrapher.presenter import render_graph

logger = structlog.get_logger(__name__)

STDIN_NAMES = ("", "-")

HELP_MSG = """A tool for viewing a dependency graph of go modules.

Usage: go mod graph | modgrapher OR modgrapher [file]

[file] in args must be a result of 'go mod graph' command output.
"""


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="modgrapher",
        description=HELP_MSG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Read from standard input
  go mod graph | modgrapher

  # Read from a file and print JSON
  modgrapher --format json graph.txt

  # Check graph consistency with debug logging
  modgrapher --verify --debug graph.txt
        """,
    )

    parser.add_argument(
        "file",
        nargs="?",
        default="",
        help="File containing 'go mod graph' output ('-' or omitted for stdin)",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        help="Path to configuration YAML file",
    )

    parser.add_argument(
        "-f",
        "--format",
        type=str,
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (default: text)",
    )

    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check graph consistency before printing it",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug output (DEBUG level)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set logging level (default: WARNING)",
    )

    args = parser.parse_args(argv)

    if args.debug:
        args.log_level = "DEBUG"

    return args


def resolve_config(args: argparse.Namespace) -> ModGrapherConfig:
    """Load configuration and apply command-line overrides.

    Raises:
        FileNotFoundError: If the configuration file doesn't exist
        ValueError: If the configuration is invalid
    """
    config = load_config(args.config)

    overrides: dict[str, object] = {}
    if args.format is not None:
        overrides["output_format"] = args.format
    if args.log_level is not None:
        overrides["logging_level"] = args.log_level
    if args.verify:
        overrides["verify"] = True

    if not overrides:
        return config
    return ModGrapherConfig.model_validate({**config.model_dump(), **overrides})


@contextlib.contextmanager
def open_input(filename: str, encoding: str) -> Iterator[TextIO]:
    """Yield the stream to read, closing named files on exit.

    Newline translation is disabled; the builder splits on "\\n" alone.

    Standard input is never closed here.
    """
    if filename in STDIN_NAMES:
        if isinstance(sys.stdin, io.TextIOWrapper):
            sys.stdin.reconfigure(encoding=encoding, newline="")
        yield sys.stdin
        return

    with open(filename, encoding=encoding, newline="") as f:
        yield f


def _report_failure(message: str) -> None:
    print(message, file=sys.stderr)
    print("", file=sys.stderr)
    print(HELP_MSG, file=sys.stderr)


def run(argv: Sequence[str] | None = None) -> int:
    """Run modgrapher and return the process exit code.

    Args:
        argv: Arguments without the program name

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = parse_args(argv)

    # Keep configuration loading logs off stdout
    configure_logging(args.log_level or "WARNING")

    try:
        config = resolve_config(args)
    except (OSError, ValueError) as e:
        _report_failure(f"invalid configuration: {e}")
        return 1

    configure_logging(config.logging_level, json_logs=config.json_logs)
    source = "stdin" if args.file in STDIN_NAMES else args.file
    bind_context(source=source)

    try:
        with open_input(args.file, config.input_encoding) as stream:
            graph = parse_mod_graph(stream)

        if config.verify:
            report = GraphValidator().validate(graph)
            if not report.is_valid:
                _report_failure(report.summary())
                return 1

        print(render_graph(graph, config.output_format))

    except ModGraphError as e:
        _report_failure(f"failed to parse input: {e}")
        return 1

    except OSError as e:
        logger.error("input_open_failed", error=str(e))
        _report_failure(str(e))
        return 1

    finally:
        clear_context()

    return 0


def main() -> None:
    """Main entry point for the modgrapher command."""
    sys.exit(run())


if __name__ == "__main__":
    main()
