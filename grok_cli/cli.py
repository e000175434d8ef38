"""
Grok CLI - Interactive command loop.

This layer reads one line at a time, dispatches it to the SDK layer and
prints the result. It handles:
- Command parsing and the local analyze pre-check
- TTY detection for the banner and prompt
- Rendering results and sanitized errors
- Process setup (.env, logging, exit codes)
"""

import argparse
import os
import sys
from typing import Any, TextIO

from dotenv import load_dotenv

from grok_cli import __version__
from grok_cli.commands import (
    BAD_FORMAT,
    Analyze,
    Ask,
    Command,
    Exit,
    GenerateImage,
    Invalid,
    find_invalid_numbers,
    parse_command,
)
from grok_cli.core.client import APIError, CLIError, InputFormatError
from grok_cli.core.types import AnalysisResult
from grok_cli.logging import DEFAULT_LOG_FILE, DEFAULT_LOG_LEVEL, get_logger, setup_logging
from grok_cli.sdk import GrokClient

# =============================================================================
# Output Helpers
# =============================================================================


BANNER = """Welcome to the Grok AI Chatbot!
Commands:
  ask: <question>          - Ask a question
  image: <description>     - Generate an image URL
  analyze: <numbers>       - Analyze comma-separated numbers (e.g., 1,2,3)
  exit                     - Quit the app"""

PROMPT = "> "
FAREWELL = "Goodbye!"
BAD_FORMAT_MESSAGE = "Invalid format. Use <command>: <data> or 'exit'"
UNKNOWN_COMMAND_MESSAGE = "Unknown command. Available: ask, image, analyze, exit"
INVALID_NUMBERS_MESSAGE = "Invalid number format in data"


def format_error(error: CLIError) -> str:
    """Render an error for the user."""
    return f"Error: {error.message}"


def format_analysis(metrics: dict[str, float]) -> str:
    """Render analysis metrics sorted by name with two decimals."""
    lines = ["Analysis Results:"]
    for name, value in AnalysisResult(metrics).sorted_items():
        lines.append(f"  {name}: {value:.2f}")
    return "\n".join(lines)


def env_flag(name: str) -> bool:
    """Read a boolean environment variable."""
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


# =============================================================================
# Command Loop
# =============================================================================


class CommandLoop:
    """
    Read-dispatch-render loop over a pair of text streams.

    The loop is stateless between lines: every command is parsed, sent
    and rendered on its own.
    """

    def __init__(
        self,
        client: GrokClient,
        logger: Any = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        interactive: bool | None = None,
        strict_analyze: bool = False,
    ):
        self.client = client
        self.logger = logger or get_logger(__name__)
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.interactive = self.stdin.isatty() if interactive is None else interactive
        self.strict_analyze = strict_analyze

    def write(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def read_line(self) -> str | None:
        """Read the next line, or None at end of input."""
        if self.interactive:
            self.stdout.write(PROMPT)
            self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None
        return line

    def run(self) -> None:
        """
        Run until ``exit`` or end of input.

        Raises:
            OSError: If reading from stdin fails
            UnicodeDecodeError: If stdin is not valid text

        """
        if self.interactive:
            self.write(BANNER)

        while True:
            line = self.read_line()
            if line is None:
                self.logger.info("end of input")
                if self.interactive:
                    self.write()
                return
            if not self.handle(parse_command(line)):
                return

    def handle(self, command: Command) -> bool:
        """Dispatch one command. Returns False once the loop should stop."""
        if isinstance(command, Exit):
            self.write(FAREWELL)
            return False

        if isinstance(command, Invalid):
            self.logger.info("invalid command", reason=command.reason)
            self.write(BAD_FORMAT_MESSAGE if command.reason == BAD_FORMAT else UNKNOWN_COMMAND_MESSAGE)
            return True

        try:
            if isinstance(command, Ask):
                self.write(f"Answer: {self.client.ask(command.question)}")
            elif isinstance(command, GenerateImage):
                self.write(f"Image URL: {self.client.generate_image(command.prompt)}")
            elif isinstance(command, Analyze):
                self.handle_analyze(command)
        except APIError as e:
            self.write(format_error(e))
        return True

    def precheck_analyze(self, raw_numbers: str) -> None:
        """
        Check that every comma-separated piece parses as a number.

        Raises:
            InputFormatError: Listing the pieces that don't parse

        """
        invalid = find_invalid_numbers(raw_numbers)
        if invalid:
            for piece in invalid:
                self.logger.warning("invalid number in analyze input", value=piece)
            raise InputFormatError(INVALID_NUMBERS_MESSAGE, details={"values": invalid})

    def handle_analyze(self, command: Analyze) -> None:
        # Non-strict mode reports bad numbers but still lets the API decide
        try:
            self.precheck_analyze(command.raw_numbers)
        except InputFormatError as e:
            self.write(format_error(e))
            if self.strict_analyze:
                return

        metrics = self.client.analyze(command.raw_numbers)
        self.write(format_analysis(metrics))


# =============================================================================
# Main CLI
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="grok",
        description="Grok CLI - Interactive client for the Grok API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands (typed at the prompt):
  ask: What is 2 + 2?
  image: A fluffy cat
  analyze: 1, 2, 3, 4, 5
  exit

Environment:
  GROK_API_KEY         API key (required)
  GROK_BASE_URL        API base URL
  GROK_TIMEOUT         Request timeout in seconds
  GROK_LOG_FILE        Diagnostic log file (default: grok_app.log)
  GROK_LOG_LEVEL       Log level (default: INFO)
  GROK_STRICT_ANALYZE  Skip analyze requests with invalid numbers
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main() -> None:
    """Main CLI entry point."""
    create_parser().parse_args()
    load_dotenv()

    log_file = os.environ.get("GROK_LOG_FILE") or DEFAULT_LOG_FILE
    try:
        setup_logging(log_file, os.environ.get("GROK_LOG_LEVEL") or DEFAULT_LOG_LEVEL)
    except (OSError, ValueError) as e:
        print(f"Error setting up log file {log_file}: {e}", file=sys.stderr)
        sys.exit(1)

    logger = get_logger(__name__)

    try:
        client = GrokClient(logger=logger)
    except CLIError as e:
        print(format_error(e), file=sys.stderr)
        sys.exit(1)

    loop = CommandLoop(client, logger=logger, strict_analyze=env_flag("GROK_STRICT_ANALYZE"))
    try:
        loop.run()
    except KeyboardInterrupt:
        print(f"\n{FAREWELL}")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("error reading input", error=repr(e))
        print(f"Error reading input: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
