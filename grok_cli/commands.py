"""
Command parsing for the interactive prompt.

Input lines look like ``<command>: <data>`` or the bare word ``exit``.
"""

from dataclasses import dataclass

SEPARATOR = ": "
BAD_FORMAT = "bad format"
UNKNOWN_COMMAND = "unknown command"


@dataclass(frozen=True)
class Ask:
    question: str


@dataclass(frozen=True)
class GenerateImage:
    prompt: str


@dataclass(frozen=True)
class Analyze:
    raw_numbers: str


@dataclass(frozen=True)
class Exit:
    pass


@dataclass(frozen=True)
class Invalid:
    reason: str


Command = Ask | GenerateImage | Analyze | Exit | Invalid

KEYWORDS = {
    "ask": Ask,
    "image": GenerateImage,
    "analyze": Analyze,
}


def parse_command(line: str) -> Command:
    """
    Parse one input line into a Command.

    Only the exact, trimmed word ``exit`` quits; ``exit: ...`` is an
    unknown command. Keywords are matched case-insensitively and the
    argument is everything after the first separator, untouched.
    """
    text = line.strip()
    if text == "exit":
        return Exit()

    keyword, sep, argument = text.partition(SEPARATOR)
    if not sep:
        return Invalid(BAD_FORMAT)

    command_cls = KEYWORDS.get(keyword.lower())
    if command_cls is None:
        return Invalid(UNKNOWN_COMMAND)
    return command_cls(argument)


def find_invalid_numbers(raw: str) -> list[str]:
    """
    Return the comma-separated pieces of raw that don't parse as floats.

    Digit-group underscores ("1_000") are rejected even though float()
    accepts them.
    """
    invalid = []
    for piece in raw.split(","):
        if "_" in piece:
            invalid.append(piece)
            continue
        try:
            float(piece.strip())
        except ValueError:
            invalid.append(piece)
    return invalid
