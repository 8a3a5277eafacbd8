"""Utilities and constants for working with strings."""

import textwrap
from typing import Any, List

import termcolor
from typing_extensions import get_origin

USAGE_PREFIX = "usage: "
DEFAULT_WIDTH = 80


def dedent(text: str) -> str:
    """Same as textwrap.dedent, but ignores the first line."""
    first_line, line_break, rest = text.partition("\n")
    if line_break == "":
        return textwrap.dedent(text)
    return f"{first_line.strip()}\n{textwrap.dedent(rest)}"


def remove_single_line_breaks(helptext: str) -> str:
    lines = helptext.split("\n")
    output_parts: List[str] = []
    for line in lines:
        # Remove trailing whitespace.
        line = line.rstrip()

        # Empty line.
        if len(line) == 0:
            prev_is_break = len(output_parts) >= 1 and output_parts[-1] == "\n"
            if not prev_is_break:
                output_parts.append("\n")
            output_parts.append("\n")

        else:
            if not line[0].isalpha():
                output_parts.append("\n")
            prev_is_break = len(output_parts) >= 1 and output_parts[-1] == "\n"
            if len(output_parts) >= 1 and not prev_is_break:
                output_parts.append(" ")
            output_parts.append(line)

    return "".join(output_parts).strip()


def wrap_words(text: str, width: int, indent: str) -> List[str]:
    """Word-wrap `text`, indenting every line but the first. Words are never
    broken, so a single long word can exceed `width`."""
    return textwrap.wrap(
        text,
        width=width,
        subsequent_indent=indent,
        break_long_words=False,
        break_on_hyphens=False,
    )


def type_to_string(typ: Any) -> str:
    """Human-readable type name for usage text.

    int => 'int'
    List[int] => 'List[int]'
    Literal['a', 'b'] => "Literal['a', 'b']"
    """
    if get_origin(typ) is None and hasattr(typ, "__name__"):
        return typ.__name__
    return repr(typ).replace("typing_extensions.", "").replace("typing.", "")


def format_error(x: str) -> str:
    return termcolor.colored(x, color="red", attrs=["bold"])
