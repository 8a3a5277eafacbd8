"""Usage and help text rendering. Output is plain text; nothing here depends on
parse state, so both renderers can be run ahead of time."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Tuple

from . import _strings, _tokens

if TYPE_CHECKING:
    from ._parsers import ArgumentSpec, OptionSpec, ParserSpecification

# Invocations wider than this get their helptext on the following line.
_MAX_INVOCATION_WIDTH = 24


def format_usage(
    parser_spec: ParserSpecification, prog: str, width: Optional[int] = None
) -> str:
    """Single usage paragraph: `usage: prog [--opt=<int>] ... arg [arg...]`.

    Continuation lines are indented to one column past the program name. The
    result always ends in a newline.
    """
    if width is None:
        width = _strings.DEFAULT_WIDTH

    prefix = _strings.USAGE_PREFIX + prog
    parts = [prefix]
    for option in parser_spec.options:
        parts.append(_option_usage(option))
    for argument in parser_spec.arguments:
        parts.append(argument.usage())

    lines = _strings.wrap_words(
        " ".join(parts), width=width, indent=" " * (len(prefix) + 1)
    )
    return "\n".join(lines) + "\n"


def _option_usage(option: OptionSpec) -> str:
    out = "[" + _tokens.name_to_option(option.canonical_name)  # type: ignore
    if option.has_value:
        assert option.field.metavar is not None
        out += "=" + option.field.metavar
    return out + "]"


def format_help(
    parser_spec: ParserSpecification,
    prog: str,
    width: Optional[int] = None,
    description: Optional[str] = None,
) -> str:
    """Usage, then the description, then one section each for positional arguments
    and options."""
    if width is None:
        width = _strings.DEFAULT_WIDTH
    if description is None:
        description = parser_spec.description

    groups: List[Tuple[str, List[Tuple[str, Optional[str]]]]] = [
        (
            "positional arguments",
            [_argument_row(argument) for argument in parser_spec.arguments],
        ),
        ("options", [_option_row(option) for option in parser_spec.options]),
    ]

    # Compute column width for invocations.
    widths = [len(invocation) for _, rows in groups for invocation, _ in rows]
    invocation_width = min(max(widths, default=0), _MAX_INVOCATION_WIDTH)
    helptext_indent = " " * (2 + invocation_width + 2)

    out = [format_usage(parser_spec, prog, width=width)]
    if description:
        for paragraph in description.split("\n\n"):
            out.append("\n")
            out.extend(
                line + "\n"
                for line in _strings.wrap_words(
                    " ".join(paragraph.split()), width=width, indent=""
                )
            )

    for group_name, rows in groups:
        if len(rows) == 0:
            continue
        out.append("\n")
        out.append(group_name + ":\n")
        for invocation, helptext in rows:
            if helptext is None:
                out.append(f"  {invocation}\n")
                continue

            helptext_lines = _strings.wrap_words(
                helptext,
                width=max(width - len(helptext_indent), 1),
                indent="",
            )
            if len(invocation) > invocation_width:
                # Invocation and helptext on separate lines.
                out.append(f"  {invocation}\n")
            else:
                # Invocation and first line of helptext on the same line.
                out.append(
                    f"  {invocation.ljust(invocation_width)}  {helptext_lines[0]}\n"
                )
                helptext_lines = helptext_lines[1:]
            out.extend(helptext_indent + line + "\n" for line in helptext_lines)

    return "".join(out)


def _option_row(option: OptionSpec) -> Tuple[str, Optional[str]]:
    """('--threads, -t <int>', 'Number of threads.')"""
    invocation = ", ".join(option.invocations())
    if option.has_value:
        invocation += " " + option.field.metavar  # type: ignore
    return invocation, _clean_helptext(option.field.helptext)


def _argument_row(argument: ArgumentSpec) -> Tuple[str, Optional[str]]:
    return argument.name, _clean_helptext(argument.field.helptext)


def _clean_helptext(helptext: Optional[str]) -> Optional[str]:
    if helptext is None or helptext.strip() == "":
        return None
    return " ".join(helptext.split())
