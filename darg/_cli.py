"""Core public API."""

from __future__ import annotations

import pathlib
import sys
from typing import Optional, Sequence, Type, TypeVar

from . import _strings, _tokens
from ._errors import ArgParseError
from ._parsers import ParserSpecification

OutT = TypeVar("OutT")

_HELP_NAMES = ("help", "h")


def parse_args(cls: Type[OutT], args: Sequence[str]) -> OutT:
    """Populate an instance of `cls` from `args`.

    Unlike `cli()`, this never prints or exits: bad input is reported by raising an
    `ArgParseError` subclass, and broken declarations by raising `StructuralError`.

    Args:
        cls: Dataclass whose fields and methods are tagged with `darg.conf.option()`
            and `darg.conf.argument()`.
        args: Tokens to parse. The program name should not be included.

    Returns:
        The populated instance.
    """
    return ParserSpecification.from_class(cls).parse(args)


def usage_string(cls: Type, prog: str, width: int = _strings.DEFAULT_WIDTH) -> str:
    """Get the usage text for `cls`, word-wrapped to `width` columns.

    Options are listed first, by canonical name, followed by the positional
    arguments. The result starts with `usage: ` and ends with a newline.
    """
    return ParserSpecification.from_class(cls).usage(prog, width=width)


def help_string(
    cls: Type,
    prog: str,
    width: int = _strings.DEFAULT_WIDTH,
    description: Optional[str] = None,
) -> str:
    """Get the full help text for `cls`: usage, description, and one line per
    argument and option. If `description` is not specified, the class docstring is
    used."""
    return ParserSpecification.from_class(cls).help(
        prog, width=width, description=description
    )


def cli(
    cls: Type[OutT],
    *,
    prog: Optional[str] = None,
    args: Optional[Sequence[str]] = None,
    description: Optional[str] = None,
    add_help: bool = True,
    console_outputs: bool = True,
) -> OutT:
    """Populate an instance of `cls` from the command line.

    This is a thin front-end over `parse_args()`: errors are reported on stderr
    together with the usage text, followed by `SystemExit(2)`.

    Args:
        cls: Dataclass whose fields and methods are tagged with `darg.conf.option()`
            and `darg.conf.argument()`.
        prog: The name of the program to display in the usage text. If not specified,
            the script filename is used.
        args: If provided, parse arguments from this sequence of strings instead of
            the command line.
        description: Description shown in the help text. If not specified, the class
            docstring is used.
        add_help: Respond to `-h`/`--help` by printing the help text and exiting, as
            long as `cls` doesn't declare `help` or `h` itself.
        console_outputs: If set to False, suppresses error and help messages.

    Returns:
        The populated instance.
    """
    parser_spec = ParserSpecification.from_class(cls)
    if prog is None:
        prog = pathlib.Path(sys.argv[0]).name
    if args is None:
        args = sys.argv[1:]
    args = list(args)

    if add_help and all(parser_spec.find_option(name) is None for name in _HELP_NAMES):
        head, _ = _tokens.split_args(args)
        if any(
            _tokens.option_to_name(_tokens.split_option(token)[0]) in _HELP_NAMES
            for token in head
        ):
            if console_outputs:
                print(parser_spec.help(prog, description=description), end="")
            raise SystemExit(0)

    try:
        return parser_spec.parse(args)
    except ArgParseError as e:
        if console_outputs:
            print(parser_spec.usage(prog), end="", file=sys.stderr)
            print(_strings.format_error(f"error: {e.message}"), file=sys.stderr)
        raise SystemExit(2) from e
