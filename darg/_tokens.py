"""Predicates and splitting helpers for raw command-line tokens.

Everything here is pure: no helper raises, and absent values are reported as
`None` rather than empty strings so that `--name=` (empty value) and `--name` (no
value) stay distinguishable.
"""

from typing import Optional, Sequence, Tuple

END_OF_OPTIONS = "--"


def is_short_option(token: str) -> bool:
    """`-x`, `-xyz`. A lone `-` is not an option."""
    return len(token) > 1 and token[0] == "-" and token[1] != "-"


def is_long_option(token: str) -> bool:
    """`--xyz`. Neither `--` nor `---x` are long options."""
    return len(token) > 2 and token[:2] == "--" and token[2] != "-"


def is_option(token: str) -> bool:
    return is_short_option(token) or is_long_option(token)


def option_to_name(token: str) -> Optional[str]:
    """Strip the leading dashes from an option token.

    '--opt' => 'opt'
    '-o' => 'o'
    'opt' => None
    """
    if is_long_option(token):
        return token[2:]
    if is_short_option(token):
        return token[1:]
    return None


def name_to_option(name: str) -> Optional[str]:
    """Canonical command-line form of an option name.

    'opt' => '--opt'
    'o' => '-o'
    '' => None
    """
    if len(name) == 0:
        return None
    if len(name) == 1:
        return "-" + name
    return "--" + name


def split_option(token: str) -> Tuple[str, Optional[str]]:
    """Split a token on its first `=`.

    '--foo=bar' => ('--foo', 'bar')
    '--foo=' => ('--foo', '')
    '--foo' => ('--foo', None)
    """
    head, sep, tail = token.partition("=")
    return head, (tail if sep else None)


def split_args(tokens: Sequence[str]) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """Split a token sequence at the first standalone `--`. The separator itself is
    dropped; everything after it is returned verbatim."""
    tokens = tuple(tokens)
    try:
        index = tokens.index(END_OF_OPTIONS)
    except ValueError:
        return tokens, ()
    return tokens[:index], tokens[index + 1 :]
