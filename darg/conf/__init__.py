"""The :mod:`darg.conf` submodule contains helpers for tagging dataclass fields as
options or positional arguments via [PEP 593](https://peps.python.org/pep-0593/)
runtime annotations, and for turning methods into option or argument handlers.
"""

from .._multiplicity import (
    EXACTLY_ONE,
    ONE_OR_MORE,
    OPTIONAL,
    UNBOUNDED,
    ZERO_OR_MORE,
    Multiplicity,
)
from ._confstruct import argument, option

__all__ = [
    "argument",
    "option",
    "Multiplicity",
    "EXACTLY_ONE",
    "ONE_OR_MORE",
    "OPTIONAL",
    "UNBOUNDED",
    "ZERO_OR_MORE",
]
