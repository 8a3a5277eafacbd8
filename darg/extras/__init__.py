"""The :mod:`darg.extras` submodule contains helpers that complement
:func:`darg.cli()`.

Compared to the core interface, APIs here are more likely to be changed or
deprecated."""

from ._serialization import from_yaml, to_yaml
from ._unparse import to_args

__all__ = [
    "from_yaml",
    "to_args",
    "to_yaml",
]
