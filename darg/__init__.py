from . import conf, extras
from ._cli import cli, help_string, parse_args, usage_string
from ._errors import (
    ArgParseError,
    ConversionError,
    MissingArgumentError,
    MissingOptionValueError,
    StructuralError,
    TooManyArgumentsError,
    UnexpectedValueError,
    UnknownOptionError,
)
from ._multiplicity import (
    EXACTLY_ONE,
    ONE_OR_MORE,
    OPTIONAL,
    UNBOUNDED,
    ZERO_OR_MORE,
    Multiplicity,
)
from ._parsers import ParserSpecification
from ._warnings import DargWarning

__all__ = [
    "conf",
    "extras",
    "cli",
    "help_string",
    "parse_args",
    "usage_string",
    "ArgParseError",
    "ConversionError",
    "MissingArgumentError",
    "MissingOptionValueError",
    "StructuralError",
    "TooManyArgumentsError",
    "UnexpectedValueError",
    "UnknownOptionError",
    "EXACTLY_ONE",
    "ONE_OR_MORE",
    "OPTIONAL",
    "UNBOUNDED",
    "ZERO_OR_MORE",
    "Multiplicity",
    "ParserSpecification",
    "DargWarning",
]
