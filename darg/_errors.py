"""Exception types.

Two families are kept apart on purpose: `StructuralError` flags a broken
declaration and is raised while the descriptor model is being built, while
`ArgParseError` and its subclasses describe bad command-line input.
"""

from typing import Any, Sequence


class StructuralError(Exception):
    """Raised when a configuration type cannot be turned into a valid descriptor
    model: unsupported field types, invalid multiplicities, fields tagged twice,
    malformed option names, etc."""


class ArgParseError(Exception):
    """Base class for errors caused by command-line input."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnknownOptionError(ArgParseError):
    def __init__(self, option: str) -> None:
        super().__init__(f"Invalid option '{option}'")
        self.option = option


class MissingOptionValueError(ArgParseError):
    def __init__(self, option: str) -> None:
        super().__init__(f"Expected argument for option '{option}'")
        self.option = option


class UnexpectedValueError(ArgParseError):
    def __init__(self, option: str) -> None:
        super().__init__(f"Option '{option}' does not take an argument")
        self.option = option


class ConversionError(ArgParseError):
    """A token could not be converted to the type of its target field. The
    converter's own diagnostic is kept as the exception's `__cause__`."""

    def __init__(self, token: str, target: str, diagnostic: Any) -> None:
        super().__init__(f"Invalid value '{token}' for {target}: {diagnostic}")
        self.token = token
        self.target = target


class MissingArgumentError(ArgParseError):
    def __init__(self, argument: str) -> None:
        super().__init__(f"Multiplicity unsatisfied for '{argument}' argument")
        self.argument = argument


class TooManyArgumentsError(ArgParseError):
    def __init__(self, leftover: Sequence[str]) -> None:
        super().__init__("Too many arguments specified")
        self.leftover = tuple(leftover)
