import dataclasses
from typing import Any, Callable, Optional, Tuple, TypeVar, Union

from .._multiplicity import EXACTLY_ONE, Multiplicity

HandlerT = TypeVar("HandlerT", bound=Callable)

HANDLER_MARKERS_ATTR = "__darg_configuration__"
"""Attribute used to attach configuration objects to decorated handler methods."""


def _attach(configuration: Any, handler: HandlerT) -> HandlerT:
    existing = getattr(handler, HANDLER_MARKERS_ATTR, ())
    setattr(handler, HANDLER_MARKERS_ATTR, existing + (configuration,))
    return handler


@dataclasses.dataclass(frozen=True)
class _OptionConfiguration:
    names: Tuple[str, ...]
    help: Optional[str]
    metavar: Optional[str]

    def __call__(self, handler: HandlerT) -> HandlerT:
        return _attach(self, handler)


@dataclasses.dataclass(frozen=True)
class _ArgumentConfiguration:
    name: str
    multiplicity: Multiplicity
    help: Optional[str]

    def __call__(self, handler: HandlerT) -> HandlerT:
        return _attach(self, handler)


def option(
    *names: str,
    help: Optional[str] = None,
    metavar: Optional[str] = None,
) -> Any:
    """Returns a metadata object that marks a field as a named option.

    ```python
    threads: Annotated[int, darg.conf.option("threads", "t")] = 1
    ```

    The same object can decorate a method, which turns the method into a handler
    that is invoked every time the option occurs. A method taking only `self`
    consumes no value; a method taking one extra argument receives the raw token.

    Arguments:
        names: Aliases for the option, without leading hyphens. The first one is
            canonical and is used when rendering usage text. Single-character names
            are written as `-x`, longer ones as `--xyz`.
        help: Helptext for this option. The field docstring is used by default.
        metavar: Name of the option's value in usage messages. Derived from the
            field type by default.

    Returns:
        Object to attach via `typing.Annotated[]`, or to use as a decorator.
    """
    return _OptionConfiguration(names=tuple(names), help=help, metavar=metavar)


def argument(
    name: str,
    multiplicity: Union[Multiplicity, int] = EXACTLY_ONE,
    *,
    help: Optional[str] = None,
) -> Any:
    """Returns a metadata object that marks a field as a positional argument.

    ```python
    files: Annotated[List[str], darg.conf.argument("file", darg.ONE_OR_MORE)]
    ```

    Positional arguments are filled in declaration order from the tokens left over
    once all options have been consumed.

    Arguments:
        name: Display name used in usage and help messages.
        multiplicity: How many values the argument takes. An integer `n` is
            shorthand for `Multiplicity.exactly(n)`.
        help: Helptext for this argument. The field docstring is used by default.

    Returns:
        Object to attach via `typing.Annotated[]`, or to use as a decorator.
    """
    if isinstance(multiplicity, int):
        multiplicity = Multiplicity.exactly(multiplicity)
    return _ArgumentConfiguration(name=name, multiplicity=multiplicity, help=help)
