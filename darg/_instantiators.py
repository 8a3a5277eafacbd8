"""Helper for using type annotations to generate instantiator functions, which map a
single raw token to a value of the annotated type.

Some examples of type annotations and the desired instantiators:
```
    int

        lambda string: int(string)

    Color, where Color is an enum

        lambda string: Color[string]

    Literal["fast", "slow"]

        lambda string: {"fast": "fast", "slow": "slow"}[string]
```

Instantiators raise `ValueError` on malformed input. Wrapping that into a
`ConversionError` is left to the caller, which knows which option or argument the
token was bound to.
"""

import builtins
import dataclasses
import enum
import inspect
import os
import pathlib
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

from typing_extensions import Literal, get_args, get_origin, get_type_hints

from . import _resolver, _strings
from ._errors import StructuralError

# There are cases where typing.Literal doesn't match typing_extensions.Literal:
# https://github.com/python/typing_extensions/pull/148
try:
    from typing import Literal as LiteralAlternate
except ImportError:  # pragma: no cover
    LiteralAlternate = Literal  # type: ignore

Instantiator = Callable[[str], Any]


@dataclasses.dataclass(frozen=True)
class InstantiatorMetadata:
    # Rendered as `<int>`, `<Path>`, etc. unless the type has a fixed set of choices,
    # in which case we use `{a,b,c}`.
    metavar: str
    choices: Optional[Tuple[str, ...]]


_builtin_set = set(
    filter(lambda x: isinstance(x, Hashable), vars(builtins).values())  # type: ignore
)
_unparsable_builtins = (BaseException, dict, frozenset, list, set, tuple)

_bool_from_string: Dict[str, bool] = {"true": True, "false": False}


def is_type_string_converter(typ: Callable) -> bool:
    """Check if type is a string converter, i.e., (arg: Union[str, Any]) -> T."""
    param_count = 0
    has_var_positional = False
    try:
        signature = inspect.signature(typ)
    except ValueError:
        # Extension types might not have a parsable signature. We try to be tolerant
        # in this case.
        return True

    try:
        type_annotations = get_type_hints(typ)
    except (TypeError, NameError):
        type_annotations = {}

    for i, param in enumerate(signature.parameters.values()):
        annotation = type_annotations.get(param.name, param.annotation)
        if i == 0 and annotation not in (str, inspect.Parameter.empty, Any):
            return False
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            has_var_positional = True
        elif param.default is inspect.Parameter.empty and param.kind is not (
            inspect.Parameter.VAR_KEYWORD
        ):
            param_count += 1

    return param_count == 1 or (param_count == 0 and has_var_positional)


def instantiator_from_type(typ: Any) -> Tuple[Instantiator, InstantiatorMetadata]:
    """Build an instantiator for a scalar type.

    Returns two things:
    - An instantiator function, for converting a single token.
    - A metadata structure, used for usage and help text.

    Raises `StructuralError` when `typ` cannot be converted from a string.
    """
    typ, _ = _resolver.unwrap_annotated(typ)
    typ, _ = _resolver.unwrap_optional(typ)

    if typ is Any:
        raise StructuralError("`Any` is not a parsable type.")
    if typ is _resolver.NoneType:
        raise StructuralError("`None` is not a parsable type.")

    # Instantiate os.PathLike annotations using pathlib.Path.
    if typ is os.PathLike:
        typ = pathlib.Path

    if get_origin(typ) in (Literal, LiteralAlternate):
        return _instantiator_from_literal(typ)

    if get_origin(typ) is not None or len(get_args(typ)) > 0:
        raise StructuralError(
            f"{_strings.type_to_string(typ)} is not a scalar type that can be parsed"
            " from a single token."
        )

    if isinstance(typ, type) and issubclass(typ, enum.Enum):
        return _instantiator_from_enum(typ)

    if typ is bool:

        def bool_instantiator(string: str) -> bool:
            try:
                return _bool_from_string[string.lower()]
            except KeyError:
                raise ValueError("expected 'true' or 'false'") from None

        return bool_instantiator, InstantiatorMetadata(
            metavar="{true,false}", choices=("true", "false")
        )

    if typ is bytes:
        return (
            lambda string: bytes(string, encoding="ascii"),
            InstantiatorMetadata(metavar="<bytes>", choices=None),
        )

    # Validate that typ is a `(arg: str) -> T` type converter.
    if typ in _builtin_set:
        if (
            not isinstance(typ, type)
            or typ in (object, type)
            or issubclass(typ, _unparsable_builtins)
        ):
            raise StructuralError(f"{typ} is not a parsable type.")
    elif not callable(typ):
        raise StructuralError(
            f"Expected {typ} to be an `(arg: str) -> T` type converter, but is not"
            " callable."
        )
    elif not is_type_string_converter(typ):
        raise StructuralError(
            f"Expected {typ} to be an `(arg: str) -> T` type converter, but is not"
            " a valid type converter."
        )

    def instantiator_base_case(string: str) -> Any:
        try:
            return typ(string)
        except (TypeError, ArithmeticError) as e:
            raise ValueError(str(e)) from e

    return instantiator_base_case, InstantiatorMetadata(
        metavar=f"<{_strings.type_to_string(typ)}>", choices=None
    )


def _instantiator_from_enum(
    typ: "type[enum.Enum]",
) -> Tuple[Instantiator, InstantiatorMetadata]:
    choices = tuple(member.name for member in typ)

    def enum_instantiator(string: str) -> enum.Enum:
        try:
            return typ[string]
        except KeyError:
            raise ValueError(
                f"invalid choice (choose from {', '.join(choices)})"
            ) from None

    return enum_instantiator, InstantiatorMetadata(
        metavar="{" + ",".join(choices) + "}", choices=choices
    )


def _instantiator_from_literal(typ: Any) -> Tuple[Instantiator, InstantiatorMetadata]:
    value_from_string: Dict[str, Any] = {}
    for value in get_args(typ):
        if isinstance(value, enum.Enum):
            value_from_string[value.name] = value
        elif isinstance(value, bool):
            # Spelled the same way as plain `bool` values.
            value_from_string["true" if value else "false"] = value
        elif isinstance(value, (str, int)):
            value_from_string[str(value)] = value
        else:
            raise StructuralError(
                f"Literal value {value!r} in {typ} cannot be parsed from a token."
            )
    choices = tuple(value_from_string.keys())

    def literal_instantiator(string: str) -> Any:
        try:
            return value_from_string[string]
        except KeyError:
            raise ValueError(
                f"invalid choice (choose from {', '.join(choices)})"
            ) from None

    return literal_instantiator, InstantiatorMetadata(
        metavar="{" + ",".join(choices) + "}", choices=choices
    )
