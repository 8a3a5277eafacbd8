"""Abstractions for pulling out 'field' definitions from a configuration type.

A field is either a dataclass field or a handler method that has been tagged with
`darg.conf.option()` or `darg.conf.argument()`. Each one is classified into a
`FieldKind`, which decides how the matching engine binds values to it.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import enum
import inspect
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, Union

from typing_extensions import get_args, get_origin

from . import _docstrings, _instantiators, _resolver, _strings
from ._errors import StructuralError
from .conf._confstruct import (
    HANDLER_MARKERS_ATTR,
    _ArgumentConfiguration,
    _OptionConfiguration,
)

Configuration = Union[_OptionConfiguration, _ArgumentConfiguration]


class FieldKind(enum.Enum):
    FLAG = enum.auto()
    SCALAR = enum.auto()
    SEQUENCE = enum.auto()
    NULLARY_HANDLER = enum.auto()
    UNARY_HANDLER = enum.auto()

    def is_handler(self) -> bool:
        return self in (FieldKind.NULLARY_HANDLER, FieldKind.UNARY_HANDLER)

    def takes_value(self) -> bool:
        return self not in (FieldKind.FLAG, FieldKind.NULLARY_HANDLER)


@dataclasses.dataclass(frozen=True)
class FieldDefinition:
    name: str
    # Annotation with `Annotated[]` stripped. `None` for handler methods.
    typ: Any
    kind: FieldKind
    configuration: Configuration
    helptext: Optional[str]
    # Converts one token. `None` for flags and handlers, which see raw tokens.
    instantiator: Optional[_instantiators.Instantiator]
    metavar: Optional[str]
    # `list` or `tuple`, for sequence fields.
    container: Optional[type] = None


def field_list_from_class(cls: Type) -> List[FieldDefinition]:
    """Tagged fields of a dataclass, followed by its tagged handler methods."""
    if not _resolver.is_dataclass(cls):
        raise StructuralError(f"Expected a dataclass type, but got {cls!r}.")

    field_list: List[FieldDefinition] = []
    for dc_field in _resolver.resolved_fields(cls):
        typ, configurations = _resolver.unwrap_annotated(
            dc_field.type, (_OptionConfiguration, _ArgumentConfiguration)  # type: ignore
        )
        if len(configurations) == 0:
            continue
        configuration = _single_configuration(cls, dc_field.name, configurations)
        if not dc_field.init:
            raise StructuralError(
                f"{cls.__name__}.{dc_field.name} is tagged for parsing but excluded"
                " from __init__."
            )
        field_list.append(
            _field_from_annotation(cls, dc_field.name, typ, configuration)
        )

    for name, method in _resolver.handler_methods(cls, HANDLER_MARKERS_ATTR):
        configuration = _single_configuration(
            cls, name, getattr(method, HANDLER_MARKERS_ATTR)
        )
        field_list.append(_field_from_handler(cls, name, method, configuration))

    return field_list


def _single_configuration(
    cls: Type, name: str, configurations: Tuple[Any, ...]
) -> Configuration:
    options = [c for c in configurations if isinstance(c, _OptionConfiguration)]
    arguments = [c for c in configurations if isinstance(c, _ArgumentConfiguration)]
    where = f"{cls.__name__}.{name}"
    if len(options) > 0 and len(arguments) > 0:
        raise StructuralError(f"{where} cannot be both an option and an argument.")
    if len(options) > 1:
        raise StructuralError(f"{where} cannot have multiple option configurations.")
    if len(arguments) > 1:
        raise StructuralError(f"{where} cannot have multiple argument configurations.")
    return configurations[0]


def sequence_container_and_element(typ: Any) -> Optional[Tuple[type, Any]]:
    """List[int] => (list, int), Tuple[str, ...] => (tuple, str). `None` if `typ`
    isn't a variable-length sequence."""
    if typ in (list, List, collections.abc.Sequence):
        return list, str
    if typ in (tuple, Tuple):
        return tuple, str

    origin = get_origin(typ)
    args = get_args(typ)
    if origin in (list, collections.abc.Sequence) and len(args) == 1:
        return list, args[0]
    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        return tuple, args[0]
    return None


def _field_from_annotation(
    cls: Type, name: str, typ: Any, configuration: Configuration
) -> FieldDefinition:
    helptext = configuration.help
    if helptext is None:
        helptext = _docstrings.get_field_docstring(cls, name)
    explicit_metavar = (
        configuration.metavar
        if isinstance(configuration, _OptionConfiguration)
        else None
    )

    inner, _ = _resolver.unwrap_optional(typ)
    is_option = isinstance(configuration, _OptionConfiguration)
    try:
        if inner is bool and is_option:
            return FieldDefinition(
                name=name,
                typ=typ,
                kind=FieldKind.FLAG,
                configuration=configuration,
                helptext=helptext,
                instantiator=None,
                metavar=None,
            )

        sequence = sequence_container_and_element(inner)
        if sequence is not None:
            container, element = sequence
            instantiator, metadata = _instantiators.instantiator_from_type(element)
            return FieldDefinition(
                name=name,
                typ=typ,
                kind=FieldKind.SEQUENCE,
                configuration=configuration,
                helptext=helptext,
                instantiator=instantiator,
                metavar=explicit_metavar
                or (
                    metadata.metavar
                    if metadata.choices is not None
                    else f"<{_strings.type_to_string(inner)}>"
                ),
                container=container,
            )

        instantiator, metadata = _instantiators.instantiator_from_type(inner)
    except StructuralError as e:
        kind = "Option" if is_option else "Argument"
        raise StructuralError(
            f"{cls.__name__}.{name} is not a valid {kind} type: {e.args[0]}"
        ) from e

    return FieldDefinition(
        name=name,
        typ=typ,
        kind=FieldKind.SCALAR,
        configuration=configuration,
        helptext=helptext,
        instantiator=instantiator,
        metavar=explicit_metavar or metadata.metavar,
    )


def _field_from_handler(
    cls: Type, name: str, method: Callable, configuration: Configuration
) -> FieldDefinition:
    # Drop `self`.
    params = list(inspect.signature(method).parameters.values())[1:]
    if len(params) == 0:
        kind = FieldKind.NULLARY_HANDLER
    elif len(params) == 1 and params[0].kind in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        kind = FieldKind.UNARY_HANDLER
    else:
        raise StructuralError(
            f"Handler {cls.__name__}.{name} must take either no argument or exactly"
            " one positional argument besides `self`."
        )

    helptext = configuration.help
    if helptext is None:
        helptext = _docstrings.get_handler_docstring(method)

    metavar: Optional[str] = None
    if kind is FieldKind.UNARY_HANDLER:
        metavar = name.upper()
        if isinstance(configuration, _OptionConfiguration) and configuration.metavar:
            metavar = configuration.metavar

    return FieldDefinition(
        name=name,
        typ=None,
        kind=kind,
        configuration=configuration,
        helptext=helptext,
        instantiator=None,
        metavar=metavar,
    )


def zero_value_factories(cls: Type) -> Dict[str, Callable[[], Any]]:
    """Factories for the `__init__` arguments of fields that have no default.

    Every run of the parser starts from a default-initialized instance, so fields
    without defaults fall back to the zero value of their type: False for booleans,
    empty sequences, None for Optional types, and `typ()` otherwise.
    """
    out: Dict[str, Callable[[], Any]] = {}
    for dc_field in _resolver.resolved_fields(cls):
        if not dc_field.init:
            continue
        if (
            dc_field.default is not dataclasses.MISSING
            or dc_field.default_factory is not dataclasses.MISSING
        ):
            continue

        typ, _ = _resolver.unwrap_annotated(dc_field.type)
        typ, is_optional = _resolver.unwrap_optional(typ)
        sequence = sequence_container_and_element(typ)
        if is_optional:
            out[dc_field.name] = lambda: None
        elif typ is bool:
            out[dc_field.name] = lambda: False
        elif sequence is not None:
            out[dc_field.name] = sequence[0]
        else:
            try:
                typ()
            except (TypeError, ValueError) as e:
                raise StructuralError(
                    f"{cls.__name__}.{dc_field.name} has no default, and"
                    f" {_strings.type_to_string(typ)} has no zero value to fall back"
                    " to. Please specify a default."
                ) from e
            out[dc_field.name] = typ
    return out
