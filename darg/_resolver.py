"""Utilities for resolving types and forward references."""

import copy
import dataclasses
import inspect
from typing import Any, Callable, List, Optional, Tuple, Type, TypeVar, Union

from typing_extensions import Annotated, get_args, get_origin, get_type_hints

NoneType = type(None)

TypeOrCallable = TypeVar("TypeOrCallable", Type, Callable)


def is_dataclass(cls: Any) -> bool:
    """Same as `dataclasses.is_dataclass`, but only true for types, not instances."""
    return isinstance(cls, type) and dataclasses.is_dataclass(cls)


def resolved_fields(cls: Type) -> List[dataclasses.Field]:
    """Similar to dataclasses.fields, but resolves forward references. `Annotated`
    metadata is kept."""

    assert dataclasses.is_dataclass(cls)
    fields = []
    annotations = get_type_hints(cls, include_extras=True)
    for field in dataclasses.fields(cls):
        # Avoid mutating original field.
        field = copy.copy(field)

        # Resolve forward references.
        field.type = annotations[field.name]

        fields.append(field)

    return fields


MetadataType = TypeVar("MetadataType")


def unwrap_annotated(
    typ: TypeOrCallable, search_type: Optional[Type[MetadataType]] = None
) -> Tuple[TypeOrCallable, Tuple[MetadataType, ...]]:
    """Helper for parsing typing.Annotated types.

    Examples:
    - int, int => (int, ())
    - Annotated[int, 1], int => (int, (1,))
    - Annotated[int, "1"], int => (int, ())
    """
    if get_origin(typ) is not Annotated:
        return typ, ()

    args = get_args(typ)
    assert len(args) >= 2

    # Don't search for a specific metadata type if `None` is passed in.
    if search_type is None:
        return args[0], ()

    # Look through metadata for desired metadata type.
    targets = tuple(x for x in args[1:] if isinstance(x, search_type))
    return args[0], targets


def unwrap_optional(typ: Any) -> Tuple[Any, bool]:
    """Optional[T] => (T, True). Other unions are returned untouched."""
    if get_origin(typ) is not Union:
        return typ, False
    args = tuple(x for x in get_args(typ) if x is not NoneType)
    if len(args) != 1:
        return typ, False
    return args[0], True


def handler_methods(cls: Type, attr: str) -> List[Tuple[str, Callable]]:
    """Find methods carrying `attr`, in definition order with base classes first.
    Overridden methods keep the position of their first definition."""
    out = {}
    for search_cls in reversed(cls.mro()):
        for name, value in vars(search_cls).items():
            if inspect.isfunction(value) and hasattr(value, attr):
                out[name] = value
            elif name in out:
                # Overridden by something that isn't a handler anymore.
                out.pop(name)
    return list(out.items())
