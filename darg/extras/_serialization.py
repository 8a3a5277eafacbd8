"""Human-readable YAML serialization for configuration dataclasses."""

import dataclasses
import enum
import functools
from typing import IO, Any, Dict, Optional, Set, Type, TypeVar, Union

import yaml
from typing_extensions import get_args

from .. import _resolver

ENUM_YAML_TAG_PREFIX = "!enum:"
DATACLASS_YAML_TAG_PREFIX = "!dataclass:"

DataclassType = TypeVar("DataclassType")


def _contained_special_types(
    cls: Type, _seen: Optional[Set[Type]] = None
) -> Set[Type]:
    """Dataclass and enum types reachable from the fields of `cls`, including `cls`
    itself."""
    seen = {cls} if _seen is None else _seen | {cls}

    def handle_type(typ: Any) -> Set[Type]:
        typ, _ = _resolver.unwrap_annotated(typ)
        if _resolver.is_dataclass(typ):
            if typ in seen:
                return set()
            return _contained_special_types(typ, _seen=seen)
        if isinstance(typ, type) and issubclass(typ, enum.Enum):
            return {typ}
        # Optional, List, Tuple, etc. No-op when there are no args.
        return functools.reduce(set.union, map(handle_type, get_args(typ)), set())

    out = {cls}
    for field in _resolver.resolved_fields(cls):
        out |= handle_type(field.type)
    return out


def _tags_from_types(cls: Type) -> Dict[Type, str]:
    types = _contained_special_types(cls)
    names = [typ.__name__ for typ in types]
    # Tags are keyed by bare class name, so they can't collide.
    assert len(set(names)) == len(names), (
        f"Contained dataclass/enum names must all be unique, but got {names}"
    )
    return {
        typ: (
            DATACLASS_YAML_TAG_PREFIX
            if _resolver.is_dataclass(typ)
            else ENUM_YAML_TAG_PREFIX
        )
        + typ.__name__
        for typ in types
    }


def _make_loader(cls: Type) -> Type[yaml.Loader]:
    class ConfigurationLoader(yaml.Loader):
        pass

    def make_dataclass_constructor(typ: Type):
        return lambda loader, node: typ(**loader.construct_mapping(node, deep=True))

    def make_enum_constructor(typ: Type):
        return lambda loader, node: typ[loader.construct_scalar(node)]

    for typ, tag in _tags_from_types(cls).items():
        if _resolver.is_dataclass(typ):
            ConfigurationLoader.add_constructor(tag, make_dataclass_constructor(typ))
        else:
            ConfigurationLoader.add_constructor(tag, make_enum_constructor(typ))
    return ConfigurationLoader


def _make_dumper(instance: Any) -> Type[yaml.Dumper]:
    class ConfigurationDumper(yaml.Dumper):
        pass

    def make_representer(tag: str):
        def representer(dumper: yaml.Dumper, data: Any) -> yaml.Node:
            if isinstance(data, enum.Enum):
                return dumper.represent_scalar(tag, data.name)
            return dumper.represent_mapping(
                tag,
                {
                    field.name: getattr(data, field.name)
                    for field in dataclasses.fields(data)
                    if field.init
                },
            )

        return representer

    for typ, tag in _tags_from_types(type(instance)).items():
        ConfigurationDumper.add_representer(typ, make_representer(tag))
    return ConfigurationDumper


def from_yaml(
    cls: Type[DataclassType],
    stream: Union[str, IO[str], bytes, IO[bytes]],
) -> DataclassType:
    """Re-construct a configuration from a YAML string, which should be generated
    by `darg.extras.to_yaml()`.

    Dataclasses and enums are written with explicit tags (`!dataclass:Name`,
    `!enum:Name`), which keeps the output readable and robust against moving types
    between modules.

    Args:
        cls: Type to reconstruct.
        stream: YAML to read from.

    Returns:
        Instantiated dataclass.
    """
    out = yaml.load(stream, Loader=_make_loader(cls))
    assert isinstance(out, cls)
    return out


def to_yaml(instance: Any) -> str:
    """Serialize a configuration; returns a YAML string that can be read back with
    `darg.extras.from_yaml()`.

    Args:
        instance: Dataclass instance to serialize.

    Returns:
        YAML string.
    """
    return "# darg YAML.\n" + yaml.dump(instance, Dumper=_make_dumper(instance))
