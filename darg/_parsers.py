"""Descriptor model: the option and argument specifications derived from a
configuration type."""

from __future__ import annotations

import dataclasses
import functools
import re
import warnings
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

from . import _docstrings, _fields, _formatting, _matching, _tokens
from ._errors import StructuralError
from ._multiplicity import Multiplicity
from ._warnings import DargWarning
from .conf._confstruct import _ArgumentConfiguration, _OptionConfiguration

OutT = TypeVar("OutT")

_valid_name_pattern = re.compile(r"[^\s=-][^\s=]*")


@dataclasses.dataclass(frozen=True)
class OptionSpec:
    """A named option, bound to one field or handler."""

    field: _fields.FieldDefinition
    names: Tuple[str, ...]

    @property
    def canonical_name(self) -> str:
        return self.names[0]

    @property
    def has_value(self) -> bool:
        return self.field.kind.takes_value()

    def matches(self, name: str) -> bool:
        return name in self.names

    def invocations(self) -> Tuple[str, ...]:
        """'threads', 't' => ('--threads', '-t')"""
        return tuple(_tokens.name_to_option(name) for name in self.names)  # type: ignore


@dataclasses.dataclass(frozen=True)
class ArgumentSpec:
    """A positional argument, bound to one field or handler."""

    field: _fields.FieldDefinition
    name: str
    multiplicity: Multiplicity

    def usage(self) -> str:
        return self.multiplicity.usage(self.name)


@dataclasses.dataclass(frozen=True)
class ParserSpecification(Generic[OutT]):
    """Each configuration type maps to one read-only parser specification. Build
    with `ParserSpecification.from_class()`, which validates eagerly."""

    cls: Type[OutT]
    options: Tuple[OptionSpec, ...]
    arguments: Tuple[ArgumentSpec, ...]
    description: str
    zero_value_factories: Dict[str, Callable[[], Any]]

    @staticmethod
    @functools.lru_cache(maxsize=256)
    def from_class(cls: Type[OutT]) -> ParserSpecification[OutT]:
        options = []
        arguments = []
        for field in _fields.field_list_from_class(cls):
            configuration = field.configuration
            if isinstance(configuration, _OptionConfiguration):
                options.append(OptionSpec(field=field, names=configuration.names))
            else:
                assert isinstance(configuration, _ArgumentConfiguration)
                arguments.append(
                    ArgumentSpec(
                        field=field,
                        name=configuration.name,
                        multiplicity=configuration.multiplicity,
                    )
                )

        spec = ParserSpecification(
            cls=cls,
            options=tuple(options),
            arguments=tuple(arguments),
            description=_docstrings.get_class_description(cls),
            zero_value_factories=_fields.zero_value_factories(cls),
        )
        spec.validate()
        return spec

    def validate(self) -> None:
        """Check structural consistency. Raises `StructuralError` for declarations
        that can never work, and emits a `DargWarning` for ones that are legal but
        likely to misbehave."""
        where = self.cls.__name__

        option_from_name: Dict[str, OptionSpec] = {}
        for option in self.options:
            if len(option.names) == 0:
                raise StructuralError(
                    f"Option {where}.{option.field.name} needs at least one name."
                )
            for name in option.names:
                if _valid_name_pattern.fullmatch(name) is None:
                    raise StructuralError(
                        f"Invalid option name {name!r} for {where}.{option.field.name}."
                        " Names are written without leading hyphens and cannot"
                        " contain '=' or whitespace."
                    )
                if name in option_from_name:
                    warnings.warn(
                        f"Option name {name!r} is used by both"
                        f" {where}.{option_from_name[name].field.name} and"
                        f" {where}.{option.field.name}; only the first will ever be"
                        " matched.",
                        category=DargWarning,
                        stacklevel=4,
                    )
                else:
                    option_from_name[name] = option

        seen_unbounded: Optional[ArgumentSpec] = None
        for argument in self.arguments:
            field = argument.field
            if len(argument.name) == 0:
                raise StructuralError(
                    f"Argument {where}.{field.name} needs a non-empty name."
                )
            if field.kind is _fields.FieldKind.NULLARY_HANDLER:
                raise StructuralError(
                    f"Handler {where}.{field.name} takes no value, so it can't be"
                    " used as a positional argument."
                )
            if (
                field.kind is _fields.FieldKind.SCALAR
                and not argument.multiplicity.is_single_value()
            ):
                raise StructuralError(
                    f"Argument {where}.{field.name} can take up to"
                    f" {argument.multiplicity.upper_bound} values, but its type is not"
                    " a sequence."
                )

            if seen_unbounded is not None and argument.multiplicity.is_required():
                warnings.warn(
                    f"Argument '{argument.name}' is required but declared after"
                    f" '{seen_unbounded.name}', which takes an unbounded number of"
                    f" values. '{seen_unbounded.name}' will consume every leftover"
                    f" token, so '{argument.name}' can never be satisfied.",
                    category=DargWarning,
                    stacklevel=4,
                )
            if argument.multiplicity.is_unbounded():
                seen_unbounded = argument

    def find_option(self, name: str) -> Optional[OptionSpec]:
        """First declared option with `name` among its aliases."""
        for option in self.options:
            if option.matches(name):
                return option
        return None

    def default_instance(self) -> OutT:
        """Fresh, default-initialized configuration value."""
        return self.cls(
            **{name: factory() for name, factory in self.zero_value_factories.items()}
        )

    def parse(self, tokens: Sequence[str]) -> OutT:
        return _matching.parse_tokens(self, tokens)

    def usage(self, prog: str, width: Optional[int] = None) -> str:
        return _formatting.format_usage(self, prog, width=width)

    def help(
        self,
        prog: str,
        width: Optional[int] = None,
        description: Optional[str] = None,
    ) -> str:
        return _formatting.format_help(
            self, prog, width=width, description=description
        )
