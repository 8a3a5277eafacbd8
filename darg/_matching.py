"""Matching engine: binds a flat list of tokens to a parser specification.

Parsing occurs in two passes:

1. Options are matched in the region before the first standalone `--`. Every
   token consumed by an option (including a separate value token) is marked.
2. Unmarked tokens from that region, followed by everything after `--`, are
   handed out to the positional arguments in declaration order.

Option-shaped tokens that no option claimed are reported only after the first pass
has finished, so that the leftmost unknown option is the one reported.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Any, Deque, List, Sequence, TypeVar

from typing_extensions import assert_never

from . import _tokens
from ._errors import (
    ConversionError,
    MissingArgumentError,
    MissingOptionValueError,
    TooManyArgumentsError,
    UnexpectedValueError,
    UnknownOptionError,
)
from ._fields import FieldDefinition, FieldKind

if TYPE_CHECKING:
    from ._parsers import ParserSpecification

OutT = TypeVar("OutT")


def parse_tokens(parser_spec: ParserSpecification[OutT], tokens: Sequence[str]) -> OutT:
    """Produce a populated configuration value from `tokens`, or raise an
    `ArgParseError`. The program name should not be included in `tokens`."""
    head, tail = _tokens.split_args(tokens)
    parsed: List[bool] = [False] * len(head)
    instance = parser_spec.default_instance()

    # First pass: options.
    i = 0
    while i < len(head):
        option_head, inline_value = _tokens.split_option(head[i])
        name = _tokens.option_to_name(option_head)
        option = parser_spec.find_option(name) if name is not None else None
        if option is None:
            i += 1
            continue

        parsed[i] = True
        if not option.has_value:
            if inline_value is not None:
                raise UnexpectedValueError(option_head)
            _bind(instance, option.field, None, append=False, target="")
        else:
            # An inline `--name=value` always wins over the following token.
            if inline_value is not None:
                value = inline_value
            else:
                i += 1
                if i >= len(head) or _tokens.is_option(head[i]):
                    raise MissingOptionValueError(option_head)
                value = head[i]
                parsed[i] = True
            _bind(
                instance,
                option.field,
                value,
                append=False,
                target=f"option '{option_head}'",
            )
        i += 1

    # Anything option-shaped that's still unclaimed is an error.
    for token, was_parsed in zip(head, parsed):
        if not was_parsed and _tokens.is_option(token):
            raise UnknownOptionError(token)

    # Second pass: positional arguments, filled greedily in declaration order.
    leftover: Deque[str] = deque(
        token for token, was_parsed in zip(head, parsed) if not was_parsed
    )
    leftover.extend(tail)
    for argument in parser_spec.arguments:
        multiplicity = argument.multiplicity
        taken = 0
        while taken < multiplicity.upper_bound:
            if len(leftover) == 0:
                if taken >= multiplicity.lower_bound:
                    break
                raise MissingArgumentError(argument.name)
            _bind(
                instance,
                argument.field,
                leftover.popleft(),
                append=True,
                target=f"argument '{argument.name}'",
            )
            taken += 1

    if len(leftover) > 0:
        raise TooManyArgumentsError(leftover)

    return instance


def _bind(
    instance: Any,
    field: FieldDefinition,
    token: Any,
    append: bool,
    target: str,
) -> None:
    """Apply one occurrence of `field` to `instance`. `token` is `None` for fields
    that take no value. Sequence fields are extended when `append` is set and
    replaced by a one-element sequence otherwise."""
    kind = field.kind
    if kind is FieldKind.FLAG:
        _set_field(instance, field.name, True)
    elif kind is FieldKind.NULLARY_HANDLER:
        getattr(instance, field.name)()
    elif kind is FieldKind.UNARY_HANDLER:
        getattr(instance, field.name)(token)
    elif kind is FieldKind.SCALAR:
        _set_field(instance, field.name, _convert(field, token, target))
    elif kind is FieldKind.SEQUENCE:
        assert field.container is not None
        value = _convert(field, token, target)
        if append:
            current = getattr(instance, field.name)
            _set_field(instance, field.name, field.container([*current, value]))
        else:
            _set_field(instance, field.name, field.container([value]))
    else:
        assert_never(kind)


def _convert(field: FieldDefinition, token: str, target: str) -> Any:
    assert field.instantiator is not None
    try:
        return field.instantiator(token)
    except (ValueError, KeyError) as e:
        raise ConversionError(token, target, e) from e


def _set_field(instance: Any, name: str, value: Any) -> None:
    # Frozen dataclasses are populated the same way their own __init__ does it.
    if type(instance).__dataclass_params__.frozen:  # type: ignore
        object.__setattr__(instance, name, value)
    else:
        setattr(instance, name, value)
