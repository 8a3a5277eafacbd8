"""Render a configuration back into command-line tokens."""

import enum
from typing import Any, List

from .. import _tokens
from .._fields import FieldDefinition, FieldKind
from .._parsers import ParserSpecification


def to_args(instance: Any) -> List[str]:
    """Get a list of tokens that, when parsed, reproduces `instance`.

    Options come first, written as `--name=value` (or a bare `--name` for flags).
    Options still at their default value are left out. Positional values follow a
    `--` separator, so values that look like options are passed through verbatim.

    ```python
    assert darg.parse_args(Config, darg.extras.to_args(config)) == config
    ```

    Handler methods have no stored state, so they are never rendered.

    Args:
        instance: Configuration to render.

    Returns:
        List of tokens, without a program name.

    Raises:
        ValueError: If the configuration holds a value that no token sequence can
            produce, like a flag set to False when its default is True.
    """
    parser_spec = ParserSpecification.from_class(type(instance))
    default = parser_spec.default_instance()

    out: List[str] = []
    for option in parser_spec.options:
        field = option.field
        if field.kind.is_handler():
            continue
        value = getattr(instance, field.name)
        if value == getattr(default, field.name):
            continue

        invocation = _tokens.name_to_option(option.canonical_name)
        assert invocation is not None
        if field.kind is FieldKind.FLAG:
            if value is not True:
                raise ValueError(
                    f"Flag {invocation} can only be set, not unset, from the command"
                    " line."
                )
            out.append(invocation)
        elif field.kind is FieldKind.SEQUENCE:
            if len(value) != 1:
                raise ValueError(
                    f"Option {invocation} holds exactly one value per occurrence, but"
                    f" got {value!r}."
                )
            out.append(f"{invocation}={_value_to_token(field, value[0])}")
        else:
            out.append(f"{invocation}={_value_to_token(field, value)}")

    positional_tokens: List[List[str]] = []
    for argument in parser_spec.arguments:
        field = argument.field
        if field.kind.is_handler():
            positional_tokens.append([])
            continue
        value = getattr(instance, field.name)
        default_value = getattr(default, field.name)
        if field.kind is FieldKind.SEQUENCE:
            # Parsing appends to the default value.
            prefix_length = len(default_value)
            if list(value[:prefix_length]) != list(default_value):
                raise ValueError(
                    f"Argument '{argument.name}' must start with its default"
                    f" {default_value!r}, but got {value!r}."
                )
            positional_tokens.append(
                [_value_to_token(field, x) for x in value[prefix_length:]]
            )
        elif not argument.multiplicity.is_required() and value == default_value:
            positional_tokens.append([])
        else:
            positional_tokens.append([_value_to_token(field, value)])

    # Omitted values in the middle would shift later positionals to the left, so
    # only trailing ones can be dropped.
    while len(positional_tokens) > 0 and len(positional_tokens[-1]) == 0:
        positional_tokens.pop()
    for argument, tokens in zip(parser_spec.arguments, positional_tokens):
        if len(tokens) == 0 and argument.field.kind is FieldKind.SCALAR:
            tokens.append(
                _value_to_token(argument.field, getattr(instance, argument.field.name))
            )

    out.append(_tokens.END_OF_OPTIONS)
    for tokens in positional_tokens:
        out.extend(tokens)
    return out


def _value_to_token(field: FieldDefinition, value: Any) -> str:
    if value is None:
        raise ValueError(f"Field {field.name} is None, which has no token.")
    if isinstance(value, enum.Enum):
        return value.name
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, bytes):
        return value.decode("ascii")
    return str(value)
