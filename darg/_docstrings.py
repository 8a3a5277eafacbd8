"""Helpers for pulling helptext out of docstrings and comments.

For a field, we look (in order) at:
- an `Args:`/`Attributes:` entry in the class docstring,
- a string literal on the line following the field,
- a trailing comment on the field's line,
- a contiguous block of comments directly above the field.

For handler methods, the summary of the method's own docstring is used.
"""

import dataclasses
import functools
import inspect
import io
import tokenize
from typing import Callable, Dict, List, Optional, Type

import docstring_parser

from . import _strings


@dataclasses.dataclass(frozen=True)
class _Token:
    token_type: int
    content: str
    logical_line: int
    actual_line: int


@dataclasses.dataclass(frozen=True)
class _ClassTokenization:
    tokens: List[_Token]
    tokens_from_logical_line: Dict[int, List[_Token]]
    tokens_from_actual_line: Dict[int, List[_Token]]
    token_from_field_name: Dict[str, _Token]

    @staticmethod
    @functools.lru_cache(maxsize=64)
    def make(cls: Type) -> "_ClassTokenization":
        """Tokenize the source code of a class. Raises OSError or TypeError when no
        source is available."""
        readline = io.BytesIO(inspect.getsource(cls).encode("utf-8")).readline

        tokens: List[_Token] = []
        tokens_from_logical_line: Dict[int, List[_Token]] = {1: []}
        tokens_from_actual_line: Dict[int, List[_Token]] = {1: []}

        logical_line = 1
        actual_line = 1
        for toktype, tok, _start, _end, _line in tokenize.tokenize(readline):
            # Logical lines are delimited by `tokenize.NEWLINE`. `tokenize.NL` shows
            # up when a logical line is broken across multiple lines of code.
            if toktype == tokenize.NEWLINE:
                logical_line += 1
                actual_line += 1
                tokens_from_logical_line[logical_line] = []
                tokens_from_actual_line[actual_line] = []
            elif toktype == tokenize.NL:
                actual_line += 1
                tokens_from_actual_line[actual_line] = []
            elif toktype not in (tokenize.INDENT, tokenize.DEDENT):
                token = _Token(toktype, tok, logical_line, actual_line)
                tokens.append(token)
                tokens_from_logical_line[logical_line].append(token)
                tokens_from_actual_line[actual_line].append(token)

        # A field is a NAME that starts its logical line and is followed by `:`.
        token_from_field_name: Dict[str, _Token] = {}
        for i, token in enumerate(tokens[:-1]):
            if token.token_type != tokenize.NAME:
                continue
            line_tokens = [
                t
                for t in tokens_from_logical_line[token.logical_line]
                if t.token_type != tokenize.COMMENT
            ]
            if line_tokens[0] is not token or tokens[i + 1].content != ":":
                continue
            token_from_field_name.setdefault(token.content, token)

        return _ClassTokenization(
            tokens=tokens,
            tokens_from_logical_line=tokens_from_logical_line,
            tokens_from_actual_line=tokens_from_actual_line,
            token_from_field_name=token_from_field_name,
        )


def _get_tokenization_with_field(
    cls: Type, field_name: str
) -> Optional[_ClassTokenization]:
    for search_cls in cls.mro():
        if search_cls is object:
            break
        try:
            tokenization = _ClassTokenization.make(search_cls)
        except (OSError, TypeError):
            # Dynamically created classes and notebooks have no retrievable source.
            return None
        if field_name in tokenization.token_from_field_name:
            return tokenization
    return None


@functools.lru_cache(maxsize=1024)
def get_field_docstring(cls: Type, field_name: str) -> Optional[str]:
    """Get docstring for a field in a class."""

    docstring = inspect.getdoc(cls)
    if docstring is not None:
        for param_doc in docstring_parser.parse(docstring).params:
            if param_doc.arg_name == field_name and param_doc.description:
                return _strings.remove_single_line_breaks(param_doc.description)

    tokenization = _get_tokenization_with_field(cls, field_name)
    if tokenization is None:
        return None
    field_token = tokenization.token_from_field_name[field_name]

    # Docstring on the next logical line.
    next_line = tokenization.tokens_from_logical_line.get(
        field_token.logical_line + 1, []
    )
    if len(next_line) >= 1:
        content = next_line[0].content.strip()
        if (
            next_line[0].token_type == tokenize.STRING
            and content.startswith('"""')
            and content.endswith('"""')
        ):
            return _strings.remove_single_line_breaks(_strings.dedent(content[3:-3]))

    # Comment on the same line as the field.
    final_token = tokenization.tokens_from_logical_line[field_token.logical_line][-1]
    if final_token.token_type == tokenize.COMMENT:
        return _strings.remove_single_line_breaks(final_token.content[1:].strip())

    # Comments directly above the field. Grouped comments apply to every field in
    # the group:
    #
    #     # Worker configuration.
    #     threads: int
    #     jobs: int
    classdef_logical_line = next(
        t.logical_line for t in tokenization.tokens if t.content == "class"
    )
    comments: List[str] = []
    current_actual_line = field_token.actual_line - 1
    while current_actual_line in tokenization.tokens_from_actual_line:
        line_tokens = tokenization.tokens_from_actual_line[current_actual_line]
        if len(line_tokens) == 0:
            break
        if line_tokens[0].logical_line <= classdef_logical_line:
            break
        if len(line_tokens) == 1 and line_tokens[0].token_type == tokenize.COMMENT:
            comments.append(line_tokens[0].content[1:].strip())
        elif len(comments) > 0:
            break
        current_actual_line -= 1

    if len(comments) > 0:
        return _strings.remove_single_line_breaks("\n".join(reversed(comments)))
    return None


def get_handler_docstring(handler: Callable) -> Optional[str]:
    """Short description from a handler method's docstring."""
    docstring = inspect.getdoc(handler)
    if docstring is None:
        return None
    parsed = docstring_parser.parse(docstring)
    if parsed.short_description is None:
        return None
    return _strings.remove_single_line_breaks(parsed.short_description)


@functools.lru_cache(maxsize=256)
def get_class_description(cls: Type) -> str:
    """Description for the help message, taken from the class docstring. The
    signature-like docstring that `dataclasses.dataclass` generates is ignored."""
    docstring = cls.__doc__
    if docstring is None:
        return ""
    docstring = _strings.dedent(docstring).strip()

    if dataclasses.is_dataclass(cls):
        try:
            default_doc = cls.__name__ + str(inspect.signature(cls)).replace(
                " -> None", ""
            )
        except (TypeError, ValueError):
            default_doc = None
        if docstring == default_doc:
            return ""

    parsed = docstring_parser.parse(docstring)
    return "\n\n".join(
        x
        for x in (parsed.short_description, parsed.long_description)
        if x is not None
    )
