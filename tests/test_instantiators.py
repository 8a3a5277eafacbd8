import enum
import os
import pathlib
from typing import Any, Dict, List, Optional

import pytest
from typing_extensions import Annotated, Literal

from darg import StructuralError, _instantiators


def test_int() -> None:
    instantiator, metadata = _instantiators.instantiator_from_type(int)
    assert instantiator("5") == 5
    assert metadata.metavar == "<int>"
    assert metadata.choices is None
    with pytest.raises(ValueError):
        instantiator("five")


def test_float_and_complex() -> None:
    instantiator, metadata = _instantiators.instantiator_from_type(float)
    assert instantiator("0.5") == 0.5
    assert metadata.metavar == "<float>"

    instantiator, _ = _instantiators.instantiator_from_type(complex)
    assert instantiator("1+2j") == 1 + 2j


def test_bool() -> None:
    instantiator, metadata = _instantiators.instantiator_from_type(bool)
    assert instantiator("true") is True
    assert instantiator("False") is False
    assert metadata.metavar == "{true,false}"
    with pytest.raises(ValueError):
        instantiator("yes")


def test_bytes() -> None:
    instantiator, metadata = _instantiators.instantiator_from_type(bytes)
    assert instantiator("abc") == b"abc"
    assert metadata.metavar == "<bytes>"


def test_path() -> None:
    instantiator, metadata = _instantiators.instantiator_from_type(pathlib.Path)
    assert instantiator("/tmp/x") == pathlib.Path("/tmp/x")
    assert metadata.metavar == "<Path>"

    instantiator, _ = _instantiators.instantiator_from_type(os.PathLike)
    assert instantiator("a/b") == pathlib.Path("a/b")


def test_enum() -> None:
    class Color(enum.Enum):
        RED = enum.auto()
        GREEN = enum.auto()

    instantiator, metadata = _instantiators.instantiator_from_type(Color)
    assert instantiator("RED") is Color.RED
    assert metadata.metavar == "{RED,GREEN}"
    assert metadata.choices == ("RED", "GREEN")
    with pytest.raises(ValueError, match="invalid choice"):
        instantiator("BLUE")


def test_literal() -> None:
    instantiator, metadata = _instantiators.instantiator_from_type(
        Literal["fast", "slow", 3]
    )
    assert instantiator("fast") == "fast"
    assert instantiator("3") == 3
    assert metadata.metavar == "{fast,slow,3}"
    with pytest.raises(ValueError):
        instantiator("medium")


def test_literal_bool() -> None:
    instantiator, metadata = _instantiators.instantiator_from_type(
        Literal[True, False]
    )
    assert instantiator("true") is True
    assert instantiator("false") is False
    assert metadata.metavar == "{true,false}"
    with pytest.raises(ValueError):
        instantiator("True")


def test_optional_and_annotated_are_unwrapped() -> None:
    instantiator, metadata = _instantiators.instantiator_from_type(
        Annotated[Optional[int], "ignored"]
    )
    assert instantiator("3") == 3
    assert metadata.metavar == "<int>"


def test_custom_converter() -> None:
    class Version:
        def __init__(self, text: str) -> None:
            self.parts = tuple(int(x) for x in text.split("."))

    instantiator, metadata = _instantiators.instantiator_from_type(Version)
    assert instantiator("1.2.3").parts == (1, 2, 3)
    assert metadata.metavar == "<Version>"
    with pytest.raises(ValueError):
        instantiator("1.x")


def test_not_a_converter() -> None:
    class Point:
        def __init__(self, x: int, y: int) -> None:
            pass

    with pytest.raises(StructuralError):
        _instantiators.instantiator_from_type(Point)


def test_unsupported_types() -> None:
    for typ in (Any, type(None), dict, list, Dict[str, int], List[int], object):
        with pytest.raises(StructuralError):
            _instantiators.instantiator_from_type(typ)
