import dataclasses
import enum
from typing import List, Optional, Tuple

from typing_extensions import Annotated

import darg
from darg.conf import argument, option


class Color(enum.Enum):
    RED = enum.auto()
    GREEN = enum.auto()


@dataclasses.dataclass
class Nested:
    depth: int = 0


@dataclasses.dataclass
class Config:
    color: Annotated[Color, option("color")] = Color.RED
    threads: Annotated[int, option("threads", "t")] = 1
    name: Annotated[Optional[str], option("name")] = None
    files: Annotated[List[str], argument("file", darg.ZERO_OR_MORE)] = (
        dataclasses.field(default_factory=list)
    )
    shape: Tuple[int, int] = (1, 2)
    nested: Nested = dataclasses.field(default_factory=Nested)


def test_round_trip() -> None:
    config = darg.parse_args(
        Config, ["--color=GREEN", "-t", "4", "--name", "x", "a", "b"]
    )
    serialized = darg.extras.to_yaml(config)
    assert serialized.startswith("# darg YAML.\n")
    assert "!dataclass:Config" in serialized
    assert "!enum:Color" in serialized
    assert darg.extras.from_yaml(Config, serialized) == config


def test_round_trip_defaults() -> None:
    config = Config(nested=Nested(depth=3))
    assert darg.extras.from_yaml(Config, darg.extras.to_yaml(config)) == config


def test_from_yaml_stream() -> None:
    yaml_text = "\n".join(
        [
            "!dataclass:Config",
            "color: !enum:Color GREEN",
            "threads: 8",
            "files: [x]",
        ]
    )
    assert darg.extras.from_yaml(Config, yaml_text) == Config(
        color=Color.GREEN, threads=8, files=["x"]
    )
