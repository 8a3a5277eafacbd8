import dataclasses
import enum
import pathlib
from typing import List, Optional, Sequence, Tuple

import pytest
from typing_extensions import Annotated, Literal

import darg
from darg.conf import argument, option


@dataclasses.dataclass
class Build:
    threads: Annotated[int, option("threads", "t")] = 1
    help: Annotated[bool, option("help")] = False
    files: Annotated[List[str], argument("file", darg.ONE_OR_MORE)] = (
        dataclasses.field(default_factory=list)
    )


def test_end_to_end() -> None:
    assert darg.parse_args(
        Build, ["--help", "--threads", "4", "a.txt", "b.txt"]
    ) == Build(threads=4, help=True, files=["a.txt", "b.txt"])


def test_missing_option_value_at_end() -> None:
    with pytest.raises(darg.MissingOptionValueError) as e:
        darg.parse_args(Build, ["--threads"])
    assert e.value.option == "--threads"
    assert e.value.message == "Expected argument for option '--threads'"


def test_missing_option_value_before_option() -> None:
    with pytest.raises(darg.MissingOptionValueError):
        darg.parse_args(Build, ["--threads", "--help", "a.txt"])

    # Negative numbers look like short options, so they need the inline form.
    with pytest.raises(darg.MissingOptionValueError):
        darg.parse_args(Build, ["--threads", "-1", "a.txt"])
    assert darg.parse_args(Build, ["--threads=-1", "a.txt"]).threads == -1


def test_unknown_option() -> None:
    with pytest.raises(darg.UnknownOptionError) as e:
        darg.parse_args(Build, ["--bogus"])
    assert e.value.option == "--bogus"
    assert e.value.message == "Invalid option '--bogus'"


def test_unknown_option_reported_leftmost() -> None:
    with pytest.raises(darg.UnknownOptionError) as e:
        darg.parse_args(Build, ["--threads", "2", "-x", "--bogus=3", "a.txt"])
    assert e.value.option == "-x"

    with pytest.raises(darg.UnknownOptionError) as e:
        darg.parse_args(Build, ["--bogus=3", "--help", "a.txt"])
    assert e.value.message == "Invalid option '--bogus=3'"


def test_aliases_are_interchangeable() -> None:
    assert darg.parse_args(Build, ["-t", "3", "a"]).threads == 3
    assert darg.parse_args(Build, ["--threads", "3", "a"]).threads == 3
    assert darg.parse_args(Build, ["-t=3", "a"]).threads == 3
    assert darg.parse_args(Build, ["--threads=3", "a"]).threads == 3


def test_aliases_match_regardless_of_dash_count() -> None:
    assert darg.parse_args(Build, ["--t", "3", "a"]).threads == 3
    assert darg.parse_args(Build, ["-threads", "3", "a"]).threads == 3


def test_inline_value_takes_precedence() -> None:
    out = darg.parse_args(Build, ["--threads=5", "6"])
    assert out.threads == 5
    assert out.files == ["6"]


def test_last_occurrence_wins() -> None:
    assert darg.parse_args(Build, ["-t", "2", "--threads=3", "a"]).threads == 3


def test_options_anywhere_before_separator() -> None:
    assert darg.parse_args(Build, ["a", "-t", "2", "b", "--help", "c"]) == Build(
        threads=2, help=True, files=["a", "b", "c"]
    )


def test_end_of_options() -> None:
    assert darg.parse_args(Build, ["a", "--", "--help", "-t", "--"]) == Build(
        files=["a", "--help", "-t", "--"]
    )


def test_single_dash_is_positional() -> None:
    assert darg.parse_args(Build, ["-"]).files == ["-"]


def test_flag_rejects_value() -> None:
    with pytest.raises(darg.UnexpectedValueError) as e:
        darg.parse_args(Build, ["--help=yes", "a"])
    assert e.value.option == "--help"
    assert e.value.message == "Option '--help' does not take an argument"

    with pytest.raises(darg.UnexpectedValueError):
        darg.parse_args(Build, ["--help=", "a"])


def test_conversion_error() -> None:
    with pytest.raises(darg.ConversionError) as e:
        darg.parse_args(Build, ["--threads=abc", "a"])
    assert e.value.token == "abc"
    assert e.value.target == "option '--threads'"
    assert e.value.message.startswith("Invalid value 'abc' for option '--threads': ")
    assert isinstance(e.value.__cause__, ValueError)

    with pytest.raises(darg.ConversionError) as e:
        darg.parse_args(Build, ["-t", "1.5", "a"])
    assert e.value.target == "option '-t'"


def test_missing_argument() -> None:
    with pytest.raises(darg.MissingArgumentError) as e:
        darg.parse_args(Build, [])
    assert e.value.argument == "file"
    assert e.value.message == "Multiplicity unsatisfied for 'file' argument"

    with pytest.raises(darg.MissingArgumentError):
        darg.parse_args(Build, ["-t", "3"])


def test_one_or_more_boundary() -> None:
    assert darg.parse_args(Build, ["only"]).files == ["only"]


def test_too_many_arguments() -> None:
    @dataclasses.dataclass
    class Copy:
        source: Annotated[str, argument("source")] = ""
        dest: Annotated[str, argument("dest")] = ""

    assert darg.parse_args(Copy, ["a", "b"]) == Copy("a", "b")
    with pytest.raises(darg.TooManyArgumentsError) as e:
        darg.parse_args(Copy, ["a", "b", "c", "d"])
    assert e.value.leftover == ("c", "d")
    assert e.value.message == "Too many arguments specified"


def test_no_declarations() -> None:
    @dataclasses.dataclass
    class Empty:
        untagged: int = 3

    assert darg.parse_args(Empty, []) == Empty()
    with pytest.raises(darg.TooManyArgumentsError):
        darg.parse_args(Empty, ["x"])
    with pytest.raises(darg.UnknownOptionError):
        darg.parse_args(Empty, ["--untagged=4"])


def test_optional_and_exact_multiplicities() -> None:
    @dataclasses.dataclass
    class Points:
        pair: Annotated[Tuple[int, ...], argument("pair", 2)] = ()
        label: Annotated[Optional[str], argument("label", darg.OPTIONAL)] = None

    assert darg.parse_args(Points, ["1", "2"]) == Points(pair=(1, 2), label=None)
    assert darg.parse_args(Points, ["1", "2", "x"]) == Points(pair=(1, 2), label="x")
    with pytest.raises(darg.MissingArgumentError) as e:
        darg.parse_args(Points, ["1"])
    assert e.value.argument == "pair"
    with pytest.raises(darg.TooManyArgumentsError):
        darg.parse_args(Points, ["1", "2", "x", "y"])


def test_bounded_multiplicity() -> None:
    @dataclasses.dataclass
    class Bounded:
        first: Annotated[List[str], argument("first", darg.Multiplicity(0, 3))] = (
            dataclasses.field(default_factory=list)
        )
        rest: Annotated[List[str], argument("rest", darg.ZERO_OR_MORE)] = (
            dataclasses.field(default_factory=list)
        )

    assert darg.parse_args(Bounded, []) == Bounded([], [])
    assert darg.parse_args(Bounded, ["a", "b"]) == Bounded(["a", "b"], [])
    assert darg.parse_args(Bounded, ["a", "b", "c", "d", "e"]) == Bounded(
        ["a", "b", "c"], ["d", "e"]
    )


def test_sequence_argument_appends_to_default() -> None:
    @dataclasses.dataclass
    class Paths:
        paths: Annotated[
            List[pathlib.Path], argument("path", darg.ZERO_OR_MORE)
        ] = dataclasses.field(default_factory=lambda: [pathlib.Path("base")])

    assert darg.parse_args(Paths, ["x", "y"]).paths == [
        pathlib.Path("base"),
        pathlib.Path("x"),
        pathlib.Path("y"),
    ]
    assert darg.parse_args(Paths, []).paths == [pathlib.Path("base")]


def test_sequence_argument_conversion_error() -> None:
    @dataclasses.dataclass
    class Numbers:
        numbers: Annotated[Sequence[int], argument("n", darg.ONE_OR_MORE)] = ()

    assert darg.parse_args(Numbers, ["1", "2"]).numbers == [1, 2]
    with pytest.raises(darg.ConversionError) as e:
        darg.parse_args(Numbers, ["1", "two"])
    assert e.value.target == "argument 'n'"


def test_scalar_types() -> None:
    class Color(enum.Enum):
        RED = enum.auto()
        GREEN = enum.auto()

    @dataclasses.dataclass
    class Scalars:
        color: Annotated[Color, option("color")] = Color.RED
        mode: Annotated[Literal["fast", "slow"], option("mode", "m")] = "fast"
        ratio: Annotated[float, option("ratio")] = 0.5
        out: Annotated[Optional[pathlib.Path], option("out", "o")] = None
        enabled: Annotated[bool, argument("enabled")] = False

    assert darg.parse_args(Scalars, ["true"]) == Scalars(enabled=True)
    assert darg.parse_args(
        Scalars,
        ["--color=GREEN", "-m", "slow", "--ratio", "2", "-o", "x.txt", "False"],
    ) == Scalars(
        color=Color.GREEN,
        mode="slow",
        ratio=2.0,
        out=pathlib.Path("x.txt"),
        enabled=False,
    )
    with pytest.raises(darg.ConversionError):
        darg.parse_args(Scalars, ["--color=BLUE", "true"])
    with pytest.raises(darg.ConversionError):
        darg.parse_args(Scalars, ["--mode=medium", "true"])
    with pytest.raises(darg.ConversionError):
        darg.parse_args(Scalars, ["maybe"])


def test_empty_inline_value() -> None:
    @dataclasses.dataclass
    class Colors:
        color: Annotated[str, option("color")] = "auto"

    assert darg.parse_args(Colors, ["--color="]).color == ""
    assert darg.parse_args(Colors, ["--color=a=b"]).color == "a=b"


def test_fields_without_defaults() -> None:
    @dataclasses.dataclass
    class NoDefaults:
        threads: Annotated[int, option("threads")]
        verbose: Annotated[bool, option("verbose", "v")]
        name: Annotated[Optional[str], option("name")]
        files: Annotated[List[str], argument("file", darg.ZERO_OR_MORE)]
        untagged: str

    assert darg.parse_args(NoDefaults, []) == NoDefaults(
        threads=0, verbose=False, name=None, files=[], untagged=""
    )
    assert darg.parse_args(NoDefaults, ["-v", "--threads=2", "x"]) == NoDefaults(
        threads=2, verbose=True, name=None, files=["x"], untagged=""
    )


def test_untagged_fields_keep_defaults() -> None:
    @dataclasses.dataclass
    class Partial:
        tagged: Annotated[int, option("tagged")] = 1
        untagged: int = 5

    assert darg.parse_args(Partial, ["--tagged=2"]) == Partial(tagged=2, untagged=5)


def test_frozen_dataclass() -> None:
    @dataclasses.dataclass(frozen=True)
    class Frozen:
        threads: Annotated[int, option("threads")] = 1
        files: Annotated[Tuple[str, ...], argument("file", darg.ZERO_OR_MORE)] = ()

    assert darg.parse_args(Frozen, ["--threads=3", "a", "b"]) == Frozen(
        threads=3, files=("a", "b")
    )


def test_handlers() -> None:
    @dataclasses.dataclass
    class Handlers:
        verbosity: int = 0
        defines: List[str] = dataclasses.field(default_factory=list)
        inputs: List[str] = dataclasses.field(default_factory=list)

        @option("verbose", "v")
        def increase_verbosity(self) -> None:
            """Increase verbosity."""
            self.verbosity += 1

        @option("define", "D")
        def add_define(self, arg: str) -> None:
            self.defines.append(arg.upper())

        @argument("input", darg.ZERO_OR_MORE)
        def add_input(self, arg: str) -> None:
            self.inputs.append(arg[::-1])

    out = darg.parse_args(
        Handlers, ["-v", "ab", "--verbose", "-D", "x", "--define=y", "cd", "-v"]
    )
    assert out.verbosity == 3
    assert out.defines == ["X", "Y"]
    assert out.inputs == ["ba", "dc"]

    with pytest.raises(darg.UnexpectedValueError):
        darg.parse_args(Handlers, ["--verbose=2"])
    with pytest.raises(darg.MissingOptionValueError):
        darg.parse_args(Handlers, ["-D"])


def test_inherited_handlers() -> None:
    @dataclasses.dataclass
    class Base:
        log: List[str] = dataclasses.field(default_factory=list)

        @option("first")
        def first(self) -> None:
            self.log.append("first")

    @dataclasses.dataclass
    class Child(Base):
        @option("second")
        def second(self) -> None:
            self.log.append("second")

    assert darg.parse_args(Child, ["--second", "--first"]).log == ["second", "first"]


def test_parse_is_repeatable() -> None:
    spec = darg.ParserSpecification.from_class(Build)
    first = spec.parse(["-t", "2", "a"])
    second = spec.parse(["b"])
    assert first == Build(threads=2, files=["a"])
    assert second == Build(threads=1, files=["b"])
    assert darg.ParserSpecification.from_class(Build) is spec


@dataclasses.dataclass
class Options:
    test_value: str = ""

    help: Annotated[
        bool, option("help", help="Prints help on command line arguments.")
    ] = False
    version: Annotated[bool, option("version", help="Prints version information.")] = (
        False
    )
    path: Annotated[
        List[str],
        argument("path", darg.ONE_OR_MORE, help="Path to the build description."),
    ] = dataclasses.field(default_factory=list)
    dry_run: Annotated[
        bool,
        option(
            "dryrun",
            "n",
            help="Don't make any functional changes. Just print what might happen.",
        ),
    ] = False
    threads: Annotated[
        int,
        option(
            "threads",
            "j",
            help="The number of threads to use. Default is the number of logical"
            " cores.",
        ),
    ] = 0
    color: Annotated[
        str,
        option(
            "color",
            help="When to colorize the output.",
            metavar="{auto,always,never}",
        ),
    ] = "auto"

    @option("test")
    def set_test_value(self, arg: str) -> None:
        self.test_value = arg


def test_mixed_everything() -> None:
    options = darg.parse_args(
        Options,
        [
            "arg1",
            "--help",
            "--version",
            "--test",
            "test test",
            "--dryrun",
            "--threads",
            "42",
            "--color=test",
            "--",
            "arg2",
        ],
    )
    assert options == Options(
        test_value="test test",
        help=True,
        version=True,
        path=["arg1", "arg2"],
        dry_run=True,
        threads=42,
        color="test",
    )


def test_mixed_everything_short_aliases() -> None:
    options = darg.parse_args(Options, ["-n", "-j", "8", "p"])
    assert options == Options(dry_run=True, threads=8, path=["p"])
