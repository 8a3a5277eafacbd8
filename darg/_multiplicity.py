"""Cardinality constraints for positional arguments."""

import dataclasses
import sys

from ._errors import StructuralError

UNBOUNDED = sys.maxsize
"""Stand-in for an infinite upper bound."""


@dataclasses.dataclass(frozen=True)
class Multiplicity:
    """Bounds on the number of tokens a positional argument consumes.

    The interval is written `[lower_bound, upper_bound)`, but the engine treats
    `upper_bound` as the maximum number of values to take. The single-bound form
    built by `Multiplicity.exactly(n)` has `lower_bound == upper_bound == n`.
    """

    lower_bound: int
    upper_bound: int
    _exact: dataclasses.InitVar[bool] = False

    def __post_init__(self, _exact: bool) -> None:
        if self.lower_bound < 0 or self.upper_bound < 0:
            raise StructuralError(
                f"Multiplicity bounds must be non-negative, got [{self.lower_bound},"
                f" {self.upper_bound})."
            )
        if _exact:
            if self.lower_bound != self.upper_bound or self.upper_bound < 1:
                raise StructuralError(
                    f"Exact multiplicity must be at least 1, got {self.upper_bound}."
                )
        elif not self.lower_bound < self.upper_bound:
            raise StructuralError(
                f"Multiplicity [{self.lower_bound}, {self.upper_bound}) is empty; the"
                " lower bound must be strictly smaller than the upper bound."
            )

    @staticmethod
    def exactly(count: int) -> "Multiplicity":
        """An argument that takes exactly `count` values."""
        return Multiplicity(count, count, True)

    def is_unbounded(self) -> bool:
        return self.upper_bound == UNBOUNDED

    def is_single_value(self) -> bool:
        return self.upper_bound <= 1

    def is_required(self) -> bool:
        return self.lower_bound > 0

    def usage(self, name: str) -> str:
        """Usage fragment for an argument called `name`.

        [0, 1) => '[name]'
        [1, 1) => 'name'
        [0, inf) => '[name...]'
        [1, inf) => 'name [name...]'
        [0, 4) => '[name... (up to 4 times)]'
        """
        lower, upper = self.lower_bound, self.upper_bound
        if lower == 0:
            if upper == 1:
                return f"[{name}]"
            elif self.is_unbounded():
                return f"[{name}...]"
            return f"[{name}... (up to {upper} times)]"
        elif lower == 1:
            if upper == 1:
                return name
            elif self.is_unbounded():
                return f"{name} [{name}...]"
            return f"{name} [{name}... (up to {upper - 1} times)]"

        if lower == upper:
            return f"{name} (multiplicity of {upper})"
        if self.is_unbounded():
            return f"{name} [{name}... (at least {lower - 1} times)]"
        return f"{name} [{name}... (between {lower - 1} and {upper - 1} times)]"


OPTIONAL = Multiplicity(0, 1)
ZERO_OR_MORE = Multiplicity(0, UNBOUNDED)
ONE_OR_MORE = Multiplicity(1, UNBOUNDED)
EXACTLY_ONE = Multiplicity.exactly(1)
