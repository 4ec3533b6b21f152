"""
Runtime support for transpiled Zermelo programs.

Classes:
    ZSet: An immutable set of integers that is either finite or cofinite.
    Machine: Program state (current set, `%` variable, input register) and I/O.

Sets start finite. Complementing a finite set yields a cofinite one, stored as
its finite set of excluded integers, so every operation of the language stays
exact over the unbounded universe of integers.

Example:
    >>> machine = Machine()
    >>> machine.flip(3)
    >>> machine.apply("UNION", ZSet.of(1, 2))
    >>> machine.current
    ZSet({1, 2, 3})
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import Any, TextIO

from zermelo.zermelo_constants import (
    EQUAL,
    INTERSECTION,
    LEFT_DIFFERENCE,
    NOT_SUBSET,
    NOT_SUPERSET,
    PROPER_SUBSET,
    PROPER_SUPERSET,
    RIGHT_DIFFERENCE,
    SUBSET,
    SUPERSET,
    UNION,
)


class ZSet:
    """A finite or cofinite set of integers.

    Attributes:
        members (frozenset[int]): The elements when finite, the excluded
            integers when cofinite.
        cofinite (bool): Whether the set is the complement of `members`.
    """

    __slots__ = ("members", "cofinite")

    members: frozenset[int]
    cofinite: bool

    def __init__(self, members: Iterable[int] = (), cofinite: bool = False) -> None:
        object.__setattr__(self, "members", frozenset(members))
        object.__setattr__(self, "cofinite", cofinite)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"ZSet is immutable; cannot set {name!r}")

    @classmethod
    def of(cls, *elements: int) -> ZSet:
        return cls(elements)

    def __contains__(self, item: int) -> bool:
        return (item in self.members) != self.cofinite

    def __invert__(self) -> ZSet:
        return ZSet(self.members, not self.cofinite)

    def __or__(self, other: ZSet) -> ZSet:
        if not self.cofinite and not other.cofinite:
            return ZSet(self.members | other.members)
        if self.cofinite and other.cofinite:
            return ZSet(self.members & other.members, True)
        if self.cofinite:
            return ZSet(self.members - other.members, True)
        return ZSet(other.members - self.members, True)

    def __and__(self, other: ZSet) -> ZSet:
        if not self.cofinite and not other.cofinite:
            return ZSet(self.members & other.members)
        if self.cofinite and other.cofinite:
            return ZSet(self.members | other.members, True)
        if self.cofinite:
            return ZSet(other.members - self.members)
        return ZSet(self.members - other.members)

    def __sub__(self, other: ZSet) -> ZSet:
        return self & ~other

    def __le__(self, other: ZSet) -> bool:
        if not self.cofinite and not other.cofinite:
            return self.members <= other.members
        if not self.cofinite:
            return not (self.members & other.members)
        if not other.cofinite:
            # a cofinite set is infinite
            return False
        return other.members <= self.members

    def __lt__(self, other: ZSet) -> bool:
        return self <= other and self != other

    def __ge__(self, other: ZSet) -> bool:
        return other <= self

    def __gt__(self, other: ZSet) -> bool:
        return other < self

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ZSet):
            return NotImplemented
        return self.cofinite == other.cofinite and self.members == other.members

    def __hash__(self) -> int:
        return hash((self.members, self.cofinite))

    def __repr__(self) -> str:
        inner = "{" + ", ".join(str(m) for m in sorted(self.members)) + "}"
        if self.cofinite:
            return f"~ZSet({inner})"
        return f"ZSet({inner})"


class Machine:
    """Execution state for one Zermelo program.

    Streams default to the process's `sys.stdin`/`sys.stdout`, looked up at
    each access so that redirection by the caller is honored.

    Attributes:
        current (ZSet): The implicit current set.
        var (int): The implicit `%` variable.
        char (str | None): The last character read by `~`, `None` at end of input.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self.current = ZSet()
        self.var = 0
        self.char: str | None = None
        self._stdin = stdin
        self._stdout = stdout

    @property
    def stdin(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    def flip(self, element: int) -> None:
        """Toggle membership of `element` in the current set."""
        single = ZSet.of(element)
        if element in self.current:
            self.current = self.current - single
        else:
            self.current = self.current | single

    def put(self, char: str) -> None:
        self.stdout.write(char)

    def apply(self, operator: str, operand: ZSet) -> None:
        """Combine the current set with `operand` under a set-operation tag."""
        if operator == UNION:
            self.current = self.current | operand
        elif operator == INTERSECTION:
            self.current = self.current & operand
        elif operator == LEFT_DIFFERENCE:
            self.current = self.current - operand
        elif operator == RIGHT_DIFFERENCE:
            self.current = operand - self.current
        else:
            raise ValueError(f"Unknown set operator: {operator}")

    def holds(self, predicate: str, guard: ZSet) -> bool:
        """Evaluate `current <predicate> guard` for a loop predicate tag."""
        cur = self.current
        if predicate == SUBSET:
            return cur <= guard
        if predicate == PROPER_SUBSET:
            return cur < guard
        if predicate == NOT_SUBSET:
            return not cur <= guard
        if predicate == SUPERSET:
            return cur >= guard
        if predicate == PROPER_SUPERSET:
            return cur > guard
        if predicate == NOT_SUPERSET:
            return not cur >= guard
        if predicate == EQUAL:
            return cur == guard
        raise ValueError(f"Unknown loop predicate: {predicate}")

    def complement(self) -> None:
        self.current = ~self.current

    def increment(self) -> None:
        self.var += 1

    def read(self) -> None:
        """Read one character into the input register (`None` at end of input)."""
        self.stdout.flush()
        ch = self.stdin.read(1)
        self.char = ch if ch else None

    def matches(self, char: str) -> bool:
        return self.char == char

    def __repr__(self) -> str:
        return f"Machine(current={self.current!r}, var={self.var}, char={self.char!r})"
