"""Flatten a pre-ordered project forest into (record, depth) pairs.

Input must be in pre-order: every record after all of its ancestors, each
subtree contiguous. Nothing here checks that; out-of-order input produces
meaningless depths but never raises.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar, cast


class HierarchicalRecord(Protocol):
    def is_descendant_of(self, other: Any) -> bool: ...


class NestedSetRecord(Protocol):
    lft: int
    rgt: int


class LevelStrategy(str, Enum):
    """How open ancestors are closed while walking the records."""

    ANCESTRY = "ancestry"
    NESTED_SET = "nested_set"


# A record needs the predicate for ANCESTRY and the bounds for NESTED_SET.
Record = HierarchicalRecord | NestedSetRecord
R = TypeVar("R", bound=Record)


class Leveler(Generic[R]):
    """Single-pass leveler. The ancestor stack survives the run for inspection."""

    def __init__(self, strategy: LevelStrategy = LevelStrategy.ANCESTRY) -> None:
        self.strategy = LevelStrategy(strategy)
        self.stack: list[R] = []

    def _closes(self, record: R, ancestor: R) -> bool:
        if self.strategy is LevelStrategy.NESTED_SET:
            return cast(NestedSetRecord, ancestor).rgt < cast(NestedSetRecord, record).lft
        return not cast(HierarchicalRecord, record).is_descendant_of(ancestor)

    def iter_levels(self, records: Iterable[R]) -> Iterator[tuple[R, int]]:
        self.stack = []
        for record in records:
            while self.stack and self._closes(record, self.stack[-1]):
                self.stack.pop()
            yield record, len(self.stack)
            self.stack.append(record)

    def level(self, records: Iterable[R], visit: Callable[[R, int], None]) -> None:
        for record, depth in self.iter_levels(records):
            visit(record, depth)


def iter_levels(
    records: Iterable[R], strategy: LevelStrategy = LevelStrategy.ANCESTRY
) -> Iterator[tuple[R, int]]:
    return Leveler(strategy).iter_levels(records)


def level(
    records: Iterable[R],
    visit: Callable[[R, int], None],
    strategy: LevelStrategy = LevelStrategy.ANCESTRY,
) -> None:
    """Call ``visit(record, depth)`` once per record, in input order."""
    Leveler(strategy).level(records, visit)


def strategy_for_sort(sort_key: str) -> LevelStrategy:
    # lft order is the nested-set order, so the bounds alone decide nesting
    return LevelStrategy.NESTED_SET if sort_key == "lft" else LevelStrategy.ANCESTRY
