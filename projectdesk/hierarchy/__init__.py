from projectdesk.hierarchy.leveler import (
    HierarchicalRecord,
    Leveler,
    LevelStrategy,
    NestedSetRecord,
    iter_levels,
    level,
    strategy_for_sort,
)

__all__ = [
    "HierarchicalRecord",
    "Leveler",
    "LevelStrategy",
    "NestedSetRecord",
    "iter_levels",
    "level",
    "strategy_for_sort",
]
