"""Nested-set bounds computed from parent links."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeNode:
    id: str
    parent_id: str | None
    name: str


def _sibling_key(node: TreeNode) -> tuple[str, str]:
    return (node.name.casefold(), node.id)


def compute_bounds(nodes: Iterable[TreeNode]) -> dict[str, tuple[int, int]]:
    """Return ``{id: (lft, rgt)}`` for a forest, siblings ordered by name.

    Nodes whose parent is not part of ``nodes`` are treated as roots.
    """
    node_list = list(nodes)
    known = {node.id for node in node_list}
    children: dict[str | None, list[TreeNode]] = defaultdict(list)
    for node in node_list:
        parent = node.parent_id if node.parent_id in known else None
        children[parent].append(node)
    for siblings in children.values():
        siblings.sort(key=_sibling_key)

    bounds: dict[str, tuple[int, int]] = {}
    counter = 1
    # Iterative DFS; (node, entered) pairs avoid recursion limits on deep trees.
    stack: list[tuple[TreeNode, bool]] = [(n, False) for n in reversed(children[None])]
    lefts: dict[str, int] = {}
    while stack:
        node, entered = stack.pop()
        if entered:
            bounds[node.id] = (lefts.pop(node.id), counter)
            counter += 1
            continue
        if node.id in lefts or node.id in bounds:
            continue
        lefts[node.id] = counter
        counter += 1
        stack.append((node, True))
        stack.extend((child, False) for child in reversed(children.get(node.id, [])))

    unreachable = known - bounds.keys()
    if unreachable:
        # Parent cycles never reach a root; park them at the end as roots.
        logger.warning("Nested set rebuild found %d nodes in a parent cycle", len(unreachable))
        for node_id in sorted(unreachable):
            bounds[node_id] = (counter, counter + 1)
            counter += 2
    return bounds
