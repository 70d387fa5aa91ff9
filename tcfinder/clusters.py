"""Selection of maximal clades enriched in target tips."""

from __future__ import annotations

import logging
from numbers import Integral, Real
from typing import List, Sequence

from tcfinder.exceptions import TreeNotAnnotated
from tcfinder.logger import tc_logger
from tcfinder.models import QualifyingClade
from tcfinder.tree import Node, Tree

logger = logging.getLogger(__name__)


def validate_thresholds(minimum_size: int, minimum_prop: float) -> None:
    """
    Check clustering thresholds.

    Raises:
        ValueError: If ``minimum_size`` is not an integer >= 1 or
            ``minimum_prop`` is not a real number within [0, 1].
    """
    if isinstance(minimum_size, bool) or not isinstance(minimum_size, Integral):
        raise ValueError(f"minimum_size must be an integer, got {minimum_size!r}")
    if minimum_size < 1:
        raise ValueError(f"minimum_size must be >= 1, got {minimum_size}")
    if isinstance(minimum_prop, bool) or not isinstance(minimum_prop, Real):
        raise ValueError(f"minimum_prop must be a number, got {minimum_prop!r}")
    # Written so that NaN fails as well
    if not 0.0 <= minimum_prop <= 1.0:
        raise ValueError(f"minimum_prop must be within [0, 1], got {minimum_prop}")


def qualifies(node: Node, minimum_size: int, minimum_prop: float) -> bool:
    """Both thresholds are inclusive; a node without leaves never qualifies."""
    if not node.leaf_count:
        return False
    return (
        node.target_count >= minimum_size
        and node.target_count / node.leaf_count >= minimum_prop
    )


def _make_clade(tree: Tree, node: Node) -> QualifyingClade:
    return QualifyingClade(
        root_node_id=node.index,
        root_label=node.label,
        leaf_count=node.leaf_count,
        target_count=node.target_count,
        tip_labels=tuple(sorted(tree.leaf_labels(node.index))),
    )


def select_clades(
    tree: Tree, minimum_size: int, minimum_prop: float
) -> List[QualifyingClade]:
    """
    Find the maximal clades meeting both thresholds.

    The tree is walked in pre-order from the root. A qualifying node is
    reported and its subtree is not searched further, so no reported clade
    contains another. Subtrees holding fewer than ``minimum_size`` targets
    cannot contain a qualifying clade and are skipped.

    Args:
        tree: Tree annotated by ``annotate``.
        minimum_size: Minimum number of target tips in a clade (>= 1).
        minimum_prop: Minimum proportion of target tips in a clade, in [0, 1].

    Returns:
        Qualifying clades in pre-order, children taken in input order.

    Raises:
        ValueError: Invalid thresholds.
        TreeNotAnnotated: ``annotate`` has not been run on the tree.
    """
    validate_thresholds(minimum_size, minimum_prop)
    if not tree.is_annotated:
        raise TreeNotAnnotated("Run annotate() on the tree before selecting clades")

    clades: List[QualifyingClade] = []
    stack: List[int] = [tree.root]

    while stack:
        node = tree[stack.pop()]
        if node.target_count < minimum_size:
            continue
        if qualifies(node, minimum_size, minimum_prop):
            tc_logger.debug(
                f"Node {node.index} qualifies with "
                f"{node.target_count}/{node.leaf_count} target tips"
            )
            clades.append(_make_clade(tree, node))
            continue
        stack.extend(reversed(node.children))

    logger.debug(
        "Selected %d clades (minimum_size=%d, minimum_prop=%s)",
        len(clades),
        minimum_size,
        minimum_prop,
    )
    tc_logger.section("Clade selection")
    tc_logger.result("Clusters found", len(clades))
    if clades:
        tc_logger.table(
            [
                [c.root_node_id, c.root_label or "", c.leaf_count, c.target_count, c.proportion]
                for c in clades
            ],
            headers=["node", "label", "leaves", "targets", "proportion"],
        )
    return clades


def extract_clade_tip_labels(clades: Sequence[QualifyingClade]) -> List[List[str]]:
    """
    Tip labels of each clade, each list sorted and the list of lists sorted.
    """
    return sorted(list(clade.tip_labels) for clade in clades)
