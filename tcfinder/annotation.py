"""Per-node leaf and target counts."""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, List, Tuple

from tcfinder.logger import tc_logger
from tcfinder.tree import Tree

logger = logging.getLogger(__name__)


def unmatched_targets(tree: Tree, targets: Iterable[str]) -> List[str]:
    """Target labels that are not the label of any leaf, sorted."""
    leaf_labels = set(tree.leaf_labels())
    return sorted(set(targets) - leaf_labels)


def annotate(tree: Tree, targets: AbstractSet[str]) -> Tuple[Tree, int]:
    """
    Annotate every node with its descendant leaf count and target leaf count.

    Nodes are visited in post-order so children are complete before their
    parent is summed. A leaf counts itself: ``leaf_count = 1`` and
    ``target_count = 1`` if its label is a target.

    Args:
        tree: Tree produced by ``build_tree``; annotated in place.
        targets: Labels to count, matched exactly against leaf labels.

    Returns:
        The annotated tree and the number of targets not found on any leaf.
    """
    targets = frozenset(targets)

    for node in tree.postorder():
        if node.is_leaf:
            node.leaf_count = 1
            node.target_count = 1 if node.label in targets else 0
        else:
            children = tree.children(node.index)
            node.leaf_count = sum(child.leaf_count for child in children)
            node.target_count = sum(child.target_count for child in children)

    missing = unmatched_targets(tree, targets)
    root = tree.root_node
    logger.debug(
        "Annotated tree: %d leaves, %d targets, %d unmatched",
        root.leaf_count,
        root.target_count,
        len(missing),
    )
    tc_logger.section("Target annotation")
    tc_logger.result("Leaves", root.leaf_count)
    tc_logger.result("Target leaves", root.target_count)
    if missing:
        message = (
            f"{len(missing)} of {len(targets)} targets not found among tip labels: "
            f"{', '.join(missing)}"
        )
        tc_logger.warning(message)

    return tree, len(missing)
