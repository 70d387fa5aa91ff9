"""Reconstruction of a rooted tree from flat phylo4 node records."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Set, Union

from tcfinder.constants import NO_ANCESTOR
from tcfinder.exceptions import (
    CyclicTree,
    DanglingAncestor,
    InconsistentNodeType,
    InvalidNodeRecord,
    MalformedTree,
)
from tcfinder.logger import tc_logger
from tcfinder.models import NodeRecord, NodeType
from tcfinder.tree import Node, Tree

logger = logging.getLogger(__name__)

RawRecord = Union[NodeRecord, Mapping[str, Any]]


def _coerce_records(records: Iterable[RawRecord]) -> List[NodeRecord]:
    coerced: List[NodeRecord] = []
    for record in records:
        if isinstance(record, NodeRecord):
            coerced.append(record)
        elif isinstance(record, Mapping):
            coerced.append(NodeRecord.from_mapping(record))
        else:
            raise InvalidNodeRecord(
                f"Expected a NodeRecord or a mapping, got {type(record).__name__}"
            )
    return coerced


def _index_records(records: List[NodeRecord]) -> Dict[int, NodeRecord]:
    index: Dict[int, NodeRecord] = {}
    for record in records:
        if record.node in index:
            raise MalformedTree(f"Duplicate node index {record.node}")
        index[record.node] = record
    return index


def _find_root(records: List[NodeRecord]) -> int:
    root_ids = [r.node for r in records if r.ancestor == NO_ANCESTOR]
    if len(root_ids) != 1:
        MalformedTree.raise_root_count(root_ids)

    for record in records:
        if record.nodetype is NodeType.ROOT and record.ancestor != NO_ANCESTOR:
            raise MalformedTree(
                f"Node {record.node} is tagged 'root' but has ancestor {record.ancestor}"
            )
    return root_ids[0]


def _check_ancestors(records: List[NodeRecord], index: Dict[int, NodeRecord]) -> None:
    for record in records:
        if record.ancestor != NO_ANCESTOR and record.ancestor not in index:
            raise DanglingAncestor(record.node, record.ancestor)


def _check_acyclic(nodes: Dict[int, Node], root: int) -> None:
    """
    Walk the ancestor chain of every node, bounded by the node count.

    Nodes already shown to reach the root are remembered, so every node is
    walked over at most once in total.
    """
    bound = len(nodes)
    reaches_root: Set[int] = {root}

    for start in nodes:
        path: List[int] = []
        current = start
        while current not in reaches_root:
            path.append(current)
            if len(path) > bound:
                raise CyclicTree(start)
            current = nodes[current].ancestor
        reaches_root.update(path)


def _check_node_types(nodes: Dict[int, Node], strict: bool) -> None:
    for node in nodes.values():
        declared_tip = node.nodetype.is_tip
        if declared_tip == node.is_leaf:
            continue
        if strict:
            raise InconsistentNodeType(
                node.index, node.nodetype.value, len(node.children)
            )
        message = (
            f"Node {node.index} is tagged '{node.nodetype.value}' but has "
            f"{len(node.children)} children; treating it as "
            f"{'a leaf' if node.is_leaf else 'internal'}"
        )
        logger.warning(message)


def build_tree(
    records: Iterable[RawRecord], strict_node_types: bool = False
) -> Tree:
    """
    Build a rooted Tree from an unordered sequence of node records.

    Args:
        records: NodeRecord instances or mappings with keys node, ancestor,
            label and nodetype.
        strict_node_types: Raise InconsistentNodeType when a type tag disagrees
            with the derived leaf/internal status instead of warning.

    Returns:
        A single-rooted, acyclic Tree. Children keep the input order.

    Raises:
        InvalidNodeRecord: A record cannot be interpreted.
        MalformedTree: Empty input, duplicate indices, or zero/multiple roots.
        DanglingAncestor: A record references a missing ancestor.
        CyclicTree: An ancestor chain does not terminate at the root.
        InconsistentNodeType: Tag mismatch while ``strict_node_types`` is set.
    """
    coerced = _coerce_records(records)
    if not coerced:
        raise MalformedTree("Cannot build a tree from an empty record set")

    index = _index_records(coerced)
    root = _find_root(coerced)
    _check_ancestors(coerced, index)

    nodes: Dict[int, Node] = {
        r.node: Node(index=r.node, ancestor=r.ancestor, label=r.label, nodetype=r.nodetype)
        for r in coerced
    }
    # Group by ancestor in input order to derive the child adjacency
    for record in coerced:
        if record.ancestor != NO_ANCESTOR:
            nodes[record.ancestor].children.append(record.node)

    _check_acyclic(nodes, root)
    _check_node_types(nodes, strict_node_types)

    tree = Tree(nodes, root)
    logger.debug("Built %r", tree)
    tc_logger.result("Tree", f"{len(tree)} nodes, root {root}")
    return tree
