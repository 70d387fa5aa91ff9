"""
Custom exceptions for transmission cluster detection.
"""

from __future__ import annotations

from typing import NoReturn, Sequence


class TCFinderError(Exception):
    """Base exception for tcfinder errors."""

    pass


class InvalidNodeRecord(TCFinderError):
    """Raised when a single node record cannot be interpreted."""

    pass


class InvalidTargetList(TCFinderError):
    """Raised when the target label file cannot be decoded."""

    pass


class MalformedTree(TCFinderError):
    """Raised when the records do not describe a single-rooted tree."""

    @staticmethod
    def raise_root_count(root_ids: Sequence[int]) -> NoReturn:
        """
        Raises a MalformedTree describing how many root records were found.

        Args:
            root_ids: Indices of all records whose ancestor is 0

        Raises:
            MalformedTree: Always raised
        """
        from tcfinder.logger import tc_logger

        if not root_ids:
            message = "No root record found (no node has ancestor 0)"
        else:
            message = (
                f"Expected exactly one root record, found {len(root_ids)}: "
                f"nodes {sorted(root_ids)}"
            )
        tc_logger.error(message)
        raise MalformedTree(message)


class DanglingAncestor(TCFinderError):
    """Raised when a record references an ancestor that does not exist."""

    def __init__(self, node: int, ancestor: int):
        self.node = node
        self.ancestor = ancestor
        super().__init__(
            f"Node {node} references ancestor {ancestor}, which is not in the tree"
        )


class CyclicTree(TCFinderError):
    """Raised when an ancestor chain does not terminate at the root."""

    def __init__(self, node: int):
        self.node = node
        super().__init__(
            f"Ancestor chain starting at node {node} does not reach the root"
        )


class InconsistentNodeType(TCFinderError):
    """Raised when a node's type tag disagrees with its position in the tree."""

    def __init__(self, node: int, nodetype: str, n_children: int):
        self.node = node
        self.nodetype = nodetype
        self.n_children = n_children
        super().__init__(
            f"Node {node} is tagged '{nodetype}' but has {n_children} children"
        )


class TreeNotAnnotated(TCFinderError):
    """Raised when clade selection runs on a tree without leaf/target counts."""

    pass
