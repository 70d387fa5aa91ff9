from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from tcfinder.constants import NO_ANCESTOR
from tcfinder.models import NodeType


class Node:
    """
    Tree node stored in a Tree arena.

    Parent and children are held as integer node ids, never as object
    references, so the owning Tree is the only holder of Node objects.
    Leaf and target counts are None until the tree is annotated.
    """

    __slots__ = (
        "index",
        "ancestor",
        "label",
        "nodetype",
        "children",
        "leaf_count",
        "target_count",
    )

    index: int
    ancestor: int
    label: Optional[str]
    nodetype: NodeType
    children: List[int]
    leaf_count: Optional[int]
    target_count: Optional[int]

    def __init__(
        self,
        index: int,
        ancestor: int = NO_ANCESTOR,
        label: Optional[str] = None,
        nodetype: NodeType = NodeType.TIP,
        children: Optional[List[int]] = None,
    ):
        self.index = index
        self.ancestor = ancestor
        self.label = label
        self.nodetype = nodetype
        # Avoid mutable default arguments
        self.children = list(children) if children is not None else []
        self.leaf_count = None
        self.target_count = None

    @property
    def is_leaf(self) -> bool:
        """A node is a leaf iff it has no children."""
        return not self.children

    @property
    def is_root(self) -> bool:
        return self.ancestor == NO_ANCESTOR

    @property
    def is_annotated(self) -> bool:
        return self.leaf_count is not None and self.target_count is not None

    def __repr__(self) -> str:
        return f"Node({self.index}, '{self.label}')"


class Tree:
    """
    Rooted tree owning its nodes in an arena keyed by node index.

    Instances are produced by ``tcfinder.builder.build_tree``, which
    guarantees a single root, no dangling ancestors and no cycles.
    """

    def __init__(self, nodes: Dict[int, Node], root: int):
        self._nodes = nodes
        self.root = root

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, index: object) -> bool:
        return index in self._nodes

    def __getitem__(self, index: int) -> Node:
        return self._nodes[index]

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def __repr__(self) -> str:
        return f"Tree(root={self.root}, nodes={len(self)})"

    @property
    def root_node(self) -> Node:
        return self._nodes[self.root]

    @property
    def is_annotated(self) -> bool:
        return self.root_node.is_annotated

    def children(self, index: int) -> List[Node]:
        return [self._nodes[child] for child in self._nodes[index].children]

    def traverse(self, start: Optional[int] = None) -> List[Node]:
        """
        Return all nodes of the subtree rooted at ``start`` (default: the root)
        in pre-order, children visited in input order.
        Uses an explicit stack to avoid recursion depth issues on deep trees.
        """
        nodes: List[Node] = []
        stack: List[int] = [self.root if start is None else start]

        while stack:
            current = self._nodes[stack.pop()]
            nodes.append(current)
            # Reverse so the first child is popped first
            stack.extend(reversed(current.children))

        return nodes

    def postorder(self, start: Optional[int] = None) -> List[Node]:
        """
        Return all nodes of the subtree in post-order: every node appears
        after all of its descendants.
        """
        order: List[Node] = []
        stack: List[tuple[int, bool]] = [(self.root if start is None else start, False)]

        while stack:
            index, expanded = stack.pop()
            node = self._nodes[index]
            if expanded or node.is_leaf:
                order.append(node)
                continue
            stack.append((index, True))
            for child in reversed(node.children):
                stack.append((child, False))

        return order

    def leaves(self, start: Optional[int] = None) -> List[Node]:
        """Leaves of the subtree rooted at ``start``, left to right."""
        return [node for node in self.traverse(start) if node.is_leaf]

    def leaf_labels(self, start: Optional[int] = None) -> List[str]:
        return [node.label for node in self.leaves(start) if node.label is not None]

    def ancestors(self, index: int) -> List[int]:
        """Strict ancestors of ``index``, nearest first."""
        result: List[int] = []
        node = self._nodes[index]
        while not node.is_root:
            result.append(node.ancestor)
            node = self._nodes[node.ancestor]
        return result

    def is_ancestor(self, ancestor: int, descendant: int) -> bool:
        """True if ``ancestor`` is a strict ancestor of ``descendant``."""
        return ancestor in self.ancestors(descendant)
