"""Data models for tcfinder."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple, TYPE_CHECKING

from tcfinder.constants import NO_ANCESTOR
from tcfinder.exceptions import InvalidNodeRecord

if TYPE_CHECKING:
    from tcfinder.tree import Tree


class NodeType(Enum):
    """Enumeration of phylo4 node type tags."""

    TIP = "tip"
    INTERNAL = "internal"
    ROOT = "root"

    @classmethod
    def parse(cls, value: Any) -> "NodeType":
        """Parse a raw type tag, tolerating surrounding whitespace and case."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidNodeRecord(
                f"Unknown node type '{value}'. "
                f"Expected one of: {', '.join(t.value for t in cls)}"
            ) from None

    @property
    def is_tip(self) -> bool:
        return self is NodeType.TIP


def _as_index(value: Any, column: str) -> int:
    if isinstance(value, bool):
        raise InvalidNodeRecord(f"Column '{column}' must be an integer, got {value!r}")
    try:
        as_int = int(value)
    except (TypeError, ValueError):
        raise InvalidNodeRecord(
            f"Column '{column}' must be an integer, got {value!r}"
        ) from None
    # int() already rejects "3.5"; a float such as 3.5 must not be truncated
    if not isinstance(value, str) and as_int != value:
        raise InvalidNodeRecord(f"Column '{column}' must be an integer, got {value!r}")
    return as_int


@dataclass(frozen=True)
class NodeRecord:
    """
    One row of a flattened tree.

    Attributes:
        node: Unique node index (>= 1).
        ancestor: Index of the parent node, or 0 for the root.
        label: Optional node label; tips are matched against targets by label.
        nodetype: The declared type tag.
    """

    node: int
    ancestor: int
    label: Optional[str] = None
    nodetype: NodeType = NodeType.TIP

    def __post_init__(self):
        if self.node < 1:
            raise InvalidNodeRecord(f"Node index must be >= 1, got {self.node}")
        if self.ancestor < NO_ANCESTOR:
            raise InvalidNodeRecord(
                f"Ancestor index of node {self.node} must be >= 0, got {self.ancestor}"
            )

    @property
    def is_tip(self) -> bool:
        return self.nodetype.is_tip

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "NodeRecord":
        """
        Create a record from a mapping with keys node, ancestor, label and nodetype.

        Raises:
            InvalidNodeRecord: If a key is missing or a value cannot be coerced.
        """
        try:
            node = row["node"]
            ancestor = row["ancestor"]
            nodetype = row["nodetype"]
        except KeyError as e:
            raise InvalidNodeRecord(f"Node record is missing key {e.args[0]!r}") from None
        label = row.get("label")
        if label is not None:
            label = str(label)
            if label == "":
                label = None
        return cls(
            node=_as_index(node, "node"),
            ancestor=_as_index(ancestor, "ancestor"),
            label=label,
            nodetype=NodeType.parse(nodetype),
        )


@dataclass(frozen=True)
class QualifyingClade:
    """A maximal subtree whose target count and proportion meet the thresholds."""

    root_node_id: int
    root_label: Optional[str]
    leaf_count: int
    target_count: int
    tip_labels: Tuple[str, ...] = ()

    @property
    def proportion(self) -> float:
        if self.leaf_count == 0:
            return 0.0
        return self.target_count / self.leaf_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "node": self.root_node_id,
            "label": self.root_label,
            "leaf_count": self.leaf_count,
            "target_count": self.target_count,
            "proportion": self.proportion,
        }


@dataclass
class ClusterResult:
    """Everything a single clustering run produces."""

    tree: "Tree"
    clades: List[QualifyingClade] = field(default_factory=list)
    unmatched_targets: List[str] = field(default_factory=list)

    @property
    def unmatched_count(self) -> int:
        return len(self.unmatched_targets)
