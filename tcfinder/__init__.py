"""Transmission cluster finder for phylo4 phylogenies."""

from tcfinder.annotation import annotate, unmatched_targets
from tcfinder.builder import build_tree
from tcfinder.clusters import extract_clade_tip_labels, select_clades
from tcfinder.exceptions import (
    CyclicTree,
    DanglingAncestor,
    InconsistentNodeType,
    InvalidNodeRecord,
    InvalidTargetList,
    MalformedTree,
    TCFinderError,
    TreeNotAnnotated,
)
from tcfinder.models import ClusterResult, NodeRecord, NodeType, QualifyingClade
from tcfinder.pipeline import ClusterConfig, find_clusters
from tcfinder.tree import Node, Tree

__version__ = "0.1.0"

__all__ = [
    "annotate",
    "unmatched_targets",
    "build_tree",
    "select_clades",
    "extract_clade_tip_labels",
    "find_clusters",
    "ClusterConfig",
    "ClusterResult",
    "NodeRecord",
    "NodeType",
    "QualifyingClade",
    "Node",
    "Tree",
    "TCFinderError",
    "InvalidNodeRecord",
    "InvalidTargetList",
    "MalformedTree",
    "DanglingAncestor",
    "CyclicTree",
    "InconsistentNodeType",
    "TreeNotAnnotated",
]
