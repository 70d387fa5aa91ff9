"""Transmission cluster finding - main interface.

Chains the three stages over one input:
- builder.build_tree: flat records to a rooted Tree
- annotation.annotate: leaf and target counts per node
- clusters.select_clades: maximal qualifying clades
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet, Iterable, Optional

from tcfinder.annotation import annotate, unmatched_targets
from tcfinder.builder import RawRecord, build_tree
from tcfinder.clusters import select_clades, validate_thresholds
from tcfinder.constants import DEFAULT_MINIMUM_PROP, DEFAULT_MINIMUM_SIZE
from tcfinder.logger import tc_logger
from tcfinder.models import ClusterResult


@dataclass(frozen=True)
class ClusterConfig:
    """Configuration for a clustering run."""

    minimum_size: int = DEFAULT_MINIMUM_SIZE
    minimum_prop: float = DEFAULT_MINIMUM_PROP
    strict_node_types: bool = False
    logger_name: str = __name__

    def __post_init__(self):
        validate_thresholds(self.minimum_size, self.minimum_prop)


@tc_logger.log_execution
def find_clusters(
    records: Iterable[RawRecord],
    targets: AbstractSet[str],
    config: Optional[ClusterConfig] = None,
) -> ClusterResult:
    """
    Run the complete pipeline on one tree.

    Args:
        records: Flat node records describing the tree
        targets: Tip labels to look for
        config: Thresholds and validation options, defaults if omitted

    Returns:
        ClusterResult with the annotated tree, the selected clades and the
        target labels that matched no tip
    """
    config = config or ClusterConfig()
    logger = logging.getLogger(config.logger_name)

    tree = build_tree(records, strict_node_types=config.strict_node_types)
    tree, n_unmatched = annotate(tree, targets)
    clades = select_clades(tree, config.minimum_size, config.minimum_prop)

    logger.info(
        "Found %d clusters among %d tips (%d targets unmatched)",
        len(clades),
        tree.root_node.leaf_count,
        n_unmatched,
    )
    return ClusterResult(
        tree=tree,
        clades=clades,
        unmatched_targets=unmatched_targets(tree, targets),
    )
