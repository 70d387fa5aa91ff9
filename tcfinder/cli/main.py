#!/usr/bin/env python3
"""
tcfinder (transmission cluster finder).

Finds clades of a phylo4 phylogeny in which target tips make up at least a
minimum number and a minimum proportion of the tips, and writes the tip
labels of every maximal such clade to a CSV file.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tcfinder.clusters import extract_clade_tip_labels
from tcfinder.constants import DEFAULT_MINIMUM_PROP, DEFAULT_MINIMUM_SIZE
from tcfinder.exceptions import TCFinderError
from tcfinder.io import (
    read_phylo4,
    read_targets,
    write_clade_report,
    write_cluster_table,
)
from tcfinder.logger import tc_logger
from tcfinder.pipeline import ClusterConfig, find_clusters

from .validators import PositiveIntegerAction, ProportionAction


def setup_argument_parser() -> argparse.ArgumentParser:
    """
    Configure and return the argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="tcfinder",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Required arguments
    parser.add_argument(
        "-i",
        "--tree",
        help=(
            "Input tree in phylo4 format (CSV with mandatory columns "
            "'label', 'node', 'ancestor' and 'nodetype')"
        ),
        required=True,
        type=Path,
    )
    parser.add_argument(
        "-t",
        "--targets",
        help="Plain text list of target labels (one tip label per line)",
        required=True,
        type=Path,
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Output CSV file with the clustering result (cluster_id, label)",
        required=True,
        type=Path,
    )

    # Threshold options
    threshold_group = parser.add_argument_group("threshold options")
    threshold_group.add_argument(
        "-s",
        "--minimum-size",
        help=f"Minimum number of targets in a cluster (default: {DEFAULT_MINIMUM_SIZE})",
        default=DEFAULT_MINIMUM_SIZE,
        type=int,
        action=PositiveIntegerAction,
    )
    threshold_group.add_argument(
        "-p",
        "--minimum-prop",
        help=(
            "Minimum proportion of targets in a cluster "
            f"(default: {DEFAULT_MINIMUM_PROP})"
        ),
        default=DEFAULT_MINIMUM_PROP,
        type=float,
        action=ProportionAction,
    )

    # Output options
    output_group = parser.add_argument_group("output options")
    output_group.add_argument(
        "-r",
        "--report",
        help="Also write a per-cluster summary CSV to this path",
        type=Path,
    )
    output_group.add_argument(
        "--strict-node-types",
        help="Fail when a node's type tag disagrees with its children",
        action="store_true",
    )
    output_group.add_argument(
        "-v",
        "--verbose",
        help="Log progress (-vv for debug output)",
        action="count",
        default=0,
    )

    return parser


def configure_logging(verbosity: int) -> None:
    if verbosity <= 0:
        return
    level = logging.DEBUG if verbosity > 1 else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    tc_logger.setup_console_logging(level)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI. Returns the process exit code."""
    parser = setup_argument_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = ClusterConfig(
            minimum_size=args.minimum_size,
            minimum_prop=args.minimum_prop,
            strict_node_types=args.strict_node_types,
        )
        targets = read_targets(args.targets)
        records = read_phylo4(args.tree)
        print(f"Read {len(records)} nodes and {len(targets)} targets")

        result = find_clusters(records, targets, config)
        if result.unmatched_targets:
            print(
                f"Warning: {result.unmatched_count} targets not found in the tree",
                file=sys.stderr,
            )

        # Both outputs number clusters in the same (sorted tip label) order
        labels = extract_clade_tip_labels(result.clades)
        write_cluster_table(labels, args.output)
        if args.report is not None:
            ordered = sorted(result.clades, key=lambda clade: clade.tip_labels)
            write_clade_report(ordered, args.report)
    except (TCFinderError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Found {len(result.clades)} clusters, written to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
