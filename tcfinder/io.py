from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Set, Union

import pandas as pd

from tcfinder.constants import (
    CLADE_REPORT_COLUMNS,
    CLUSTER_TABLE_COLUMNS,
    MISSING_LABEL_VALUES,
    PHYLO4_COLUMNS,
)
from tcfinder.exceptions import InvalidNodeRecord, InvalidTargetList
from tcfinder.models import NodeRecord, QualifyingClade

PathLike = Union[str, Path]


def read_phylo4(path: PathLike) -> List[NodeRecord]:
    """
    Read a tree in phylo4 table format (CSV).

    Mandatory columns are 'label', 'node', 'ancestor' and 'nodetype'; any
    other column (e.g. 'edge.length') is ignored. Empty or NA labels become
    None.

    Raises:
        InvalidNodeRecord: If the file cannot be parsed, a mandatory column
            is missing, or a row holds an invalid value.
    """
    try:
        df = pd.read_csv(
            path,
            dtype=str,
            # Labels such as "None" or "nan" are tip names, not missing values
            keep_default_na=False,
            na_values=list(MISSING_LABEL_VALUES),
            skipinitialspace=True,
        )
    except (
        pd.errors.ParserError,
        pd.errors.EmptyDataError,
        UnicodeDecodeError,
    ) as e:
        raise InvalidNodeRecord(f"Unable to parse phylo4 table {path}: {e}") from e

    missing = [column for column in PHYLO4_COLUMNS if column not in df.columns]
    if missing:
        raise InvalidNodeRecord(
            f"phylo4 table {path} is missing mandatory columns: {', '.join(missing)}"
        )

    records: List[NodeRecord] = []
    for row_number, row in enumerate(
        df[list(PHYLO4_COLUMNS)].to_dict(orient="records"), start=2
    ):
        if pd.isna(row["label"]):
            row["label"] = None
        try:
            records.append(NodeRecord.from_mapping(row))
        except InvalidNodeRecord as e:
            raise InvalidNodeRecord(f"{path}, line {row_number}: {e}") from e
    return records


def read_targets(path: PathLike) -> Set[str]:
    """
    Read target labels, one per line, as UTF-8. Blank lines are skipped.

    Raises:
        InvalidTargetList: If the file is not valid UTF-8.
    """
    try:
        with open(path, encoding="utf-8") as f:
            return {line.strip() for line in f if line.strip()}
    except UnicodeDecodeError as e:
        raise InvalidTargetList(f"Unable to decode target list {path}: {e}") from e


def write_cluster_table(clusters: Sequence[Sequence[str]], path: PathLike) -> None:
    """Write a CSV with one (cluster_id, label) row per clade member."""
    rows = [
        (cluster_id, label)
        for cluster_id, labels in enumerate(clusters, start=1)
        for label in labels
    ]
    pd.DataFrame(rows, columns=list(CLUSTER_TABLE_COLUMNS)).to_csv(path, index=False)


def write_clade_report(clades: Sequence[QualifyingClade], path: PathLike) -> None:
    """Write one summary row per clade, numbered in selection order."""
    rows = [
        {"cluster_id": cluster_id, **clade.to_dict()}
        for cluster_id, clade in enumerate(clades, start=1)
    ]
    pd.DataFrame(rows, columns=list(CLADE_REPORT_COLUMNS)).to_csv(path, index=False)
