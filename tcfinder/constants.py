"""Constants used throughout tcfinder."""

# Node type tags recognised in phylo4 tables
TIP_TAG = "tip"
INTERNAL_TAG = "internal"
ROOT_TAG = "root"
NODE_TYPE_TAGS = (TIP_TAG, INTERNAL_TAG, ROOT_TAG)

# Ancestor index marking the root record
NO_ANCESTOR = 0

# Mandatory phylo4 CSV columns
PHYLO4_COLUMNS = ("label", "node", "ancestor", "nodetype")

# Cell values read as a missing label (R writes NA for unlabelled nodes)
MISSING_LABEL_VALUES = ("NA", "")

# Output table columns
CLUSTER_TABLE_COLUMNS = ("cluster_id", "label")
CLADE_REPORT_COLUMNS = (
    "cluster_id",
    "node",
    "label",
    "leaf_count",
    "target_count",
    "proportion",
)

# Default clustering thresholds
DEFAULT_MINIMUM_SIZE = 2
DEFAULT_MINIMUM_PROP = 0.9
