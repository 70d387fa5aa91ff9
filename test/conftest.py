import logging
from pathlib import Path

import pytest

from tcfinder.logger import tc_logger
from tcfinder.models import NodeRecord, NodeType

DATA_DIR = Path(__file__).parent / "data"


def pytest_configure(config):
    """Set up test environment before tests run."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Exercise the tracing paths of the shared logger
    tc_logger.disabled = False


@pytest.fixture
def cherry_records():
    """
    root(1)
     /   \\
    A(2) B(3)
    """
    return [
        NodeRecord(1, 0, None, NodeType.ROOT),
        NodeRecord(2, 1, "A", NodeType.TIP),
        NodeRecord(3, 1, "B", NodeType.TIP),
    ]


@pytest.fixture
def chain_records():
    """
    root(1)
      |
     X(2)
     /  \\
    Y(3) Z(4)
    """
    return [
        NodeRecord(1, 0, None, NodeType.ROOT),
        NodeRecord(2, 1, "X", NodeType.INTERNAL),
        NodeRecord(3, 2, "Y", NodeType.TIP),
        NodeRecord(4, 2, "Z", NodeType.TIP),
    ]


@pytest.fixture
def tree_path():
    return DATA_DIR / "rtree.csv"


@pytest.fixture
def targets_path():
    return DATA_DIR / "targets.txt"
