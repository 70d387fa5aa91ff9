"""Logging package for tcfinder."""

from tcfinder.logger.base_logger import AlgorithmLogger
from tcfinder.logger.table_logger import TableLogger

# Shared singleton for tracing clustering runs; the CLI enables it with --verbose
tc_logger = TableLogger("TCFinder")
tc_logger.disabled = True

__all__ = [
    "AlgorithmLogger",
    "TableLogger",
    "tc_logger",
]
