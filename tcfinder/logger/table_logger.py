"""Table display functionality for logs.

Renders small tables (per-clade statistics, unmatched targets) to the
terminal through ``tabulate``.
"""

from typing import Any, List, Optional, Sequence
from tabulate import tabulate
from tcfinder.logger.base_logger import AlgorithmLogger


class TableLogger(AlgorithmLogger):
    """Extension of AlgorithmLogger with table support."""

    def table(
        self,
        data: List[List[Any]],
        headers: Optional[Sequence[str]] = None,
        title: Optional[str] = None,
        tablefmt: str = "grid",
        colalign: Optional[Sequence[Optional[str]]] = None,
        floatfmt: str = ".3f",
    ) -> None:
        """Display data as a formatted table."""
        if self.disabled:
            return

        if title:
            self.logger.info(f"\n{title}:")

        ascii_table = tabulate(
            data,
            headers=list(headers) if headers else [],
            tablefmt=tablefmt,
            colalign=colalign,
            floatfmt=floatfmt,
            showindex=False,
        )
        self.info(ascii_table)
