"""
Aggregator - Stage 1

Folds table rows into per-column running aggregates:
- Sum of every cell that parses as a decimal number
- Count of how many cells parsed

Empty and non-numeric cells are skipped silently. A column only becomes
numeric once a value in it actually parses.
"""

from types import MappingProxyType
from typing import Dict, Mapping, Optional, Sequence

from pydantic import BaseModel

from ..utils.logging_utils import get_logger
from ..utils.stats_utils import parse_numeric

logger = get_logger(__name__)


class ColumnAggregate(BaseModel):
    """
    Running sum and count for one column index.

    Example:
        >>> agg = ColumnAggregate()
        >>> agg.add(2.5)
        >>> agg.add(7.5)
        >>> agg.average
        5.0
    """

    sum: float = 0.0
    count: int = 0

    def add(self, value: float) -> None:
        self.sum += value
        self.count += 1

    @property
    def average(self) -> Optional[float]:
        """Mean of the accumulated values, or None when nothing was counted."""
        if self.count == 0:
            return None
        return self.sum / self.count

    def merge(self, other: "ColumnAggregate") -> "ColumnAggregate":
        """Return a new aggregate combining this one with ``other``."""
        return ColumnAggregate(sum=self.sum + other.sum, count=self.count + other.count)


def accumulate_numeric_fields(
    record: Sequence[str],
    stats: Dict[int, ColumnAggregate]
) -> None:
    """
    Fold one row into ``stats`` in place.

    Args:
        record: Raw field strings, positionally aligned with the header
        stats: Mapping of column index to aggregate, updated in place
    """
    for idx, field in enumerate(record):
        trimmed = field.strip()
        if not trimmed:
            continue

        value = parse_numeric(trimmed)
        if value is None:
            continue

        entry = stats.get(idx)
        if entry is None:
            entry = stats[idx] = ColumnAggregate()
        entry.add(value)


class Aggregator:
    """
    Stage 1: Aggregator

    Owns the column index -> ColumnAggregate mapping for a single pipeline run.

    Attributes:
        stats: Mutable mapping of column index to aggregate
        rows_seen: Number of data rows accumulated

    Example:
        >>> aggregator = Aggregator()
        >>> aggregator.accumulate(["Jan", "100.0", "10"])
        >>> aggregator.accumulate(["Feb", "200.0", "20"])
        >>> aggregates = aggregator.finalize()
        >>> aggregates[1].sum
        300.0
    """

    def __init__(self):
        self.stats: Dict[int, ColumnAggregate] = {}
        self.rows_seen = 0
        self._finalized = False

    def accumulate(self, record: Sequence[str]) -> None:
        """Fold one data row into the running aggregates."""
        if self._finalized:
            raise RuntimeError("Aggregator has already been finalized")

        accumulate_numeric_fields(record, self.stats)
        self.rows_seen += 1

    def merge(self, other: "Aggregator") -> "Aggregator":
        """
        Combine two partial aggregators into a new one.

        Useful when rows are partitioned across workers; sums and counts
        per column index simply add up.

        Args:
            other: Aggregator built over a disjoint set of rows

        Returns:
            New Aggregator holding the combined state
        """
        merged = Aggregator()
        for idx in set(self.stats) | set(other.stats):
            left = self.stats.get(idx, ColumnAggregate())
            right = other.stats.get(idx, ColumnAggregate())
            merged.stats[idx] = left.merge(right)
        merged.rows_seen = self.rows_seen + other.rows_seen
        return merged

    def finalize(self) -> Mapping[int, ColumnAggregate]:
        """
        Stop accepting rows and expose the aggregates.

        Returns:
            Read-only mapping sorted by column index
        """
        self._finalized = True

        numeric_columns = sum(1 for agg in self.stats.values() if agg.count > 0)
        logger.info(
            f"Aggregated {self.rows_seen} rows: "
            f"{numeric_columns} column(s) with numeric values"
        )

        return MappingProxyType(dict(sorted(self.stats.items())))
