"""
Stage 1: Aggregator

Scans table rows and accumulates per-column sums and counts for every
value that parses as a number.
"""

from .aggregator import Aggregator, ColumnAggregate, accumulate_numeric_fields

__all__ = ['Aggregator', 'ColumnAggregate', 'accumulate_numeric_fields']
