"""
Verification: QA Check

Validates the output of Stage 2:
- Pairs come in total / average / count triples for the same column
- Each average agrees with total / count within display rounding
- Totals and counts match an independent recomputation over the raw rows
"""

import re
import pandas as pd
import numpy as np
from collections import Counter
from datetime import datetime
from typing import Dict, Any, List, Optional, Sequence

from ..stage2.synthesizer import (
    QuestionAnswer,
    TOTAL_QUESTION,
    AVERAGE_QUESTION,
    COUNT_QUESTION,
    DEFAULT_FALLBACK_NAME
)
from ..utils.logging_utils import get_logger
from ..utils.stats_utils import NUMERIC_PATTERN

logger = get_logger(__name__)


def _template_regex(template: str) -> re.Pattern:
    head, tail = template.split('{name}')
    return re.compile(re.escape(head) + '(?P<name>.*)' + re.escape(tail))


_TEMPLATES = [
    ('total', _template_regex(TOTAL_QUESTION)),
    ('average', _template_regex(AVERAGE_QUESTION)),
    ('count', _template_regex(COUNT_QUESTION)),
]


class QAChecker:
    """
    Verification of generated Q&A pairs.

    Example:
        >>> checker = QAChecker()
        >>> report = checker.verify_pairs(pairs, headers=headers, records=records)
        >>> report['status']
        'pass'
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the QA Checker.

        Args:
            config: Configuration dictionary (``verification.qa_check`` section)
        """
        self.config = {
            'tolerance': 0.01,  # Two rounded decimals on total and average
            'recompute': True,
            'fallback_column_name': DEFAULT_FALLBACK_NAME
        }

        if config:
            self.config.update(config)

        logger.info("Initialized QA Checker")

    def verify_pairs(
        self,
        pairs: Sequence[QuestionAnswer],
        headers: Optional[Sequence[str]] = None,
        records: Optional[Sequence[Sequence[str]]] = None
    ) -> Dict[str, Any]:
        """
        Verify a list of Q&A pairs.

        Args:
            pairs: Output of the QA Synthesizer
            headers: Header row of the source table (needed for recomputation)
            records: Raw data rows of the source table (optional)

        Returns:
            Verification report
        """
        logger.info(f"Verifying {len(pairs)} Q&A pairs")

        report = {
            'timestamp': datetime.now().isoformat(),
            'pair_count': len(pairs),
            'status': 'pass',
            'errors': [],
            'warnings': [],
            'checks': {}
        }

        columns = self._check_structure(pairs, report)

        if columns:
            self._check_consistency(columns, report)
            self._check_names(columns, report)

        if self.config['recompute'] and records is not None and headers is not None:
            self._check_recompute(columns, headers, records, report)

        if len(report['errors']) > 0:
            report['status'] = 'fail'
        elif len(report['warnings']) > 0:
            report['status'] = 'pass_with_warnings'

        logger.info(f"  Status: {report['status']}")
        logger.info(f"  Errors: {len(report['errors'])}, Warnings: {len(report['warnings'])}")

        return report

    def _check_structure(
        self,
        pairs: Sequence[QuestionAnswer],
        report: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        """
        Parse pairs back into per-column answers.

        Returns:
            One dict per column with name, total, average and count
        """
        if len(pairs) % 3 != 0:
            report['errors'].append({
                'check': 'structure',
                'type': 'incomplete_triple',
                'message': f'{len(pairs)} pairs is not a multiple of 3'
            })
            report['checks']['structure'] = {'status': 'fail'}
            return []

        columns = []

        for start in range(0, len(pairs), 3):
            triple = pairs[start:start + 3]
            names = []

            for (kind, pattern), qa in zip(_TEMPLATES, triple):
                match = pattern.fullmatch(qa.question)
                if match is None:
                    report['errors'].append({
                        'check': 'structure',
                        'type': 'unexpected_question',
                        'position': start,
                        'expected': kind,
                        'message': f'Expected a {kind} question, got: {qa.question}'
                    })
                    report['checks']['structure'] = {'status': 'fail'}
                    return []
                names.append(match.group('name'))

            if len(set(names)) != 1:
                report['errors'].append({
                    'check': 'structure',
                    'type': 'mixed_columns',
                    'position': start,
                    'message': f'Triple at position {start} mixes columns: {names}'
                })
                report['checks']['structure'] = {'status': 'fail'}
                return []

            try:
                columns.append({
                    'name': names[0],
                    'total': float(triple[0].answer),
                    'average': float(triple[1].answer),
                    'count': int(triple[2].answer)
                })
            except ValueError as e:
                report['errors'].append({
                    'check': 'structure',
                    'type': 'unparseable_answer',
                    'position': start,
                    'message': f'Answer for column "{names[0]}" is not numeric: {e}'
                })
                report['checks']['structure'] = {'status': 'fail'}
                return []

        report['checks']['structure'] = {
            'column_count': len(columns),
            'status': 'pass'
        }

        return columns

    def _check_consistency(
        self,
        columns: List[Dict[str, Any]],
        report: Dict[str, Any]
    ) -> None:
        """Check that average ~= total / count for every column."""
        status = 'pass'

        for col in columns:
            if col['count'] <= 0:
                report['errors'].append({
                    'check': 'consistency',
                    'type': 'non_positive_count',
                    'column': col['name'],
                    'message': f'Column "{col["name"]}" reports count {col["count"]}'
                })
                status = 'fail'
                continue

            expected = col['total'] / col['count']
            if not np.isclose(expected, col['average'], rtol=1e-9, atol=self.config['tolerance']):
                report['errors'].append({
                    'check': 'consistency',
                    'type': 'average_mismatch',
                    'column': col['name'],
                    'expected': expected,
                    'actual': col['average'],
                    'message': (
                        f'Average of "{col["name"]}" ({col["average"]:.2f}) '
                        f'does not match total / count ({expected:.2f})'
                    )
                })
                status = 'fail'

        report['checks']['consistency'] = {'status': status}

    def _check_names(
        self,
        columns: List[Dict[str, Any]],
        report: Dict[str, Any]
    ) -> None:
        """Warn about column names that make questions ambiguous."""
        counts = Counter(col['name'] for col in columns)

        for name, n in counts.items():
            if n > 1:
                report['warnings'].append({
                    'check': 'names',
                    'type': 'duplicate_column_name',
                    'column': name,
                    'message': f'{n} columns are named "{name}"'
                })

            if name == self.config['fallback_column_name']:
                report['warnings'].append({
                    'check': 'names',
                    'type': 'fallback_column_name',
                    'column': name,
                    'message': f'Column "{name}" has no header and uses the fallback name'
                })

    def _recompute_stats(
        self,
        headers: Sequence[str],
        records: Sequence[Sequence[str]]
    ) -> List[Dict[str, Any]]:
        """Recompute per-column totals and counts with pandas."""
        frame = pd.DataFrame([list(r) for r in records])
        expected = []

        for idx in frame.columns:
            series = frame[idx].dropna().astype(str).str.strip()
            values = pd.to_numeric(series[series.str.fullmatch(NUMERIC_PATTERN, flags=re.ASCII)])

            if len(values) == 0:
                continue

            if idx < len(headers):
                name = headers[idx].strip()
            else:
                name = self.config['fallback_column_name']

            expected.append({
                'name': name,
                'total': float(values.sum()),
                'count': int(len(values))
            })

        return expected

    def _check_recompute(
        self,
        columns: List[Dict[str, Any]],
        headers: Sequence[str],
        records: Sequence[Sequence[str]],
        report: Dict[str, Any]
    ) -> None:
        """Compare answers with an independent recomputation over the raw rows."""
        expected = self._recompute_stats(headers, records)
        status = 'pass'

        if len(expected) != len(columns):
            report['errors'].append({
                'check': 'recompute',
                'type': 'column_count_mismatch',
                'expected': len(expected),
                'actual': len(columns),
                'message': f'Expected {len(expected)} numeric columns, answers cover {len(columns)}'
            })
            report['checks']['recompute'] = {'status': 'fail'}
            return

        for exp, col in zip(expected, columns):
            if exp['name'] != col['name']:
                report['errors'].append({
                    'check': 'recompute',
                    'type': 'column_order_mismatch',
                    'expected': exp['name'],
                    'actual': col['name'],
                    'message': f'Expected column "{exp["name"]}", got "{col["name"]}"'
                })
                status = 'fail'
                continue

            if exp['count'] != col['count']:
                report['errors'].append({
                    'check': 'recompute',
                    'type': 'count_mismatch',
                    'column': col['name'],
                    'expected': exp['count'],
                    'actual': col['count'],
                    'message': f'Count of "{col["name"]}" is {col["count"]}, recomputed {exp["count"]}'
                })
                status = 'fail'

            if not np.isclose(exp['total'], col['total'], rtol=1e-9, atol=self.config['tolerance']):
                report['errors'].append({
                    'check': 'recompute',
                    'type': 'total_mismatch',
                    'column': col['name'],
                    'expected': exp['total'],
                    'actual': col['total'],
                    'message': f'Total of "{col["name"]}" is {col["total"]:.2f}, recomputed {exp["total"]:.2f}'
                })
                status = 'fail'

        report['checks']['recompute'] = {
            'column_count': len(expected),
            'status': status
        }
