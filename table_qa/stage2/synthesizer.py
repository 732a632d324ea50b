"""
QA Synthesizer - Stage 2

Turns finalized column aggregates into natural-language question/answer pairs.

For each column with at least one numeric value, three questions are asked
(in this order): its total, its average, and how many rows supplied a value.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from ..exceptions import NoNumericColumnsError
from ..stage1.aggregator import ColumnAggregate
from ..utils.logging_utils import get_logger
from ..utils.stats_utils import format_count, format_decimal

logger = get_logger(__name__)

TOTAL_QUESTION = 'What is the total of column "{name}"?'
AVERAGE_QUESTION = 'What is the average of column "{name}"?'
COUNT_QUESTION = 'How many rows contain a numeric value in column "{name}"?'

DEFAULT_FALLBACK_NAME = 'value'


class QuestionAnswer(BaseModel):
    """Simple question and answer pair generated from a table."""

    model_config = ConfigDict(frozen=True)

    question: str
    answer: str


class QASynthesizer:
    """
    Stage 2: QA Synthesizer

    Attributes:
        config: Configuration dictionary with settings

    Example:
        >>> synthesizer = QASynthesizer()
        >>> pairs = synthesizer.synthesize(
        ...     {0: ColumnAggregate(sum=600.0, count=3)},
        ...     ["revenue"]
        ... )
        >>> pairs[0].answer
        '600.00'
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the QA Synthesizer.

        Args:
            config: Configuration dict (``synthesizer`` section of pipeline_config.yaml)
        """
        self.config = {
            'fallback_column_name': DEFAULT_FALLBACK_NAME
        }

        if config:
            self.config.update(config)

    def column_name(self, headers: Sequence[str], idx: int) -> str:
        """Resolve the display name for a column index."""
        if idx < len(headers):
            return headers[idx].strip()
        return self.config['fallback_column_name']

    def synthesize(
        self,
        aggregates: Mapping[int, ColumnAggregate],
        headers: Sequence[str],
        source: Optional[str] = None
    ) -> List[QuestionAnswer]:
        """
        Generate Q&A pairs for every column that produced numeric values.

        Columns are emitted in ascending index order.

        Args:
            aggregates: Column index -> finalized aggregate
            headers: Header row (may be shorter than the widest data row)
            source: Identifier of the data source, used in error messages

        Returns:
            Ordered list of QuestionAnswer pairs

        Raises:
            NoNumericColumnsError: If no column has a numeric value
        """
        qa_pairs = []

        for idx in sorted(aggregates):
            stat = aggregates[idx]
            if stat.count == 0:
                continue

            name = self.column_name(headers, idx)
            qa_pairs.extend(self._column_pairs(name, stat))

            logger.debug(f"Column {idx} ({name}): sum={stat.sum}, count={stat.count}")

        if not qa_pairs:
            message = "No numeric columns found"
            if source:
                message += f" in {source}"
            raise NoNumericColumnsError(message, source=source)

        logger.info(f"Generated {len(qa_pairs)} Q&A pairs for {len(qa_pairs) // 3} column(s)")

        return qa_pairs

    def _column_pairs(self, name: str, stat: ColumnAggregate) -> List[QuestionAnswer]:
        return [
            QuestionAnswer(
                question=TOTAL_QUESTION.format(name=name),
                answer=format_decimal(stat.sum)
            ),
            QuestionAnswer(
                question=AVERAGE_QUESTION.format(name=name),
                answer=format_decimal(stat.average)
            ),
            QuestionAnswer(
                question=COUNT_QUESTION.format(name=name),
                answer=format_count(stat.count)
            ),
        ]
