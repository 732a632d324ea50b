"""
table-qa

Derives natural-language question/answer pairs (total, average, count)
from the numeric columns of a delimited text table.
"""

from .exceptions import (
    TableQAError,
    SourceUnavailableError,
    HeaderUnreadableError,
    RecordUnreadableError,
    NoNumericColumnsError
)
from .stage1.aggregator import Aggregator, ColumnAggregate
from .stage2.synthesizer import QASynthesizer, QuestionAnswer
from .main import Pipeline, generate_qa_from_csv

__version__ = "0.1.0"

__all__ = [
    'TableQAError',
    'SourceUnavailableError',
    'HeaderUnreadableError',
    'RecordUnreadableError',
    'NoNumericColumnsError',
    'Aggregator',
    'ColumnAggregate',
    'QASynthesizer',
    'QuestionAnswer',
    'Pipeline',
    'generate_qa_from_csv',
]
