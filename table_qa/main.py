"""
Main Pipeline Orchestrator

Runs the table-qa stages over one delimited text file:
1. Read the header row and stream data rows
2. Stage 1: Aggregator folds each row into per-column sums and counts
3. Stage 2: QA Synthesizer phrases the aggregates as Q&A pairs
4. Optional QA Check verification of the generated pairs

Usage:
    table-qa data/sales.csv
    table-qa data/sales.csv --verify --verbose
    python -m table_qa data/sales.csv --config config/pipeline_config.yaml
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from tqdm import tqdm

from .config import Config, get_config
from .exceptions import TableQAError
from .stage1.aggregator import Aggregator
from .stage2.synthesizer import QASynthesizer, QuestionAnswer
from .utils.file_utils import iter_csv_rows
from .utils.logging_utils import attach_file_handler, setup_logger, get_logger, set_level
from .verifiers.qa_check import QAChecker

logger = get_logger(__name__)


class Pipeline:
    """
    Main pipeline orchestrator.

    Example:
        >>> pipeline = Pipeline()
        >>> for qa in pipeline.run("data/sales.csv"):
        ...     print(qa.question, qa.answer)
    """

    def __init__(
        self,
        config_file: Optional[str] = None,
        config: Optional[Config] = None
    ):
        """
        Initialize the pipeline.

        Args:
            config_file: Path to config file (optional)
            config: Ready-made Config instance; takes precedence over config_file
        """
        self.config = config if config is not None else get_config(config_file)
        self.last_report: Optional[Dict[str, Any]] = None

        log_config = self.config.get_stage_config('logging')
        file_config = log_config.get('file') or {}
        level = log_config.get('level', 'WARNING')

        setup_logger(__name__, level=level)
        if file_config.get('enabled'):
            attach_file_handler(file_config.get('path', 'logs/table_qa.log'))
        set_level(level)

    def run(
        self,
        file_path: Union[str, Path],
        verify: Optional[bool] = None
    ) -> List[QuestionAnswer]:
        """
        Generate Q&A pairs for a delimited text file.

        Args:
            file_path: Path to the CSV file
            verify: Run the QA Check afterwards (defaults to verification.qa_check.enabled)

        Returns:
            Ordered list of QuestionAnswer pairs

        Raises:
            SourceUnavailableError: If the file cannot be opened
            HeaderUnreadableError: If the header row cannot be decoded
            RecordUnreadableError: If a data row cannot be decoded
            NoNumericColumnsError: If no column holds a numeric value
        """
        data_config = self.config.get_stage_config('data')
        pipeline_config = self.config.get_stage_config('pipeline')
        check_config = self.config.get_verification_config('qa_check')

        if verify is None:
            verify = bool(check_config.get('enabled', False))

        rows = iter_csv_rows(
            file_path,
            delimiter=data_config.get('delimiter', ','),
            encoding=data_config.get('encoding', 'utf-8-sig')
        )
        headers = next(rows, [])

        logger.info(f"Columns in header: {len(headers)}")

        aggregator = Aggregator()
        records = [] if verify else None

        for record in tqdm(
            rows,
            desc="Aggregating rows",
            unit="row",
            disable=not pipeline_config.get('show_progress', False)
        ):
            aggregator.accumulate(record)
            if records is not None:
                records.append(record)

        aggregates = aggregator.finalize()

        synthesizer = QASynthesizer(config=self.config.get_stage_config('synthesizer'))
        pairs = synthesizer.synthesize(aggregates, headers, source=str(file_path))

        if verify:
            self.last_report = self.run_verification(pairs, headers, records)

        return pairs

    def run_verification(
        self,
        pairs: List[QuestionAnswer],
        headers: List[str],
        records: Optional[List[List[str]]] = None
    ) -> Dict[str, Any]:
        """Run the QA Check over generated pairs."""
        check_config = dict(self.config.get_verification_config('qa_check'))
        check_config.pop('enabled', None)
        check_config.setdefault(
            'fallback_column_name',
            self.config.get('synthesizer.fallback_column_name', 'value')
        )

        checker = QAChecker(config=check_config)
        report = checker.verify_pairs(pairs, headers=headers, records=records)

        if report['status'] == 'fail':
            for error in report['errors']:
                logger.error(f"QA check: {error['message']}")
        else:
            for warning in report['warnings']:
                logger.warning(f"QA check: {warning['message']}")

        return report


def generate_qa_from_csv(
    file_path: Union[str, Path],
    config: Optional[Config] = None
) -> List[QuestionAnswer]:
    """
    Generate Q&A pairs from a CSV file path.

    Inspects numeric columns and produces questions like
    "What is the total of column X?" and "What is the average of column X?".

    Args:
        file_path: Path to the CSV file
        config: Optional Config instance (defaults to the global configuration)

    Returns:
        Ordered list of QuestionAnswer pairs
    """
    return Pipeline(config=config).run(file_path)


def format_pairs(pairs: List[QuestionAnswer]) -> str:
    """Render pairs as numbered Q/A blocks separated by blank lines."""
    blocks = []
    for idx, qa in enumerate(pairs, 1):
        blocks.append(f"Q{idx}: {qa.question}\nA{idx}: {qa.answer}\n")
    return "\n".join(blocks)


def main(argv: Optional[List[str]] = None):
    """
    CLI entry point.

    Usage:
        table-qa <path-to-csv> [--config FILE] [--verify] [--progress] [--verbose]
    """
    parser = argparse.ArgumentParser(
        prog='table-qa',
        description="Generate question/answer pairs from the numeric columns of a CSV file"
    )

    parser.add_argument(
        'csv_path',
        help='Path to the CSV file (first row is the header)'
    )

    parser.add_argument(
        '--config',
        help='Path to config file (default: config/pipeline_config.yaml)'
    )

    parser.add_argument(
        '--verify',
        action='store_true',
        help='Check generated pairs against an independent recomputation'
    )

    parser.add_argument(
        '--progress',
        action='store_true',
        help='Show a progress bar while reading rows'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args(argv)

    pipeline = Pipeline(config_file=args.config)

    if args.verbose:
        set_level('DEBUG')

    if args.progress:
        pipeline.config.set('pipeline.show_progress', True)

    try:
        pairs = pipeline.run(args.csv_path, verify=True if args.verify else None)
    except TableQAError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(format_pairs(pairs))


if __name__ == '__main__':
    main()
