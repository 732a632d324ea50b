"""
File I/O utilities for table-qa.
Handles loading YAML configuration and streaming rows out of delimited text files.
"""

import codecs
import csv
import yaml
from pathlib import Path
from typing import Any, BinaryIO, Dict, Iterator, List, Union
from .logging_utils import get_logger
from ..exceptions import (
    SourceUnavailableError,
    HeaderUnreadableError,
    RecordUnreadableError
)

logger = get_logger(__name__)


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Configuration dictionary (empty if the file has no content)

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is malformed

    Example:
        >>> config = load_config("config/pipeline_config.yaml")
        >>> print(config['data']['delimiter'])
        ,
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.info(f"Loading config from: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    return config or {}


def _decode_lines(f: BinaryIO, encoding: str) -> Iterator[str]:
    """Decode a binary file one line at a time so errors surface on their own line."""
    decoder = codecs.getincrementaldecoder(encoding)()
    for raw_line in f:
        yield decoder.decode(raw_line)
    tail = decoder.decode(b'', final=True)
    if tail:
        yield tail


def iter_csv_rows(
    file_path: Union[str, Path],
    delimiter: str = ',',
    encoding: str = 'utf-8-sig'
) -> Iterator[List[str]]:
    """
    Stream the raw rows of a delimited text file.

    The first yielded row is the header. Fields are returned exactly as
    decoded (no trimming, no type conversion) and rows may differ in length.
    Blank lines are skipped.

    Args:
        file_path: Path to the delimited file
        delimiter: Single-character field separator
        encoding: Text encoding ('utf-8-sig' also accepts a leading BOM)

    Yields:
        One list of field strings per row

    Raises:
        SourceUnavailableError: If the file cannot be opened or read
        HeaderUnreadableError: If the first row cannot be decoded
        RecordUnreadableError: If a later row cannot be decoded

    Example:
        >>> rows = iter_csv_rows("data/sales.csv")
        >>> headers = next(rows)
        >>> for record in rows:
        ...     print(record)
    """
    file_path = Path(file_path)
    source = str(file_path)

    try:
        f = open(file_path, 'rb')
    except OSError as e:
        raise SourceUnavailableError(
            f"Failed to open {source}: {e}", source=source, cause=e
        ) from e

    logger.info(f"Reading table: {source}")

    with f:
        reader = csv.reader(_decode_lines(f, encoding), delimiter=delimiter, strict=True)
        rows_read = 0

        while True:
            try:
                row = next(reader)
            except StopIteration:
                break
            except (csv.Error, UnicodeDecodeError) as e:
                if rows_read == 0:
                    raise HeaderUnreadableError(
                        f"Failed to read headers from {source}: {e}",
                        source=source,
                        cause=e
                    ) from e
                # The undecodable line never reached the reader's line count.
                line_number = reader.line_num
                if isinstance(e, UnicodeDecodeError):
                    line_number += 1
                raise RecordUnreadableError(
                    f"Failed to read record at line {line_number} of {source}: {e}",
                    source=source,
                    cause=e,
                    line_number=line_number
                ) from e
            except OSError as e:
                raise SourceUnavailableError(
                    f"Failed to read {source}: {e}", source=source, cause=e
                ) from e

            if not row:
                continue

            rows_read += 1
            yield row

    logger.debug(f"Read {rows_read} rows (including header) from {source}")
