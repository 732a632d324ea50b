import pytest

from table_qa.exceptions import (
    HeaderUnreadableError,
    RecordUnreadableError,
    SourceUnavailableError,
)
from table_qa.utils.file_utils import iter_csv_rows, load_config


@pytest.mark.unit
def test_rows_are_returned_raw(write_csv):
    path = write_csv("name , amount\n a , 1 \nb,\n")
    assert list(iter_csv_rows(path)) == [["name ", " amount"], [" a ", " 1 "], ["b", ""]]


@pytest.mark.unit
def test_blank_lines_are_skipped(write_csv):
    path = write_csv("\na\n1\n\n3\n")
    assert list(iter_csv_rows(path)) == [["a"], ["1"], ["3"]]


@pytest.mark.unit
def test_ragged_rows_are_preserved(write_csv):
    path = write_csv("a,b,c\n1\n1,2,3,4\n")
    assert list(iter_csv_rows(path)) == [["a", "b", "c"], ["1"], ["1", "2", "3", "4"]]


@pytest.mark.unit
def test_quoted_fields_with_delimiters(write_csv):
    path = write_csv('label,amount\n"Smith, J",12.5\n')
    assert list(iter_csv_rows(path))[1] == ["Smith, J", "12.5"]


@pytest.mark.unit
def test_custom_delimiter(write_csv):
    path = write_csv("a;b\n1;2\n")
    assert list(iter_csv_rows(path, delimiter=";")) == [["a", "b"], ["1", "2"]]


@pytest.mark.unit
def test_leading_bom_is_dropped(write_csv):
    path = write_csv(b"\xef\xbb\xbfprice\n1\n")
    assert next(iter_csv_rows(path)) == ["price"]


@pytest.mark.unit
def test_missing_file_raises_source_unavailable(tmp_path):
    path = tmp_path / "nope.csv"
    with pytest.raises(SourceUnavailableError) as exc_info:
        list(iter_csv_rows(path))

    assert exc_info.value.source == str(path)
    assert isinstance(exc_info.value.cause, FileNotFoundError)
    assert "Failed to open" in str(exc_info.value)


@pytest.mark.unit
def test_directory_raises_source_unavailable(tmp_path):
    with pytest.raises(SourceUnavailableError):
        list(iter_csv_rows(tmp_path))


@pytest.mark.unit
def test_malformed_header_raises_header_unreadable(write_csv):
    path = write_csv('a,"b"c\n1,2\n')
    with pytest.raises(HeaderUnreadableError, match="Failed to read headers"):
        list(iter_csv_rows(path))


@pytest.mark.unit
def test_invalid_utf8_header_raises_header_unreadable(write_csv):
    path = write_csv(b"a,\xff\xfe\n1,2\n")
    with pytest.raises(HeaderUnreadableError) as exc_info:
        list(iter_csv_rows(path))

    assert isinstance(exc_info.value.cause, UnicodeDecodeError)


@pytest.mark.unit
def test_invalid_utf8_record_raises_record_unreadable(write_csv):
    path = write_csv(b"a,b\n1,2\n3,\xff\n")
    rows = iter_csv_rows(path)

    assert next(rows) == ["a", "b"]
    assert next(rows) == ["1", "2"]
    with pytest.raises(RecordUnreadableError) as exc_info:
        next(rows)

    assert isinstance(exc_info.value.cause, UnicodeDecodeError)
    assert exc_info.value.line_number == 3


@pytest.mark.unit
def test_crlf_line_endings(write_csv):
    path = write_csv(b"a,b\r\n1,2\r\n")
    assert list(iter_csv_rows(path)) == [["a", "b"], ["1", "2"]]


@pytest.mark.unit
def test_multiline_quoted_field(write_csv):
    path = write_csv('note,amount\n"two\nlines",5\n')
    assert list(iter_csv_rows(path))[1] == ["two\nlines", "5"]


@pytest.mark.unit
def test_malformed_record_raises_record_unreadable(write_csv):
    path = write_csv('a,b\n1,2\n3,"4"x\n')
    rows = iter_csv_rows(path)

    assert next(rows) == ["a", "b"]
    assert next(rows) == ["1", "2"]
    with pytest.raises(RecordUnreadableError) as exc_info:
        next(rows)

    assert exc_info.value.line_number == 3
    assert "line 3" in str(exc_info.value)


@pytest.mark.unit
def test_empty_file_yields_nothing(write_csv):
    path = write_csv("")
    assert list(iter_csv_rows(path)) == []


@pytest.mark.unit
def test_load_config_reads_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("data:\n  delimiter: ';'\n", encoding="utf-8")
    assert load_config(path) == {"data": {"delimiter": ";"}}


@pytest.mark.unit
def test_load_config_empty_file_is_empty_dict(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == {}


@pytest.mark.unit
def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")
