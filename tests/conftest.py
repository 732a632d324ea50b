from pathlib import Path

import pytest

from table_qa.config import Config, reset_config

SCENARIO_A = "month,revenue,visits\nJan,100.0,10\nFeb,200.0,20\nMar,300.0,30"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep environment overrides and the global config out of every test."""
    for name in ("CSV_DELIMITER", "CSV_ENCODING", "FALLBACK_COLUMN_NAME", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def write_csv(tmp_path):
    """Factory writing text to a CSV file under tmp_path."""

    def _write(content, name="table.csv", encoding="utf-8"):
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding=encoding)
        return path

    return _write


@pytest.fixture
def default_config(tmp_path) -> Config:
    """Config with no YAML file behind it, so built-in defaults apply."""
    return Config(tmp_path / "missing_config.yaml")


@pytest.fixture
def yaml_config(tmp_path):
    """Factory building a Config from YAML text."""

    def _build(text: str) -> Config:
        path = Path(tmp_path) / "pipeline_config.yaml"
        path.write_text(text, encoding="utf-8")
        return Config(path)

    return _build
