import logging

import pytest

import table_qa.config
from table_qa.config import DEFAULT_CONFIG_FILE, Config, get_config, reset_config


@pytest.mark.unit
def test_missing_file_gives_empty_config(default_config):
    assert default_config.to_dict() == {}
    assert default_config.get("data.delimiter", ",") == ","
    assert default_config.get_stage_config("data") == {}
    assert default_config.get_verification_config("qa_check") == {}


@pytest.mark.unit
def test_dot_notation_lookup(yaml_config):
    config = yaml_config(
        "data:\n  delimiter: ';'\nverification:\n  qa_check:\n    enabled: true\n"
    )
    assert config.get("data.delimiter") == ";"
    assert config.get("data.encoding", "utf-8") == "utf-8"
    assert config.get("data.delimiter.nested", "x") == "x"
    assert config.get_verification_config("qa_check") == {"enabled": True}


@pytest.mark.unit
def test_set_creates_nested_sections(default_config):
    default_config.set("pipeline.show_progress", True)
    assert default_config.get_stage_config("pipeline") == {"show_progress": True}


@pytest.mark.unit
def test_environment_overrides(monkeypatch, yaml_config):
    monkeypatch.setenv("CSV_DELIMITER", "|")
    monkeypatch.setenv("FALLBACK_COLUMN_NAME", "column")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    config = yaml_config("data:\n  delimiter: ','\n")

    assert config.get("data.delimiter") == "|"
    assert config.get("synthesizer.fallback_column_name") == "column"
    assert config.get("logging.level") == "DEBUG"


@pytest.mark.unit
def test_shipped_config_file_loads():
    config = Config(DEFAULT_CONFIG_FILE)
    assert config.get("data.delimiter") == ","
    assert config.get("synthesizer.fallback_column_name") == "value"
    assert config.get("verification.qa_check.enabled") is False


@pytest.mark.unit
def test_global_config_is_shared_until_reset(tmp_path):
    first = get_config(tmp_path / "missing.yaml")
    assert get_config() is first

    reset_config()
    assert get_config(tmp_path / "missing.yaml") is not first


@pytest.mark.unit
def test_to_dict_returns_copy(yaml_config):
    config = yaml_config("data:\n  delimiter: ','\n")
    snapshot = config.to_dict()
    snapshot["extra"] = 1
    assert "extra" not in config.to_dict()


@pytest.mark.unit
def test_absent_default_file_is_not_a_warning(monkeypatch, tmp_path, caplog):
    monkeypatch.setattr(table_qa.config, "DEFAULT_CONFIG_FILE", tmp_path / "absent.yaml")

    with caplog.at_level(logging.INFO, logger="table_qa.config"):
        config = Config()

    assert config.to_dict() == {}
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
    assert any("using built-in defaults" in r.getMessage() for r in caplog.records)


@pytest.mark.unit
def test_explicit_missing_file_warns(tmp_path, caplog):
    with caplog.at_level(logging.INFO, logger="table_qa.config"):
        Config(tmp_path / "typo.yaml")

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "Config file not found" in warnings[0].getMessage()
