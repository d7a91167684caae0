import pytest
import yaml

from testunit.framework.config_loader import DEFAULTS, ConfigLoader, ConfigurationError, coerce


def test_env_override_and_defaults(monkeypatch, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump({"logging": {"level": "WARNING"}, "report": {"allure": True}}),
        encoding="utf-8",
    )

    ConfigLoader.reset()
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("logging.level") == "WARNING"
    assert loader.get("report.json_indent", 2) == 2

    ConfigLoader.reset()
    monkeypatch.setenv("TESTUNIT_LOGGING_LEVEL", "DEBUG")
    monkeypatch.setenv("TESTUNIT_REPORT_ALLURE", "false")
    monkeypatch.setenv("TESTUNIT_REPORT_JSON_INDENT", "4")
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("logging.level") == "DEBUG"
    assert loader.get("report.allure", True) is False
    assert loader.get("report.json_indent", 2) == 4


def test_reload_updates_values(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"report": {"json_indent": 2}}), encoding="utf-8")

    ConfigLoader.reset()
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("report.json_indent") == 2

    config_path.write_text(yaml.dump({"report": {"json_indent": 4}}), encoding="utf-8")
    loader.reload()
    assert loader.get("report.json_indent") == 4
    assert loader.get_section("report") == {"allure": True, "json_indent": 4}


def test_singleton_and_missing_file(tmp_path):
    loader = ConfigLoader(config_path=tmp_path / "absent.yaml")

    assert ConfigLoader() is loader
    assert loader.get("logging.level") == "INFO"
    assert loader.get("logging.file") is None
    assert loader.get("logging.file", "fallback.log") == "fallback.log"
    assert loader.get_section("unknown") == {}


def test_invalid_yaml_raises(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("logging: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_path)


def test_get_section_applies_env_overrides(monkeypatch, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"logging": {"level": "WARNING"}}), encoding="utf-8")
    monkeypatch.setenv("TESTUNIT_LOGGING_LEVEL", "ERROR")
    monkeypatch.setenv("TESTUNIT_LOGGING_FILE", "logs/run.log")
    monkeypatch.setenv("TESTUNIT_REPORT_JSON_INDENT", "8")

    loader = ConfigLoader(config_path=config_path)

    logging_section = loader.get_section("logging")
    assert logging_section["level"] == "ERROR"
    assert logging_section["file"] == "logs/run.log"
    assert logging_section["rotation"] == "10 MB"
    assert loader.get_section("report")["json_indent"] == 8
    assert loader.get("logging.file") == "logs/run.log"


def test_undeclared_env_key_follows_default_type(monkeypatch, tmp_path):
    monkeypatch.setenv("TESTUNIT_REPORT_RETRIES", "5")
    loader = ConfigLoader(config_path=tmp_path / "absent.yaml")

    assert loader.get("report.retries", 3) == 5
    assert loader.get_section("report")["retries"] == "5"


def test_state_is_per_instance(tmp_path):
    first_path = tmp_path / "first.yaml"
    first_path.write_text(yaml.dump({"report": {"json_indent": 1}}), encoding="utf-8")
    second_path = tmp_path / "second.yaml"
    second_path.write_text(yaml.dump({"report": {"json_indent": 3}}), encoding="utf-8")

    first = ConfigLoader(config_path=first_path)
    ConfigLoader.reset()
    second = ConfigLoader(config_path=second_path)

    assert first is not second
    assert first.get("report.json_indent") == 1
    assert second.get("report.json_indent") == 3
    assert "_config" not in vars(ConfigLoader)
    assert DEFAULTS["report"]["json_indent"] == 2


def test_coerce():
    assert coerce("yes", False) is True
    assert coerce("off", True) is False
    assert coerce("12", 0) == 12
    assert coerce("0.5", 1.0) == 0.5
    assert coerce("abc", 1) == "abc"
    assert coerce("text", None) == "text"
