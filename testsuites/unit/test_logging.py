from loguru import logger

from testunit.common import get_config, init_logger
from testunit.framework.config_loader import ConfigLoader


def test_init_logger_writes_log_file(tmp_path):
    log_file = tmp_path / "logs" / "testunit.log"

    init_logger(level="debug", log_file=str(log_file))
    logger.info("hello from test")
    logger.remove()

    assert "hello from test" in log_file.read_text(encoding="utf-8")


def test_init_logger_only_once_unless_forced(tmp_path):
    first = tmp_path / "first.log"
    second = tmp_path / "second.log"

    init_logger(log_file=str(first))
    init_logger(log_file=str(second))
    logger.info("routed")
    init_logger(log_file=str(second), force=True)
    logger.info("rerouted")
    logger.remove()

    assert "routed" in first.read_text(encoding="utf-8")
    assert "rerouted" in second.read_text(encoding="utf-8")
    assert "rerouted" not in first.read_text(encoding="utf-8")


def test_get_config_reads_loader(tmp_path, monkeypatch):
    ConfigLoader(config_path=tmp_path / "absent.yaml")
    monkeypatch.setenv("TESTUNIT_LOGGING_LEVEL", "ERROR")

    assert get_config("logging.level", "INFO") == "ERROR"
    assert get_config("report.allure", True) is True
