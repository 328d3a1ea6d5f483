import logging

from config import Settings
from utils.logging_config import HttpNoiseFilter, setup_logging


def _record(msg: str) -> logging.LogRecord:
    return logging.LogRecord("urllib3.connectionpool", logging.DEBUG, "", 0, msg, None, None)


def test_filter_excludes_connection_noise():
    filt = HttpNoiseFilter()

    assert not filt.filter(_record("Starting new HTTPS connection (1): api.test:443"))
    assert not filt.filter(_record("   Starting new HTTP connection (1): api.test:80"))
    assert not filt.filter(_record("Resetting dropped connection: api.test"))


def test_filter_keeps_other_messages():
    filt = HttpNoiseFilter()

    for msg in ['https://api.test:443 "GET /api/clients HTTP/1.1" 200 None', "Retrying"]:
        assert filt.filter(_record(msg))


def test_setup_logging_writes_to_log_dir(tmp_path):
    settings = Settings(log_dir=str(tmp_path / "logs"), log_level="WARNING")

    setup_logging(settings)
    logging.getLogger("clients.test").warning("hello")
    for handler in logging.getLogger().handlers:
        handler.flush()

    log_file = tmp_path / "logs" / "clients.log"
    assert log_file.exists()
    assert "hello" in log_file.read_text(encoding="utf-8")
    assert logging.getLogger().level == logging.WARNING


def test_detailed_logging_forces_debug(tmp_path):
    settings = Settings(log_dir=str(tmp_path), detailed_logging=True)

    setup_logging(settings)

    assert logging.getLogger().level == logging.DEBUG
