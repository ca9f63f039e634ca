import logging
import logging.handlers

import pytest

from fieldform.log import setup


@pytest.fixture
def restore_loggers():
    saved = {}
    for name in ("fieldform", "fieldform.alerts"):
        logger = logging.getLogger(name)
        saved[name] = (list(logger.handlers), logger.level)
    yield
    for name, (handlers, level) in saved.items():
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers = handlers
        logger.setLevel(level)


def file_handler(logger_name):
    handlers = [
        h
        for h in logging.getLogger(logger_name).handlers
        if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(handlers) == 1
    return handlers[0]


def test_setup_creates_rotating_log_file(tmp_path, restore_loggers):
    logfile = tmp_path / "logs" / "fieldform.log"

    assert setup(logfile) == logfile.resolve()
    logging.getLogger("fieldform.test").debug("written to file")

    handler = file_handler("fieldform")
    assert handler.baseFilename == str(logfile.resolve())
    handler.flush()
    assert "written to file" in logfile.read_text(encoding="utf-8")


def test_alerts_get_their_own_file(tmp_path, restore_loggers):
    logfile = tmp_path / "logs" / "fieldform.log"
    setup(logfile, console_level=logging.ERROR)

    logging.getLogger("fieldform.alerts").warning("Pole Inspection: 1 threshold alert")
    logging.getLogger("fieldform.workflow").warning("not an alert")

    alerts = file_handler("fieldform.alerts")
    alerts.flush()
    file_handler("fieldform").flush()

    alerts_text = (tmp_path / "logs" / "alerts.log").read_text(encoding="utf-8")
    assert "Pole Inspection: 1 threshold alert" in alerts_text
    assert "not an alert" not in alerts_text
    assert "Pole Inspection: 1 threshold alert" in logfile.read_text(encoding="utf-8")
