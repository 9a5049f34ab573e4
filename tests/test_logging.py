import logging
from logging.handlers import RotatingFileHandler

from cleaning_service_api.app.core import logging_config
from cleaning_service_api.app.core.config import settings
from cleaning_service_api.app.core.logging_config import LOGGER_NAMES, setup_logging


def installed_on(name):
    return [h for h in logging.getLogger(name).handlers if h in logging_config._installed]


def test_setup_logging_writes_app_and_access_logs_to_file(tmp_path):
    logfile = tmp_path / "logs" / "api.log"
    try:
        setup_logging("DEBUG", str(logfile), max_bytes=1024, backup_count=1)
        logging.getLogger("cleaning_service_api.app.services.booking_service").debug("booking trace")
        logging.getLogger("uvicorn.access").info("GET /api/services 200")
        for handler in logging_config._installed:
            handler.flush()

        text = logfile.read_text(encoding="utf-8")
        assert "[DEBUG] cleaning_service_api.app.services.booking_service: booking trace" in text
        assert "uvicorn.access: GET /api/services 200" in text

        rotating = [h for h in logging_config._installed if isinstance(h, RotatingFileHandler)]
        assert len(rotating) == 1
        assert rotating[0].maxBytes == 1024
        assert rotating[0].backupCount == 1
    finally:
        setup_logging(settings.log_level, settings.log_file or None)


def test_setup_logging_twice_does_not_duplicate_handlers(tmp_path):
    try:
        setup_logging("INFO", str(tmp_path / "first.log"))
        setup_logging("INFO", str(tmp_path / "second.log"))
        for name in LOGGER_NAMES:
            handlers = installed_on(name)
            assert len(handlers) == 2
            assert logging.getLogger(name).propagate is False
        files = [h.baseFilename for h in logging_config._installed if isinstance(h, RotatingFileHandler)]
        assert files == [str((tmp_path / "second.log").resolve())]
    finally:
        setup_logging(settings.log_level, settings.log_file or None)


def test_unknown_level_falls_back_to_info():
    try:
        setup_logging("chatty")
        assert logging.getLogger("cleaning_service_api").level == logging.INFO
        assert all(not isinstance(h, RotatingFileHandler) for h in logging_config._installed)
    finally:
        setup_logging(settings.log_level, settings.log_file or None)
