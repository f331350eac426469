import logging

from src.daybook.logger import NOISY_LOGGERS, setup_logger


def test_setup_logger_creates_log_directory(tmp_path):
    log_file = tmp_path / "nested" / "daybook.log"

    setup_logger(log_level="INFO", log_file=str(log_file))

    assert log_file.parent.is_dir()


def test_client_request_logs_are_quiet_unless_debug(tmp_path):
    log_file = tmp_path / "daybook.log"

    setup_logger(log_level="info", log_file=str(log_file))
    assert all(logging.getLogger(name).level == logging.WARNING for name in NOISY_LOGGERS)

    setup_logger(log_level="DEBUG", log_file=str(log_file))
    assert all(logging.getLogger(name).level == logging.DEBUG for name in NOISY_LOGGERS)
