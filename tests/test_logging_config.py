import logging

from brownian_exits.logging_config import setup_logging


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "run.log"
    logger = setup_logging(logging.DEBUG, str(log_file))
    try:
        logging.getLogger("brownian_exits.simulation").info("worker started")
        # A second call replaces the handlers instead of adding more
        setup_logging(logging.DEBUG, str(log_file))
        assert len(logger.handlers) == 2
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)

    text = log_file.read_text(encoding="utf-8")
    assert "Logging initialized." in text
