import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from stickynote.constants import LOG_FILE_NAME
from stickynote.logger import configure_logging


def test_configure_logging_is_idempotent(tmp_path) -> None:
    logger = logging.getLogger("stickynote")
    saved = list(logger.handlers)
    for handler in saved:
        logger.removeHandler(handler)
    try:
        configured = configure_logging(tmp_path)
        assert configured is logger
        assert len(logger.handlers) == 2
        assert (tmp_path / LOG_FILE_NAME).exists()

        configure_logging(tmp_path)
        assert len(logger.handlers) == 2

        logging.getLogger("stickynote.settings_store").warning("child message")
        for handler in logger.handlers:
            handler.flush()
        assert "child message" in (tmp_path / LOG_FILE_NAME).read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        for handler in saved:
            logger.addHandler(handler)
