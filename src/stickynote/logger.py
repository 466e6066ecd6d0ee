# SPDX-License-Identifier: GPL-3.0-or-later
"""Application logging setup."""

import logging
from logging.handlers import RotatingFileHandler

from stickynote import config
from stickynote.constants import LOG_FILE_NAME


def configure_logging(log_directory=None) -> logging.Logger:
    """Attach a rotating log file and a stderr stream to the app logger.

    Calling this again once handlers are attached is a no-op.
    """
    logger = logging.getLogger('stickynote')
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if config.DEBUG else logging.INFO)

    if log_directory is None:
        from stickynote.data_paths import log_dir
        log_directory = log_dir()

    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    handler = RotatingFileHandler(
        log_directory / LOG_FILE_NAME,
        maxBytes=1_048_576,
        backupCount=5,
        encoding='utf-8',
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    logger.info('Logging to %s', handler.baseFilename)
    return logger
