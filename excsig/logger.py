# excsig/logger.py

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

import colorlog

from excsig.signature import exception_signature


def setup_excsig_logger(
    log_level=logging.INFO,
    log_to_file=False,
    log_to_console=True,
    log_file="~/.excsig/excsig.log",
    max_bytes=5 * 1024 * 1024,
    backup_count=5,
    use_color=True
):
    logger = logging.getLogger("excsig")
    logger.setLevel(log_level)

    # Clear existing handlers if rerun
    if logger.hasHandlers():
        logger.handlers.clear()

    if log_to_console:
        ch = logging.StreamHandler(sys.stdout)
        ch.setLevel(log_level)
        if use_color:
            ch.setFormatter(colorlog.ColoredFormatter(
                fmt="%(log_color)s[%(levelname)s]%(reset)s %(name)s - %(message)s",
                log_colors={
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "bold_red",
                },
            ))
        else:
            ch.setFormatter(logging.Formatter("[%(levelname)s] %(name)s - %(message)s"))
        logger.addHandler(ch)

    # file handler (rotating)
    if log_to_file:
        log_file = os.path.expanduser(log_file)
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        fh.setLevel(log_level)
        fh.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        logger.addHandler(fh)

    logger.debug("excsig logger configured. color: %s, log_to_file: %s", use_color, log_to_file)
    return logger


class ExceptionSignatureFilter(logging.Filter):
    """
    Tags log records carrying exc_info with the signature of that exception.

    The signature is stored as ``record.exc_signature`` (None when the record has
    no exception), so a formatter can use ``%(exc_signature)s``. When
    traverse_inner is None the config's ``traverse_inner`` value is used.
    """

    def __init__(self, name="", traverse_inner=None, config=None):
        super().__init__(name)
        self.traverse_inner = traverse_inner
        self.config = config

    def filter(self, record):
        record.exc_signature = None
        if record.exc_info and record.exc_info[1] is not None:
            try:
                record.exc_signature = exception_signature(
                    record.exc_info[1],
                    traverse_inner=self.traverse_inner,
                    config=self.config,
                )
            except Exception as e:
                # never raise out of a log call
                logging.getLogger("excsig.logger").debug("Could not compute signature: %s", e)
        return True
