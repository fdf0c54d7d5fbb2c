"""
Tests for excsig/logger.py - logger setup and the signature log filter.
"""

import logging
import sys

from excsig.config import SignatureConfig
from excsig.logger import ExceptionSignatureFilter, setup_excsig_logger
from excsig.signature import exception_signature


def _record(exc_info=None):
    return logging.LogRecord("test", logging.ERROR, __file__, 1, "failure", None, exc_info)


class TestSetupLogger:
    """Tests for setup_excsig_logger."""

    def test_console_handler(self):
        """Test that a console handler is attached."""
        logger = setup_excsig_logger(logging.DEBUG)
        assert logger.name == "excsig"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_rerun_clears_handlers(self):
        """Test that calling setup twice does not duplicate handlers."""
        setup_excsig_logger()
        logger = setup_excsig_logger()
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        """Test logging to a rotating file."""
        log_file = tmp_path / "logs" / "excsig.log"
        logger = setup_excsig_logger(logging.INFO, log_to_file=True, log_to_console=False,
                                     log_file=str(log_file))
        logger.info("hello file")
        for handler in logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert "hello file" in log_file.read_text()

    def test_plain_formatter(self, capsys):
        """Test console output without colors."""
        logger = setup_excsig_logger(logging.INFO, use_color=False)
        logger.info("plain message")
        assert "[INFO] excsig - plain message" in capsys.readouterr().out


class TestExceptionSignatureFilter:
    """Tests for ExceptionSignatureFilter."""

    def test_record_with_exception(self):
        """Test that records with exc_info get the signature."""
        try:
            raise ValueError("broken: 42")
        except ValueError as e:
            record = _record(sys.exc_info())
            expected = exception_signature(e)

        assert ExceptionSignatureFilter().filter(record) is True
        assert record.exc_signature == expected

    def test_config_traverse_inner(self):
        """Test that the filter uses the config traverse_inner key."""
        try:
            try:
                raise KeyError("id")
            except KeyError as inner:
                raise RuntimeError("lookup failed") from inner
        except RuntimeError as e:
            record = _record(sys.exc_info())
            expected = exception_signature(e, traverse_inner=False)
            full = exception_signature(e)

        ExceptionSignatureFilter(config=SignatureConfig(traverse_inner=False)).filter(record)
        assert record.exc_signature == expected
        assert record.exc_signature != full

    def test_record_without_exception(self):
        """Test that other records pass through with no signature."""
        record = _record()
        assert ExceptionSignatureFilter().filter(record) is True
        assert record.exc_signature is None

    def test_formatter_integration(self, capsys):
        """Test the signature appears in formatted output."""
        logger = logging.getLogger("excsig.test_filter")
        logger.propagate = False
        handler = logging.StreamHandler(sys.stdout)
        handler.addFilter(ExceptionSignatureFilter())
        handler.setFormatter(logging.Formatter("%(message)s [%(exc_signature)s]"))
        logger.addHandler(handler)
        try:
            try:
                raise KeyError("id")
            except KeyError:
                logger.exception("lookup failed")
        finally:
            logger.removeHandler(handler)

        line = capsys.readouterr().out.splitlines()[0]
        assert line.startswith("lookup failed [")
        assert len(line) == len("lookup failed [") + 8 + 1
