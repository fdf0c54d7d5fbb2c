"""
excsig Signature Module

Derives short, deterministic signatures from exceptions so that structurally
similar failures group together even when their messages carry dynamic data.
"""

from typing import Optional

from .builder import ExceptionSignatureBuilder
from .digest import compute_digest, to_ascii_bytes, to_hex
from .frames import (
    UNKNOWN_TYPE,
    Frame,
    frame_from_code,
    frame_from_function,
    frames_from_traceback,
    serialize_frame,
)
from .normalizer import normalize, remove_stop_spans
from .records import (
    ExceptionRecord,
    extract_error_code,
    is_diagnostic_dump,
    record_from_exception,
)
from excsig.config import SignatureConfig


def exception_signature(exception, traverse_inner: Optional[bool] = None, config=None) -> str:
    """
    Quick function to get the 8-character signature of one exception.

    traverse_inner defaults to the config's ``traverse_inner`` value.

    Example:
        >>> try:
        ...     int("x")
        ... except ValueError as e:
        ...     sig = exception_signature(e)
        >>> len(sig)
        8
    """
    config = config or SignatureConfig()
    if traverse_inner is None:
        traverse_inner = bool(config.get("traverse_inner", True))

    with ExceptionSignatureBuilder(config) as builder:
        builder.add_exception(exception, traverse_inner)
        return builder.signature_string()


__all__ = [
    'ExceptionSignatureBuilder', 'exception_signature',
    'ExceptionRecord', 'record_from_exception', 'extract_error_code', 'is_diagnostic_dump',
    'Frame', 'UNKNOWN_TYPE', 'serialize_frame', 'frame_from_code', 'frame_from_function',
    'frames_from_traceback',
    'normalize', 'remove_stop_spans',
    'compute_digest', 'to_ascii_bytes', 'to_hex',
]
