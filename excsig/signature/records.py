"""
excsig Exception Records

Plain-data view of an exception chain, plus the adapter that builds it from
live Python exceptions.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import pydantic

from .frames import Frame, frames_from_traceback
from excsig.errors import NullArgumentError


logger = logging.getLogger("excsig.records")


@dataclass
class ExceptionRecord:
    """One exception occurrence and a link to the exception that caused it."""
    type_name: str
    message: Optional[str] = None
    error_code: Optional[int] = None
    origin_frame: Optional[Frame] = None
    frames: List[Optional[Frame]] = field(default_factory=list)  # outermost first
    inner: Optional["ExceptionRecord"] = None
    diagnostic_dump: bool = False

    def chain(self) -> List["ExceptionRecord"]:
        """This record followed by every inner record."""
        records = []
        record = self
        while record is not None:
            records.append(record)
            record = record.inner
        return records


def extract_error_code(exc: BaseException) -> Optional[int]:
    """
    Return the platform error code of a system-call or socket exception.

    Covers OSError and its subclasses (socket.error, socket.gaierror,
    socket.herror). On Windows ``winerror`` wins over the POSIX ``errno``.
    Returns None for anything else, when no code was set, or when the code
    slot holds something other than an integer.
    """
    if not isinstance(exc, OSError):
        return None

    for code in (getattr(exc, "winerror", None), exc.errno):
        # OSError("a", "b") stores "a" as errno
        if isinstance(code, int) and not isinstance(code, bool):
            return code
    return None


def is_diagnostic_dump(exc: BaseException) -> bool:
    """
    True for exceptions whose message is a title line followed by a
    multi-line diagnostic dump (pydantic validation errors).
    """
    return isinstance(exc, pydantic.ValidationError)


def record_from_exception(exc: BaseException, max_depth: Optional[int] = None) -> ExceptionRecord:
    """
    Build an ExceptionRecord chain from a live exception.

    The inner link follows ``__cause__`` first, then ``__context__`` unless the
    context was suppressed (``raise ... from None``). The walk stops at a
    repeated exception or after ``max_depth`` records.
    """
    if exc is None:
        raise NullArgumentError("exc")

    chain = []
    seen = set()
    current = exc
    while current is not None and id(current) not in seen:
        if max_depth is not None and len(chain) >= max_depth:
            break
        seen.add(id(current))
        chain.append(current)
        current = _inner_exception(current)

    record = None
    for item in reversed(chain):
        record = _single_record(item, inner=record)

    logger.debug("Built record chain of depth %d for %s", len(chain), type(exc).__name__)
    return record


def _inner_exception(exc: BaseException) -> Optional[BaseException]:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__


def _single_record(exc: BaseException, inner: Optional[ExceptionRecord]) -> ExceptionRecord:
    frames = frames_from_traceback(exc.__traceback__)
    return ExceptionRecord(
        type_name=type(exc).__name__,
        message=_safe_message(exc),
        error_code=extract_error_code(exc),
        origin_frame=frames[-1] if frames else None,
        frames=frames,
        inner=inner,
        diagnostic_dump=is_diagnostic_dump(exc),
    )


def _safe_message(exc: BaseException) -> str:
    try:
        return str(exc)
    except Exception as e:
        logger.debug("str() failed for %s: %r", type(exc).__name__, e)
        return "<exception str() failed>"
