"""
excsig Signature Builder

Accumulates signature text for one or more exceptions (optionally walking
their cause chains) and exposes digests of the accumulated text.
"""

import logging
from typing import Optional, Union

from .digest import compute_digest, short_signature, to_hex
from .frames import serialize_frame
from .normalizer import normalize
from .records import ExceptionRecord, record_from_exception
from excsig.config import SignatureConfig
from excsig.errors import DisposedStateError, NullArgumentError


logger = logging.getLogger("excsig.builder")


class ExceptionSignatureBuilder:
    """
    Builds exception signatures useful for grouping exceptions together.

    Signatures also work as a short reference code to give users when they
    contact support. ``str(builder)`` returns the 8-character form
    (example: ``781fe96d``).

    Options:
    - preprocess_messages: strip dynamic data from messages and use error
      codes instead of messages where the exception provides one
    - include_full_stack_trace: serialize every frame instead of only the
      point of origin of each exception

    The builder is a resource: once ``dispose()`` (or ``close()``, or leaving a
    ``with`` block) has run, every operation except disposing again raises
    DisposedStateError.
    """

    def __init__(self, config: Optional[SignatureConfig] = None):
        config = config or SignatureConfig()
        self.preprocess_messages = bool(config.get("preprocess_messages", True))
        self.include_full_stack_trace = bool(config.get("include_full_stack_trace", True))

        # None once disposed
        self._buffer = []

    def __enter__(self) -> "ExceptionSignatureBuilder":
        self._assert_not_disposed()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    @property
    def disposed(self) -> bool:
        return self._buffer is None

    @property
    def buffer_text(self) -> str:
        """The accumulated signature text that gets hashed."""
        self._assert_not_disposed()
        return "".join(self._buffer)

    def add_exception(self,
                      exception: Union[BaseException, ExceptionRecord],
                      traverse_inner: bool = True) -> None:
        """
        Add one exception to the signature.

        Args:
            exception: Live exception or a prebuilt ExceptionRecord
            traverse_inner: Also add every inner (causing) exception
        """
        if exception is None:
            raise NullArgumentError("exception")

        self._assert_not_disposed()

        record = exception
        if not isinstance(record, ExceptionRecord):
            record = record_from_exception(exception, max_depth=None if traverse_inner else 1)

        added = 0
        while record is not None:
            self._append_record(record)
            added += 1

            if not traverse_inner:
                break

            record = record.inner

        logger.debug("Added %d exception record(s) to signature", added)

    def clear(self) -> None:
        """Remove all signature data from the builder."""
        self._assert_not_disposed()
        self._buffer.clear()

    def dispose(self) -> None:
        if self._buffer is not None:
            self._buffer = None
            logger.debug("Signature builder disposed")

    close = dispose

    def signature_bytes(self) -> bytes:
        """The 16-byte (128-bit MD5) signature hash."""
        self._assert_not_disposed()
        return compute_digest("".join(self._buffer))

    def signature_hex_digest(self) -> str:
        """32-character lower-case hex digest of the signature bytes."""
        return to_hex(self.signature_bytes())

    def signature_string(self) -> str:
        """8-character signature taken from the start of the hex digest."""
        return short_signature(self.signature_hex_digest())

    def __str__(self) -> str:
        return self.signature_string()

    def _append_record(self, record: ExceptionRecord) -> None:
        buf = self._buffer

        buf.append(record.type_name)
        buf.append(": ")
        self._append_message(record)
        buf.append("\n")

        if self.include_full_stack_trace:
            for frame in record.frames:
                if frame is not None:
                    buf.append(serialize_frame(frame))
                    buf.append("\n")
        elif record.origin_frame is not None:
            buf.append(serialize_frame(record.origin_frame))
            buf.append("\n")

        buf.append("\n")

    def _append_message(self, record: ExceptionRecord) -> None:
        message = record.message

        if not self.preprocess_messages:
            if message is not None:
                self._buffer.append(message)
            return

        if record.error_code is not None:
            self._buffer.append(f"ErrorCode: {int(record.error_code)}")
            return

        if message is None:
            return

        # Diagnostic dumps carry per-field detail after the first line
        if record.diagnostic_dump and "\n" in message:
            self._buffer.append(message.split("\n", 1)[0].rstrip("\r"))
            return

        self._buffer.append(normalize(message))

    def _assert_not_disposed(self) -> None:
        if self._buffer is None:
            raise DisposedStateError(type(self).__name__)
