"""
excsig Digest Computer

Hashes signature text into the 16-byte digest and its hex / short forms.
"""

import hashlib

SHORT_SIGNATURE_LENGTH = 8


def to_ascii_bytes(text: str) -> bytes:
    """
    Transcode text to single-byte ASCII.

    Every character outside the ASCII range becomes one '?', which is what the
    standard lossy ASCII encoders produce. The digest depends on this exact
    substitution.
    """
    return text.encode("ascii", errors="replace")


def compute_digest(text: str) -> bytes:
    """128-bit MD5 digest of the ASCII-transcoded text."""
    return hashlib.md5(to_ascii_bytes(text), usedforsecurity=False).digest()


def to_hex(data: bytes) -> str:
    """Lower-case hex rendering of a byte string."""
    return data.hex()


def short_signature(hex_digest: str) -> str:
    return hex_digest[:SHORT_SIGNATURE_LENGTH]
