"""
excsig: deterministic exception signatures for grouping and support codes
"""

__version__ = "0.1.0"
__author__ = "excsig Development Team"

from excsig.config import SignatureConfig
from excsig.errors import ExcSigConfigError, ExcSigError, DisposedStateError, NullArgumentError
from excsig.signature import ExceptionSignatureBuilder, exception_signature

__all__ = [
    'SignatureConfig', 'ExceptionSignatureBuilder', 'exception_signature',
    'ExcSigError', 'ExcSigConfigError', 'DisposedStateError', 'NullArgumentError',
]
