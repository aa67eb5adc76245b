# SecurePass Vault - Main Package
#
# At-rest encryption for stored credentials:
# AES-256-GCM envelopes keyed by a process-wide secret.

__version__ = "1.0.0"
__author__ = "SecurePass Team"
__description__ = "Encrypted-at-rest credential envelopes"

from .vault import (
    AuthenticationFailure,
    EnvelopeCipher,
    EnvelopeError,
    InvalidEnvelopeFormat,
    decrypt,
    encrypt,
)

__all__ = [
    "__version__",
    "EnvelopeCipher",
    "EnvelopeError",
    "InvalidEnvelopeFormat",
    "AuthenticationFailure",
    "encrypt",
    "decrypt",
]
