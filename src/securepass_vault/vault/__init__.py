# Vault Module - Encrypted credential storage at rest
#
# AES-256-GCM envelopes keyed by SHA-256 of the process secret

from .errors import (
    AuthenticationFailure,
    ConfigurationError,
    EnvelopeError,
    InvalidEnvelopeFormat,
)
from .encryption import (
    DecryptResult,
    Envelope,
    EnvelopeCipher,
    decrypt,
    derive_key,
    encrypt,
)
from .records import (
    DECRYPTION_ERROR_PLACEHOLDER,
    CredentialRecord,
    reseal_password,
    reveal_credential,
    reveal_credentials,
    seal_credential,
)

__all__ = [
    # Errors
    "EnvelopeError",
    "InvalidEnvelopeFormat",
    "AuthenticationFailure",
    "ConfigurationError",
    # Envelope Cipher
    "Envelope",
    "EnvelopeCipher",
    "DecryptResult",
    "derive_key",
    "encrypt",
    "decrypt",
    # Credential Records
    "CredentialRecord",
    "DECRYPTION_ERROR_PLACEHOLDER",
    "seal_credential",
    "reseal_password",
    "reveal_credential",
    "reveal_credentials",
]
