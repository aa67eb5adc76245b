# Vault - Error Types
#
# Both decryption failures share one public message so callers cannot
# tell a wrong secret from a corrupted value.


class EnvelopeError(ValueError):
    """Base class for every per-call decryption failure."""

    PUBLIC_MESSAGE = "Cannot read stored value"


class InvalidEnvelopeFormat(EnvelopeError):
    """Envelope string is malformed (segment count, hex, lengths)."""


class AuthenticationFailure(EnvelopeError):
    """Envelope is well-formed but its authentication tag did not verify."""


class ConfigurationError(RuntimeError):
    """Fatal startup error, e.g. missing secret."""
