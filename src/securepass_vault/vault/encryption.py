# Vault - Envelope Cipher
#
# Secret → Encryption key (SHA-256)
# Password encryption (AES-256-GCM, fresh 96-bit nonce per call)
# Storage format: <nonce_hex>:<tag_hex>:<ciphertext_hex>

import binascii
import os
from dataclasses import dataclass
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .errors import AuthenticationFailure, EnvelopeError, InvalidEnvelopeFormat

KEY_LENGTH = 32  # 256 bits for AES-256
NONCE_LENGTH = 12  # 96-bit nonce for GCM
TAG_LENGTH = 16  # 128-bit GCM tag
SEPARATOR = ":"


def derive_key(secret: str) -> bytes:
    """
    Derive the 256-bit AES key from the process secret.

    Deterministic: the same secret always yields the same key.
    """
    digest = hashes.Hash(hashes.SHA256())
    digest.update(secret.encode('utf-8'))
    return digest.finalize()


def _unhex(segment: str, name: str) -> bytes:
    try:
        return binascii.unhexlify(segment)
    except (binascii.Error, ValueError):
        raise InvalidEnvelopeFormat(f"{name} is not valid hex") from None


@dataclass(frozen=True)
class Envelope:
    """Serialized unit of one encrypted value: nonce, tag and ciphertext."""
    nonce: bytes
    tag: bytes
    ciphertext: bytes

    @classmethod
    def parse(cls, text: str) -> "Envelope":
        """
        Parse ``<nonce_hex>:<tag_hex>:<ciphertext_hex>``.

        The ciphertext segment is empty only for an empty plaintext.

        Raises:
            InvalidEnvelopeFormat: On wrong segment count, empty nonce or tag,
                non-hex characters, odd length or wrong nonce/tag size
        """
        if not isinstance(text, str):
            raise InvalidEnvelopeFormat("Envelope must be a string")

        parts = text.split(SEPARATOR)
        if len(parts) != 3:
            raise InvalidEnvelopeFormat("Envelope must have exactly three segments")

        nonce_hex, tag_hex, ciphertext_hex = parts
        if not nonce_hex or not tag_hex:
            raise InvalidEnvelopeFormat("Envelope nonce and tag must not be empty")

        nonce = _unhex(nonce_hex, "nonce")
        tag = _unhex(tag_hex, "tag")
        ciphertext = _unhex(ciphertext_hex, "ciphertext")

        if len(nonce) != NONCE_LENGTH:
            raise InvalidEnvelopeFormat(f"nonce must be {NONCE_LENGTH} bytes")
        if len(tag) != TAG_LENGTH:
            raise InvalidEnvelopeFormat(f"tag must be {TAG_LENGTH} bytes")

        return cls(nonce=nonce, tag=tag, ciphertext=ciphertext)

    def serialize(self) -> str:
        return SEPARATOR.join(
            binascii.hexlify(part).decode('ascii')
            for part in (self.nonce, self.tag, self.ciphertext)
        )


@dataclass(frozen=True)
class DecryptResult:
    """Outcome of a decryption: exactly one of ``plaintext`` / ``error`` is set."""
    plaintext: Optional[str] = None
    error: Optional[EnvelopeError] = None

    def __post_init__(self):
        if (self.plaintext is None) == (self.error is None):
            raise ValueError("DecryptResult needs exactly one of plaintext or error")

    @property
    def ok(self) -> bool:
        return self.error is None


def _encrypt_with_key(plaintext: str, key: bytes) -> str:
    # Fresh random nonce per call, never derived from key or plaintext
    nonce = os.urandom(NONCE_LENGTH)

    # AESGCM returns ciphertext || tag
    sealed = AESGCM(key).encrypt(nonce, plaintext.encode('utf-8'), None)
    ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]

    return Envelope(nonce=nonce, tag=tag, ciphertext=ciphertext).serialize()


def _decrypt_with_key(envelope: str, key: bytes) -> str:
    parsed = Envelope.parse(envelope)

    try:
        plaintext_bytes = AESGCM(key).decrypt(
            parsed.nonce, parsed.ciphertext + parsed.tag, None
        )
    except InvalidTag:
        raise AuthenticationFailure("Envelope authentication failed") from None

    try:
        return plaintext_bytes.decode('utf-8')
    except UnicodeDecodeError:
        raise InvalidEnvelopeFormat("Decrypted value is not UTF-8 text") from None


def encrypt(plaintext: str, secret: str) -> str:
    """
    Encrypt plaintext into an envelope string using AES-256-GCM.

    Args:
        plaintext: Password or secret to encrypt
        secret: Process-wide secret (key is derived from it)

    Returns:
        ``<nonce_hex>:<tag_hex>:<ciphertext_hex>``; two calls with the same
        arguments return different envelopes
    """
    return _encrypt_with_key(plaintext, derive_key(secret))


def decrypt(envelope: str, secret: str) -> str:
    """
    Verify and decrypt an envelope string.

    The authentication tag is checked before any plaintext is released.

    An empty ciphertext segment (``<nonce>:<tag>:``) is what ``encrypt("")``
    produces, so it parses; a tag that does not match it raises
    AuthenticationFailure rather than InvalidEnvelopeFormat.

    Raises:
        InvalidEnvelopeFormat: If the envelope cannot be parsed
        AuthenticationFailure: If the tag does not verify (wrong secret
            or tampered nonce, tag or ciphertext)
    """
    return _decrypt_with_key(envelope, derive_key(secret))


class EnvelopeCipher:
    """
    Envelope cipher bound to one process secret.

    The key is derived once at construction and reused for every call.
    Instances hold no mutable state and are safe to share between threads.
    """

    def __init__(self, secret: str):
        self._key = derive_key(secret)

    def __repr__(self) -> str:
        return "EnvelopeCipher(<key hidden>)"

    def encrypt(self, plaintext: str) -> str:
        return _encrypt_with_key(plaintext, self._key)

    def decrypt(self, envelope: str) -> str:
        return _decrypt_with_key(envelope, self._key)

    def try_decrypt(self, envelope: str) -> DecryptResult:
        """Decrypt without raising; failures are returned in ``error``."""
        try:
            return DecryptResult(plaintext=self.decrypt(envelope))
        except EnvelopeError as e:
            return DecryptResult(error=e)
