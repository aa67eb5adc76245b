# Vault - Credential Records
#
# Seals the password field of a stored credential into an envelope and
# reveals it again for display. Storage of the record itself belongs to
# the caller.

from dataclasses import dataclass, asdict, replace
from typing import Any, Dict, Iterable, List, Optional

from .encryption import EnvelopeCipher
from .errors import EnvelopeError
from ..core.audit_log import get_audit_logger, EventType, EventSeverity

DECRYPTION_ERROR_PLACEHOLDER = "[DECRYPTION_ERROR]"


@dataclass(frozen=True)
class CredentialRecord:
    """
    One stored credential. ``password`` always holds an envelope string,
    never plaintext.
    """
    service: str
    password: str
    url: Optional[str] = None
    username: Optional[str] = None
    category: str = "general"
    icon: Optional[str] = None
    record_id: Optional[str] = None


def seal_credential(
    cipher: EnvelopeCipher,
    service: str,
    password: str,
    url: Optional[str] = None,
    username: Optional[str] = None,
    category: str = "general",
    icon: Optional[str] = None,
    record_id: Optional[str] = None,
) -> CredentialRecord:
    """
    Build a credential record with its password encrypted.

    Args:
        cipher: Cipher bound to the process secret
        service: Service name (e.g., "Gmail")
        password: Plaintext password to encrypt

    Returns:
        CredentialRecord whose password field is an envelope
    """
    record = CredentialRecord(
        service=service,
        password=cipher.encrypt(password),
        url=url,
        username=username,
        category=category,
        icon=icon,
        record_id=record_id,
    )

    get_audit_logger().log_event(
        event_type=EventType.CREDENTIAL_SEALED,
        severity=EventSeverity.INFO,
        message=f"Credential sealed: {service}",
        details={"record_id": record_id, "category": category},
    )
    return record


def reseal_password(
    cipher: EnvelopeCipher, record: CredentialRecord, new_password: str
) -> CredentialRecord:
    """Return a copy of ``record`` with a new password under a fresh nonce."""
    return replace(record, password=cipher.encrypt(new_password))


def reveal_credential(cipher: EnvelopeCipher, record: CredentialRecord) -> Dict[str, Any]:
    """
    Decrypt a record for display.

    An unreadable password is replaced by DECRYPTION_ERROR_PLACEHOLDER.
    The audit entry does not say whether the envelope was malformed or
    failed authentication.
    """
    revealed = asdict(record)
    result = cipher.try_decrypt(record.password)

    if result.ok:
        revealed["password"] = result.plaintext
        get_audit_logger().log_event(
            event_type=EventType.CREDENTIAL_REVEALED,
            severity=EventSeverity.INFO,
            message=f"Credential revealed: {record.service}",
            details={"record_id": record.record_id},
        )
    else:
        revealed["password"] = DECRYPTION_ERROR_PLACEHOLDER
        get_audit_logger().log_event(
            event_type=EventType.ENVELOPE_DECRYPT_FAILED,
            severity=EventSeverity.ALERT,
            message=EnvelopeError.PUBLIC_MESSAGE,
            details={"record_id": record.record_id},
        )

    return revealed


def reveal_credentials(
    cipher: EnvelopeCipher, records: Iterable[CredentialRecord]
) -> List[Dict[str, Any]]:
    """Reveal every record; one bad envelope does not affect the others."""
    return [reveal_credential(cipher, record) for record in records]
