"""Tests for credential record sealing and reveal."""

from securepass_vault.core import EventType
from securepass_vault.vault import (
    DECRYPTION_ERROR_PLACEHOLDER,
    CredentialRecord,
    EnvelopeCipher,
    reseal_password,
    reveal_credential,
    reveal_credentials,
    seal_credential,
)


def _cipher():
    return EnvelopeCipher("test-secret-key")


class TestSealCredential:

    def test_password_is_stored_as_envelope(self):
        record = seal_credential(
            _cipher(), "Gmail", "MyPassword123!",
            url="https://gmail.com", username="me@example.com", category="email",
        )

        assert record.password != "MyPassword123!"
        assert record.password.count(":") == 2
        assert record.service == "Gmail"
        assert record.category == "email"

    def test_sealed_event_does_not_contain_password(self, audit_events):
        seal_credential(_cipher(), "Gmail", "MyPassword123!", record_id="r1")

        events = audit_events()
        assert [e["event_type"] for e in events] == [EventType.CREDENTIAL_SEALED.value]
        assert "MyPassword123!" not in str(events)

    def test_reseal_uses_fresh_envelope(self):
        cipher = _cipher()
        record = seal_credential(cipher, "Gmail", "same")
        resealed = reseal_password(cipher, record, "same")

        assert resealed.password != record.password
        assert resealed.service == record.service
        assert reveal_credential(cipher, resealed)["password"] == "same"


class TestRevealCredential:

    def test_reveal_returns_plaintext(self):
        cipher = _cipher()
        record = seal_credential(cipher, "Gmail", "MyPassword123!", username="me", record_id="r1")

        revealed = reveal_credential(cipher, record)

        assert revealed["password"] == "MyPassword123!"
        assert revealed["username"] == "me"
        assert revealed["record_id"] == "r1"

    def test_wrong_secret_gives_placeholder(self, audit_events):
        record = seal_credential(_cipher(), "Gmail", "MyPassword123!", record_id="r1")

        revealed = reveal_credential(EnvelopeCipher("wrong-key"), record)

        assert revealed["password"] == DECRYPTION_ERROR_PLACEHOLDER
        failed = [e for e in audit_events() if e["event_type"] == EventType.ENVELOPE_DECRYPT_FAILED.value]
        assert len(failed) == 1
        assert failed[0]["details"] == {"record_id": "r1"}

    def test_failure_kinds_are_logged_identically(self, audit_events):
        cipher = _cipher()
        good = seal_credential(cipher, "A", "pw", record_id="same")
        malformed = CredentialRecord(service="A", password="not-an-envelope", record_id="same")
        wrong_key = CredentialRecord(
            service="A", password=EnvelopeCipher("other").encrypt("pw"), record_id="same"
        )

        reveal_credential(cipher, malformed)
        reveal_credential(cipher, wrong_key)

        failed = [e for e in audit_events() if e["event_type"] == EventType.ENVELOPE_DECRYPT_FAILED.value]
        assert len(failed) == 2
        assert failed[0]["message"] == failed[1]["message"]
        assert failed[0]["details"] == failed[1]["details"]
        assert good.password not in str(failed)

    def test_reveal_many_isolates_bad_records(self):
        cipher = _cipher()
        records = [
            seal_credential(cipher, "A", "first"),
            CredentialRecord(service="B", password="a:b"),
            seal_credential(cipher, "C", "third"),
        ]

        revealed = reveal_credentials(cipher, records)

        assert [r["password"] for r in revealed] == ["first", DECRYPTION_ERROR_PLACEHOLDER, "third"]
