"""
Shared pytest fixtures for the SecurePass Vault test suite.

Autouse fixtures below isolate tests from the live environment:
  - Audit logger -> temp directory  (prevents test events in ./audit_logs)
  - SECRET_KEY   -> unset           (tests opt in with monkeypatch.setenv)
"""

import os

import pytest

_ENV_VARS = ("SECRET_KEY", "SECUREPASS_AUDIT_DIR")


@pytest.fixture(autouse=True)
def _isolate_audit_logs(tmp_path):
    """Point the global AuditLogger at a temp directory for every test.

    Without this, any test that (directly or indirectly) calls
    ``get_audit_logger().log_event(...)`` writes into the real
    ``./audit_logs/`` directory.
    """
    import securepass_vault.core.audit_log as audit_mod

    old_logger = audit_mod._audit_logger
    audit_mod._audit_logger = audit_mod.AuditLogger(log_dir=tmp_path / "audit_logs")

    yield audit_mod._audit_logger

    audit_mod._audit_logger.close()
    audit_mod._audit_logger = old_logger


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path, monkeypatch):
    """Run every test from an empty directory with no secret configured,
    so a developer's own ``.env`` or SECRET_KEY never leaks in.

    python-dotenv writes straight into ``os.environ``, so the variables are
    also dropped after the test; monkeypatch then restores any originals.
    """
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    work_dir = tmp_path / "cwd"
    work_dir.mkdir()
    monkeypatch.chdir(work_dir)

    yield

    for name in _ENV_VARS:
        os.environ.pop(name, None)


@pytest.fixture
def audit_events(_isolate_audit_logs):
    """Return a callable reading the JSON events written so far by the
    current global logger (the CLI may have replaced the temp one)."""
    import json
    import securepass_vault.core.audit_log as audit_mod

    def _read():
        log_file = audit_mod._audit_logger.log_file
        if not log_file.exists():
            return []
        return [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines() if line]

    return _read
