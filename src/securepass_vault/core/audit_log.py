# Core - Audit Logging
#
# Append-only structured audit log for vault events.
# Never receives plaintext, secrets, derived keys or envelopes.

import logging
import os
import socket
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional
from uuid import uuid4

import structlog


class EventType(str, Enum):
    """Types of events written to the audit log."""
    # Envelope Events
    ENVELOPE_ENCRYPTED = "envelope.encrypted"
    ENVELOPE_DECRYPT_FAILED = "envelope.decrypt.failed"

    # Credential Events
    CREDENTIAL_SEALED = "credential.sealed"
    CREDENTIAL_REVEALED = "credential.revealed"

    # System Events
    SYSTEM_START = "system.start"
    CONFIG_ERROR = "config.error"
    SELFTEST_PASSED = "selftest.passed"
    SELFTEST_FAILED = "selftest.failed"


class EventSeverity(str, Enum):
    """
    Severity levels for audit events.

    - INFO: Normal activity (logged only)
    - ALERT: A stored value could not be read
    - CRITICAL: Startup cannot continue
    """
    INFO = "info"
    ALERT = "alert"
    CRITICAL = "critical"


class AuditLogger:
    """
    Append-only audit logger for vault events.

    Features:
    - Structured JSON logging (structlog)
    - Automatic timestamp and event ID
    - Daily log file under ``log_dir``
    """

    def __init__(self, log_dir: Optional[Path] = None):
        """
        Initialize audit logger.

        Args:
            log_dir: Directory for audit logs (default: ./audit_logs)
        """
        self.log_dir = Path(log_dir) if log_dir else Path("./audit_logs")
        self.log_dir.mkdir(parents=True, exist_ok=True)

        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer()
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        self.log_file = self._setup_file_handler()
        self.logger = structlog.get_logger("securepass_vault.audit")

    def _setup_file_handler(self) -> Path:
        """Attach a file handler for today's log file to the audit logger."""
        today = datetime.now().strftime("%Y-%m-%d")
        log_file = self.log_dir / f"audit_{today}.log"

        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter('%(message)s'))  # structlog handles formatting

        audit_logger = logging.getLogger("securepass_vault.audit")
        audit_logger.addHandler(file_handler)
        audit_logger.setLevel(logging.INFO)
        self._file_handler = file_handler
        return log_file

    def close(self):
        """Detach and close the file handler."""
        logging.getLogger("securepass_vault.audit").removeHandler(self._file_handler)
        self._file_handler.close()

    def log_event(
        self,
        event_type: EventType,
        severity: EventSeverity,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Log an audit event (append-only).

        Args:
            event_type: Type of event (from EventType enum)
            severity: Severity level (from EventSeverity enum)
            message: Human-readable event description
            details: Additional event details (never secrets or plaintext!)

        Returns:
            str: Event ID (UUID) for reference
        """
        event_id = str(uuid4())

        event_data = {
            "event_id": event_id,
            "event_type": event_type.value,
            "severity": severity.value,
            "message": message,
            "timestamp": datetime.utcnow().isoformat(),
            "details": details or {},
            "user_context": self._get_default_user_context(),
        }

        self.logger.info("vault_event", **event_data)
        self._file_handler.flush()

        return event_id

    def _get_default_user_context(self) -> Dict[str, Any]:
        """Get default user context (OS user, hostname, etc.)."""
        return {
            "os_user": os.getenv("USERNAME") or os.getenv("USER"),
            "hostname": socket.gethostname(),
            "platform": sys.platform,
        }


# Global logger instance
_audit_logger: Optional[AuditLogger] = None


def get_audit_logger() -> AuditLogger:
    """Get global audit logger (singleton pattern)."""
    global _audit_logger
    if _audit_logger is None:
        _audit_logger = AuditLogger(log_dir=os.getenv("SECUREPASS_AUDIT_DIR") or None)
    return _audit_logger


def configure_audit_logger(log_dir: Path) -> AuditLogger:
    """
    Point the global audit logger at ``log_dir``.

    Called once at startup after settings are loaded; a logger already
    writing elsewhere is closed and replaced.
    """
    global _audit_logger
    if _audit_logger is not None:
        if _audit_logger.log_dir == Path(log_dir):
            return _audit_logger
        _audit_logger.close()
    _audit_logger = AuditLogger(log_dir=log_dir)
    return _audit_logger
