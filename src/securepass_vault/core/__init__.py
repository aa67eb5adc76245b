# Core Module - Shared Utilities
#
# - Audit logging
# - Configuration

from .audit_log import (
    AuditLogger,
    EventSeverity,
    EventType,
    configure_audit_logger,
    get_audit_logger,
)
from .config import (
    VaultSettings,
    generate_secret,
    load_settings,
)

__all__ = [
    # Audit Logging
    "AuditLogger",
    "EventType",
    "EventSeverity",
    "get_audit_logger",
    "configure_audit_logger",
    # Configuration
    "VaultSettings",
    "generate_secret",
    "load_settings",
]
