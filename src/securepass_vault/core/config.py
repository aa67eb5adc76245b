# Core - Configuration
#
# Process-wide settings, loaded once at startup.
# SECRET_KEY protects every stored envelope; it is never logged or persisted.

import os
import secrets
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv

from ..vault.errors import ConfigurationError
from .audit_log import get_audit_logger, EventType, EventSeverity

SECRET_ENV_VAR = "SECRET_KEY"
AUDIT_DIR_ENV_VAR = "SECUREPASS_AUDIT_DIR"
DEFAULT_SECRET_BYTES = 32


@dataclass(frozen=True)
class VaultSettings:
    """Immutable process configuration. ``secret_key`` is None when unset."""
    secret_key: Optional[str]
    audit_log_dir: Path = Path("./audit_logs")

    def __repr__(self) -> str:
        return f"VaultSettings(secret_key='***', audit_log_dir={str(self.audit_log_dir)!r})"

    def require_secret_key(self) -> str:
        """
        Return the secret, failing startup if it is not configured.

        Raises:
            ConfigurationError: If SECRET_KEY is missing or empty
        """
        if not self.secret_key:
            get_audit_logger().log_event(
                event_type=EventType.CONFIG_ERROR,
                severity=EventSeverity.CRITICAL,
                message=f"{SECRET_ENV_VAR} is not defined",
            )
            raise ConfigurationError(f"{SECRET_ENV_VAR} is not defined in the environment or .env")
        return self.secret_key


def load_settings(
    env_file: Optional[Union[str, Path]] = None,
    require_secret: bool = True,
) -> VaultSettings:
    """
    Load settings from the environment.

    A ``.env`` file (``env_file`` or the nearest one above the working directory)
    is read first; variables already set in the environment win.

    Args:
        env_file: Explicit .env path
        require_secret: If False, a missing secret is left as None for the
            caller to check later with ``require_secret_key()``

    Raises:
        ConfigurationError: If SECRET_KEY is missing or empty and required
    """
    if env_file is not None:
        load_dotenv(dotenv_path=env_file, override=False)
    else:
        load_dotenv(find_dotenv(usecwd=True), override=False)

    audit_dir = os.getenv(AUDIT_DIR_ENV_VAR) or "./audit_logs"
    settings = VaultSettings(
        secret_key=os.getenv(SECRET_ENV_VAR) or None,
        audit_log_dir=Path(audit_dir),
    )
    if require_secret:
        settings.require_secret_key()
    return settings


def generate_secret(nbytes: int = DEFAULT_SECRET_BYTES) -> str:
    """Generate a random hex secret suitable for SECRET_KEY."""
    if nbytes < 16:
        raise ValueError("Secret must be at least 16 bytes")
    return secrets.token_hex(nbytes)
