"""Identifier and text fingerprinting for logs.

Raw user identifiers and raw user text never reach application logs.
Identifiers are salted and hashed; text is reduced to a content
fingerprint so a log line can be matched to a stored record later.
"""
import hashlib
import logging
from typing import Optional

logger = logging.getLogger(__name__)


MIN_SALT_LENGTH = 32

_PII_SALT: Optional[str] = None


def configure_pii_salt(salt: str) -> None:
    """Configure the salt used by hash_pii().

    Must be called during application startup before any identifier
    is hashed.

    Args:
        salt: Secret salt value, at least MIN_SALT_LENGTH characters

    Raises:
        ValueError: If salt is empty or too short
    """
    global _PII_SALT
    if not salt or len(salt) < MIN_SALT_LENGTH:
        logger.critical(
            "PII_SALT_CONFIGURATION_FAILED",
            extra={"reason": "Salt too short or empty", "min_length": MIN_SALT_LENGTH}
        )
        raise ValueError(f"PII salt must be at least {MIN_SALT_LENGTH} characters")

    _PII_SALT = salt
    logger.info("PII_SALT_CONFIGURED", extra={"salt_length": len(salt)})


def is_pii_salt_configured() -> bool:
    return _PII_SALT is not None


def hash_pii(value: str) -> str:
    """Hash a user identifier for safe logging.

    SHA-256 over the configured salt and the value. Unlike the community
    pseudonym this is not meant for display; it only correlates log
    lines belonging to the same user.

    Args:
        value: Stable user identifier

    Returns:
        64-char hex digest

    Raises:
        RuntimeError: If the salt has not been configured
    """
    if _PII_SALT is None:
        logger.critical(
            "PII_HASH_FAILED",
            extra={"reason": "Salt not configured", "action": "call configure_pii_salt()"}
        )
        raise RuntimeError("PII salt not configured. Call configure_pii_salt() first.")

    salted = f"{_PII_SALT}{value}"
    return hashlib.sha256(salted.encode()).hexdigest()


def hash_text_for_audit(text: str) -> str:
    """Fingerprint message text without exposing its content."""
    return hashlib.sha256((text or "").encode()).hexdigest()
