"""Issuer error types and error sanitization to prevent credential leakage."""

from __future__ import annotations

import re
from typing import Any


class IssuerError(Exception):
    """Base class for errors raised during an issuer reconciliation pass."""


class ValidationError(IssuerError):
    """The issuer spec is incomplete."""


class MissingAuthorityIdentifierError(ValidationError):
    """The issuer spec has no certificate authority ARN."""

    def __init__(self) -> None:
        super().__init__("no Arn found in Issuer Spec")


class MissingRegionError(ValidationError):
    """Neither the issuer spec nor the process configuration names a region."""

    def __init__(self) -> None:
        super().__init__("no Region found in Issuer Spec")


class ResolutionError(IssuerError):
    """Resolving an authenticated AWS configuration failed."""


class ProbeError(IssuerError):
    """The sts:GetCallerIdentity probe failed."""


class StatusUpdateError(IssuerError):
    """Writing the issuer status sub-resource failed."""


class ReconcileCancelled(IssuerError):
    """The pass deadline expired before status could be written."""


# Patterns that might expose sensitive information
SENSITIVE_PATTERNS = [
    r"access[_\s]?key[_\s]?id[:\s]+([A-Z0-9]{20})",
    r"secret[_\s]?access[_\s]?key[:\s]+([A-Za-z0-9/+=]{40})",
    r"session[_\s]?token[:\s]+([A-Za-z0-9/+=]+)",
]

# Fields to redact completely
SENSITIVE_FIELDS = {
    "access_key_id",
    "secret_access_key",
    "session_token",
    "password",
    "secret",
    "credentials",
    "token",
}

# Bare AWS access key IDs (long-term and temporary)
_ACCESS_KEY_ID_RE = re.compile(r"\b(?:AKIA|ASIA)[A-Z0-9]{16}\b")


def sanitize_error_message(message: str) -> str:
    """Sanitize error message to remove credential material.

    Args:
        message: Original error message

    Returns:
        Sanitized error message with sensitive data redacted
    """
    sanitized = message

    for pattern in SENSITIVE_PATTERNS:
        sanitized = re.sub(pattern, "[REDACTED]", sanitized, flags=re.IGNORECASE)

    for field in SENSITIVE_FIELDS:
        sanitized = re.sub(
            rf"\b{field}[:\s]+([^\s,;\)]+)",
            f"{field}: [REDACTED]",
            sanitized,
            flags=re.IGNORECASE,
        )

    return _ACCESS_KEY_ID_RE.sub("[REDACTED]", sanitized)


def sanitize_exception(error: BaseException) -> str:
    """Sanitize exception message.

    Args:
        error: Exception object

    Returns:
        Sanitized error message
    """
    return sanitize_error_message(str(error))


def sanitize_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """Sanitize dictionary by redacting sensitive fields.

    Args:
        data: Dictionary to sanitize
        sensitive_keys: Additional keys to redact (merged with SENSITIVE_FIELDS)

    Returns:
        Sanitized dictionary with sensitive values redacted
    """
    all_sensitive = SENSITIVE_FIELDS | (sensitive_keys or set())
    sanitized: dict[str, Any] = {}

    for key, value in data.items():
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in all_sensitive):
            sanitized[key] = "[REDACTED]"
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, sensitive_keys)
        elif isinstance(value, str):
            sanitized[key] = sanitize_error_message(value)
        else:
            sanitized[key] = value

    return sanitized
