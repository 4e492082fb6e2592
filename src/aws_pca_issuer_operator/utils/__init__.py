"""Utility functions for the AWS PCA Issuer Operator."""

from .conditions import set_ready_condition, update_condition
from .context import get_context_dict, get_correlation_id, with_correlation_id
from .errors import (
    IssuerError,
    MissingAuthorityIdentifierError,
    MissingRegionError,
    ProbeError,
    ReconcileCancelled,
    ResolutionError,
    StatusUpdateError,
    ValidationError,
    sanitize_exception,
)
from .events import emit_condition_event, emit_event

__all__ = [
    "update_condition",
    "set_ready_condition",
    "emit_event",
    "emit_condition_event",
    "get_correlation_id",
    "get_context_dict",
    "with_correlation_id",
    "IssuerError",
    "ValidationError",
    "MissingAuthorityIdentifierError",
    "MissingRegionError",
    "ResolutionError",
    "ProbeError",
    "StatusUpdateError",
    "ReconcileCancelled",
    "sanitize_exception",
]
