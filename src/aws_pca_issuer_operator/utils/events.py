"""Utilities for emitting Kubernetes events."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import EVENT_TYPE_NORMAL, EVENT_TYPE_WARNING


def emit_event(
    body: Any,
    reason: str,
    message: str,
    type_: str = EVENT_TYPE_NORMAL,
) -> None:
    """Emit a Kubernetes event.

    Args:
        body: Resource body (apiVersion, kind and metadata form the object reference)
        reason: Event reason
        message: Event message
        type_: Event type (Normal or Warning)
    """
    kopf.event(
        body,
        reason=reason,
        message=message,
        type=type_,
    )


def event_type_for(status: bool) -> str:
    """Map a condition boolean to the event severity."""
    return EVENT_TYPE_NORMAL if status else EVENT_TYPE_WARNING


def emit_condition_event(body: Any, status: bool, reason: str, message: str) -> None:
    """Emit the event mirroring a Ready condition change."""
    emit_event(body, reason, message, type_=event_type_for(status))
