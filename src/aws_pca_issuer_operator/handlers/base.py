"""Base handler class with common functionality for issuer handlers."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, TypeVar

from .. import metrics
from ..constants import CONTROLLER_NAME
from ..logging import log_resource_event
from ..models import GenericIssuer
from ..utils.errors import sanitize_exception

_T = TypeVar("_T")


class BaseHandler:
    """Structured logging and metrics shared by issuer handlers."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def _log(
        self,
        level: int,
        issuer: GenericIssuer,
        message: str,
        event: str,
        reason: str,
        **kwargs: Any,
    ) -> None:
        log_resource_event(
            self.logger,
            controller=CONTROLLER_NAME,
            resource_kind=issuer.kind,
            resource_name=issuer.get_name(),
            namespace=issuer.get_namespace(),
            uid=issuer.get_uid(),
            event=event,
            reason=reason,
            message=message,
            level=level,
            **kwargs,
        )

    def log_info(
        self,
        issuer: GenericIssuer,
        message: str,
        event: str = "info",
        reason: str = "Info",
        **kwargs: Any,
    ) -> None:
        """Log an info-level structured log message."""
        self._log(logging.INFO, issuer, message, event, reason, **kwargs)

    def log_error(
        self,
        issuer: GenericIssuer,
        message: str,
        error: BaseException | None = None,
        event: str = "error",
        reason: str = "Error",
        **kwargs: Any,
    ) -> None:
        """Log an error-level structured log message.

        Args:
            issuer: Issuer the message is about
            message: Log message
            error: Optional exception to include sanitized error details
            event: Event type (default: "error")
            reason: Reason for the event (default: "Error")
            **kwargs: Additional fields to include in the log
        """
        if error is not None:
            kwargs["error"] = sanitize_exception(error)
            kwargs["error_type"] = type(error).__name__
        self._log(logging.ERROR, issuer, message, event, reason, **kwargs)

    def reconcile_with_metrics(
        self,
        issuer: GenericIssuer,
        reconcile_fn: Callable[[], _T],
    ) -> _T:
        """Execute reconciliation with metrics and error accounting.

        Exceptions are re-raised so the scheduler can retry the pass.
        """
        metrics.reconcile_total.labels(kind=issuer.kind, result="started").inc()

        start_time = time.time()
        try:
            result = reconcile_fn()
            metrics.reconcile_total.labels(kind=issuer.kind, result="success").inc()
            return result
        except Exception as e:
            metrics.error_total.labels(kind=issuer.kind, error_type=type(e).__name__).inc()
            metrics.reconcile_total.labels(kind=issuer.kind, result="error").inc()
            raise
        finally:
            duration = time.time() - start_time
            metrics.reconcile_duration_seconds.labels(kind=issuer.kind).observe(duration)
