"""Reconciler for AWSPCAIssuer and AWSPCAClusterIssuer resources."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable

import kopf

from .. import metrics
from ..builders.config import CredentialResolver
from ..config import OperatorConfig
from ..constants import (
    API_GROUP_VERSION,
    KIND_CLUSTER_ISSUER,
    KIND_ISSUER,
    MESSAGE_VALIDATION_FAILED,
    MESSAGE_VERIFIED,
    REASON_ERROR,
    REASON_VALIDATION,
    REASON_VERIFIED,
)
from ..models import GenericIssuer, issuer_from_body
from ..services.aws.identity import probe_identity
from ..services.aws.models import CallerIdentity, ResolvedConfig
from ..tracing import trace_span
from ..utils.conditions import set_ready_condition
from ..utils.context import with_correlation_id
from ..utils.errors import ProbeError, ReconcileCancelled, ResolutionError, ValidationError
from ..utils.events import emit_condition_event
from ..utils.validation import validate_issuer
from .base import BaseHandler
from .shared import StatusWriter


@dataclass(frozen=True)
class ReconcileRequest:
    """Identity of the issuer being reconciled and the pass deadline.

    Attributes:
        name: Resource name
        namespace: Resource namespace, empty for cluster-scoped issuers
        deadline: time.monotonic() value after which no status write is attempted
    """

    name: str
    namespace: str = ""
    deadline: float | None = None

    @classmethod
    def for_issuer(cls, issuer: GenericIssuer, timeout: float | None = None) -> ReconcileRequest:
        deadline = time.monotonic() + timeout if timeout is not None else None
        return cls(name=issuer.get_name(), namespace=issuer.get_namespace(), deadline=deadline)

    def cancelled(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}" if self.namespace else self.name


@dataclass(frozen=True)
class ReconcileResult:
    """Requeue policy returned by a successful pass."""

    requeue: bool = False


class GenericIssuerReconciler(BaseHandler):
    """Reconcile both issuer kinds into a single Ready condition.

    A pass runs validate, resolve, then the optional identity probe, and
    writes status at most once. Passes for the same issuer must not overlap;
    kopf serialises handlers per object, so no locking is done here.
    """

    def __init__(
        self,
        config: OperatorConfig,
        resolver: CredentialResolver | None = None,
        status_writer: StatusWriter | None = None,
        recorder: Callable[[Any, bool, str, str], None] = emit_condition_event,
        prober: Callable[[ResolvedConfig], CallerIdentity] = probe_identity,
    ):
        super().__init__()
        self.config = config
        self.resolver = resolver or CredentialResolver(config)
        self.status_writer = status_writer or StatusWriter(
            request_timeout=config.k8s_request_timeout_seconds
        )
        self.recorder = recorder
        self.prober = prober

    def reconcile(self, request: ReconcileRequest, issuer: GenericIssuer) -> ReconcileResult:
        """Run one reconciliation pass.

        Args:
            request: Reconcile request for the issuer
            issuer: Issuer handle of either kind

        Returns:
            Requeue policy

        Raises:
            ValidationError: If the spec is incomplete
            ResolutionError: If AWS credentials cannot be resolved
            ProbeError: If the identity probe fails
            StatusUpdateError: If the status write fails
            ReconcileCancelled: If the deadline passed before the status write
        """
        spec = issuer.get_spec()

        with trace_span("validate", kind=issuer.kind):
            try:
                validate_issuer(spec, self.config.default_region)
            except ValidationError as e:
                self.log_error(issuer, "failed to validate issuer", error=e, reason=REASON_VALIDATION)
                self.set_status(
                    request,
                    issuer,
                    False,
                    REASON_VALIDATION,
                    MESSAGE_VALIDATION_FAILED.format(error=e),
                )
                raise

        with trace_span("resolve_credentials", kind=issuer.kind):
            try:
                cfg = self.resolver.resolve(issuer)
            except ResolutionError as e:
                self.log_error(issuer, "Error loading config", error=e, reason=REASON_ERROR)
                self.set_status(request, issuer, False, REASON_ERROR, str(e))
                raise

        if self.config.get_caller_identity:
            with trace_span("probe_identity", kind=issuer.kind):
                try:
                    identity = self.prober(cfg)
                except ProbeError as e:
                    self.log_error(issuer, "failed to sts.GetCallerIdentity", error=e, reason="ProbeFailed")
                    raise
            self.log_info(
                issuer,
                "sts.GetCallerIdentity",
                event="identity",
                reason="Identity",
                arn=identity.arn,
                account=identity.account,
                user_id=identity.user_id,
            )

        self.set_status(request, issuer, True, REASON_VERIFIED, MESSAGE_VERIFIED)
        return ReconcileResult()

    def set_status(
        self,
        request: ReconcileRequest,
        issuer: GenericIssuer,
        status: bool,
        reason: str,
        message: str,
    ) -> None:
        """Replace the Ready condition, emit the matching event, persist status.

        Raises:
            ReconcileCancelled: If the request deadline already passed
            StatusUpdateError: If the status write fails
        """
        if request.cancelled():
            raise ReconcileCancelled(f"reconciliation of {request} cancelled before status update")

        conditions = set_ready_condition(
            issuer.get_conditions(),
            status,
            reason,
            message,
            observed_generation=issuer.get_generation(),
        )
        issuer.set_conditions(conditions)
        self.recorder(issuer.body, status, reason, message)

        with trace_span("update_status", kind=issuer.kind):
            self.status_writer.update(issuer)

        metrics.issuer_ready.labels(
            kind=issuer.kind,
            namespace=issuer.get_namespace(),
            name=issuer.get_name(),
        ).set(1 if status else 0)


_config = OperatorConfig.from_env()
_reconciler: GenericIssuerReconciler | None = None


def setup_reconciler(config: OperatorConfig) -> GenericIssuerReconciler:
    """Install the process-wide reconciler used by the kopf handlers."""
    global _config, _reconciler
    _config = config
    _reconciler = GenericIssuerReconciler(config)
    return _reconciler


def get_reconciler() -> GenericIssuerReconciler:
    """Get the process-wide reconciler, creating it on first use."""
    if _reconciler is None:
        return setup_reconciler(_config)
    return _reconciler


def reconcile_issuer(body: Any) -> ReconcileResult:
    """Run a reconciliation pass for a kopf resource body."""
    reconciler = get_reconciler()
    issuer = issuer_from_body(body)
    request = ReconcileRequest.for_issuer(issuer, timeout=reconciler.config.handler_timeout_seconds)

    with with_correlation_id():
        with trace_span(
            "reconcile_issuer",
            kind=issuer.kind,
            attributes={"issuer.name": issuer.get_name(), "issuer.namespace": issuer.get_namespace()},
        ):
            return reconciler.reconcile_with_metrics(issuer, lambda: reconciler.reconcile(request, issuer))


@kopf.on.create(API_GROUP_VERSION, KIND_ISSUER, backoff=_config.retry_backoff_seconds)
@kopf.on.update(API_GROUP_VERSION, KIND_ISSUER, backoff=_config.retry_backoff_seconds)
@kopf.on.resume(API_GROUP_VERSION, KIND_ISSUER, backoff=_config.retry_backoff_seconds)
@kopf.on.create(API_GROUP_VERSION, KIND_CLUSTER_ISSUER, backoff=_config.retry_backoff_seconds)
@kopf.on.update(API_GROUP_VERSION, KIND_CLUSTER_ISSUER, backoff=_config.retry_backoff_seconds)
@kopf.on.resume(API_GROUP_VERSION, KIND_CLUSTER_ISSUER, backoff=_config.retry_backoff_seconds)
def handle_issuer(body: kopf.Body, **kwargs: Any) -> None:
    """Handle AWSPCAIssuer and AWSPCAClusterIssuer reconciliation."""
    reconcile_issuer(body)


@kopf.timer(API_GROUP_VERSION, KIND_ISSUER, interval=_config.resync_interval_seconds, initial_delay=_config.resync_interval_seconds)
@kopf.timer(API_GROUP_VERSION, KIND_CLUSTER_ISSUER, interval=_config.resync_interval_seconds, initial_delay=_config.resync_interval_seconds)
def resync_issuer(body: kopf.Body, **kwargs: Any) -> None:
    """Periodically re-verify issuers."""
    reconcile_issuer(body)


def forget_issuer(body: Any) -> None:
    """Drop the per-issuer Ready gauge series of a deleted issuer."""
    issuer = issuer_from_body(body)
    try:
        metrics.issuer_ready.remove(issuer.kind, issuer.get_namespace(), issuer.get_name())
    except KeyError:
        # Never reconciled to a status write, so no series exists
        pass


@kopf.on.delete(API_GROUP_VERSION, KIND_ISSUER, optional=True)
@kopf.on.delete(API_GROUP_VERSION, KIND_CLUSTER_ISSUER, optional=True)
def handle_issuer_delete(body: kopf.Body, **kwargs: Any) -> None:
    """Handle AWSPCAIssuer and AWSPCAClusterIssuer deletion."""
    forget_issuer(body)
