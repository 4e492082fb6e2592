"""Prometheus metrics for the AWS PCA Issuer Operator."""

from prometheus_client import Counter, Gauge, Histogram

# Reconciliation metrics
reconcile_total = Counter(
    "aws_pca_issuer_reconcile_total",
    "Total number of reconciliations",
    ["kind", "result"],
)

reconcile_duration_seconds = Histogram(
    "aws_pca_issuer_reconcile_duration_seconds",
    "Duration of reconciliations in seconds",
    ["kind"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

error_total = Counter(
    "aws_pca_issuer_error_total",
    "Total number of reconciliation errors",
    ["kind", "error_type"],
)

# Credential metrics
credential_resolution_total = Counter(
    "aws_pca_issuer_credential_resolution_total",
    "Total number of credential resolutions",
    ["result"],
)

identity_probe_total = Counter(
    "aws_pca_issuer_identity_probe_total",
    "Total number of sts:GetCallerIdentity probes",
    ["result"],
)

# Issuer readiness
issuer_ready = Gauge(
    "aws_pca_issuer_ready",
    "Whether an issuer is ready (1) or not (0)",
    ["kind", "namespace", "name"],
)

# API call metrics
api_call_total = Counter(
    "aws_pca_issuer_api_call_total",
    "Total number of API calls",
    ["api_type", "operation", "result"],
)

api_call_duration_seconds = Histogram(
    "aws_pca_issuer_api_call_duration_seconds",
    "Duration of API calls in seconds",
    ["api_type", "operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)
