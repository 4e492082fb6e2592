"""Process-wide configuration for the AWS PCA Issuer Operator."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class OperatorConfig:
    """Configuration read once at process start.

    The default region and the identity probe flag are passed explicitly to the
    validator, resolver and reconciler so tests can construct them without
    touching the environment.
    """

    default_region: str = ""
    get_caller_identity: bool = False
    metrics_port: int = 8080
    resync_interval_seconds: float = 300.0
    handler_timeout_seconds: float = 60.0
    retry_backoff_seconds: float = 15.0
    aws_connect_timeout_seconds: float = 5.0
    aws_read_timeout_seconds: float = 10.0
    k8s_request_timeout_seconds: float = 30.0

    @classmethod
    def from_env(cls) -> OperatorConfig:
        """Build configuration from environment variables.

        Environment Variables:
            AWS_REGION: Default region for issuers that do not set one
            GET_CALLER_IDENTITY: Call and log sts:GetCallerIdentity on every pass (default: false)
            METRICS_PORT: Port for /metrics, /healthz and /readyz (default: 8080)
            RESYNC_INTERVAL_SECONDS: Periodic resync interval (default: 300)
            HANDLER_TIMEOUT_SECONDS: Deadline for a single reconciliation pass (default: 60)
            RETRY_BACKOFF_SECONDS: Delay before a failed pass is retried (default: 15)
            AWS_CONNECT_TIMEOUT_SECONDS: botocore connect timeout (default: 5)
            AWS_READ_TIMEOUT_SECONDS: botocore read timeout (default: 10)
            K8S_REQUEST_TIMEOUT_SECONDS: Kubernetes API request timeout (default: 30)
        """
        return cls(
            default_region=os.getenv("AWS_REGION", ""),
            get_caller_identity=_env_bool("GET_CALLER_IDENTITY"),
            metrics_port=int(os.getenv("METRICS_PORT", "8080")),
            resync_interval_seconds=float(os.getenv("RESYNC_INTERVAL_SECONDS", "300")),
            handler_timeout_seconds=float(os.getenv("HANDLER_TIMEOUT_SECONDS", "60")),
            retry_backoff_seconds=float(os.getenv("RETRY_BACKOFF_SECONDS", "15")),
            aws_connect_timeout_seconds=float(os.getenv("AWS_CONNECT_TIMEOUT_SECONDS", "5")),
            aws_read_timeout_seconds=float(os.getenv("AWS_READ_TIMEOUT_SECONDS", "10")),
            k8s_request_timeout_seconds=float(os.getenv("K8S_REQUEST_TIMEOUT_SECONDS", "30")),
        )
