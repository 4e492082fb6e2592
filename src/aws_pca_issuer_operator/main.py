"""Main entry point for the AWS PCA Issuer Operator."""

from __future__ import annotations

import logging
from typing import Any

import kopf

from . import health
from . import logging as structured_logging
from . import tracing
from .handlers import issuer as issuer_handlers

logger = logging.getLogger(__name__)


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, **_: Any) -> None:
    """Configure the operator."""
    structured_logging.setup_structured_logging()

    config = issuer_handlers.get_reconciler().config

    # Keep kopf progress out of .status, which holds only our conditions
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage()
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage()

    # Only the reconciler posts events; kopf's own log lines stay off the cluster
    settings.posting.level = logging.CRITICAL
    settings.networking.request_timeout = config.k8s_request_timeout_seconds
    settings.execution.max_workers = 4

    tracing.initialize_tracing()
    health.start_metrics_server(config.metrics_port)

    logger.info(
        f"Operator configured: default_region={config.default_region or '<unset>'} "
        f"get_caller_identity={config.get_caller_identity}"
    )


def main() -> None:
    """Run the operator."""
    kopf.run(clusterwide=True)
