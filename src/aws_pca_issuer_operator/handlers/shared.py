"""Shared Kubernetes plumbing for issuer handlers."""

from __future__ import annotations

import time
from typing import Any

from kubernetes import client, config

from .. import metrics
from ..models import GenericIssuer
from ..utils.errors import StatusUpdateError


def load_kube_config() -> None:
    """Load in-cluster config, falling back to the local kubeconfig."""
    try:
        config.load_incluster_config()
    except config.ConfigException:
        config.load_kube_config()


def get_core_api() -> client.CoreV1Api:
    """Get Kubernetes CoreV1Api client."""
    load_kube_config()
    return client.CoreV1Api()


def get_custom_objects_api() -> client.CustomObjectsApi:
    """Get Kubernetes CustomObjectsApi client."""
    load_kube_config()
    return client.CustomObjectsApi()


class StatusWriter:
    """Persist an issuer's status sub-resource in a single patch call."""

    def __init__(
        self,
        api: client.CustomObjectsApi | None = None,
        request_timeout: float | None = None,
    ):
        self._api = api
        self.request_timeout = request_timeout

    @property
    def api(self) -> client.CustomObjectsApi:
        if self._api is None:
            self._api = get_custom_objects_api()
        return self._api

    def update(self, issuer: GenericIssuer) -> Any:
        """Replace the issuer's conditions on the API server.

        Raises:
            StatusUpdateError: If the patch fails
        """
        kwargs: dict[str, Any] = {}
        if self.request_timeout is not None:
            kwargs["_request_timeout"] = self.request_timeout

        start_time = time.time()
        try:
            result = issuer.patch_status(self.api, issuer.status_body(), **kwargs)
        except Exception as e:
            metrics.api_call_total.labels(api_type="k8s", operation="patch_status", result="error").inc()
            raise StatusUpdateError(f"failed to update status of {issuer!r}: {e}") from e
        finally:
            duration = time.time() - start_time
            metrics.api_call_duration_seconds.labels(api_type="k8s", operation="patch_status").observe(duration)

        metrics.api_call_total.labels(api_type="k8s", operation="patch_status", result="success").inc()
        return result
