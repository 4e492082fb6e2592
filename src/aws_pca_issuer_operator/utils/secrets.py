"""Utilities for reading Kubernetes secrets."""

from __future__ import annotations

import base64

from kubernetes import client


def _decode(value: str | bytes) -> str:
    # Handle both string and bytes (different versions of kubernetes client)
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return base64.b64decode(value).decode("utf-8")


def read_secret_data(
    api: client.CoreV1Api,
    namespace: str,
    secret_name: str,
    request_timeout: float | None = None,
) -> dict[str, str]:
    """Read all data from a Kubernetes secret.

    Args:
        api: Kubernetes API client
        namespace: Namespace of the secret
        secret_name: Name of the secret
        request_timeout: Optional request timeout in seconds

    Returns:
        Dictionary of secret data (decoded)

    Raises:
        client.exceptions.ApiException: If the secret cannot be read
    """
    kwargs = {}
    if request_timeout is not None:
        kwargs["_request_timeout"] = request_timeout
    secret = api.read_namespaced_secret(name=secret_name, namespace=namespace, **kwargs)
    return {key: _decode(value) for key, value in (secret.data or {}).items()}
