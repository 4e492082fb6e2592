"""Issuer resource models for AWSPCAIssuer and AWSPCAClusterIssuer."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping

from kubernetes import client

from .constants import (
    API_GROUP,
    API_VERSION,
    DEFAULT_ACCESS_KEY_ID_KEY,
    DEFAULT_SECRET_ACCESS_KEY_KEY,
    KIND_CLUSTER_ISSUER,
    KIND_ISSUER,
    PLURAL_CLUSTER_ISSUER,
    PLURAL_ISSUER,
)


@dataclass(frozen=True)
class SecretReference:
    """Reference to a secret holding static AWS credentials."""

    name: str
    namespace: str = ""
    access_key_id_key: str = DEFAULT_ACCESS_KEY_ID_KEY
    secret_access_key_key: str = DEFAULT_SECRET_ACCESS_KEY_KEY

    @classmethod
    def from_spec(cls, ref: Mapping[str, Any] | None) -> SecretReference | None:
        if not ref or not ref.get("name"):
            return None
        access_selector = ref.get("accessKeyIDSelector") or {}
        secret_selector = ref.get("secretAccessKeySelector") or {}
        return cls(
            name=ref["name"],
            namespace=ref.get("namespace") or "",
            access_key_id_key=access_selector.get("key") or DEFAULT_ACCESS_KEY_ID_KEY,
            secret_access_key_key=secret_selector.get("key") or DEFAULT_SECRET_ACCESS_KEY_KEY,
        )


@dataclass(frozen=True)
class IssuerSpec:
    """Issuer spec as read for a single reconciliation pass.

    Attributes:
        arn: ARN of the AWS Private CA
        region: AWS region of the CA, empty to use the process default
        role: Optional role ARN to assume before calling AWS
        secret_ref: Optional secret holding static credentials
    """

    arn: str = ""
    region: str = ""
    role: str = ""
    secret_ref: SecretReference | None = None

    @classmethod
    def from_dict(cls, spec: Mapping[str, Any] | None) -> IssuerSpec:
        spec = spec or {}
        return cls(
            arn=spec.get("arn") or "",
            region=spec.get("region") or "",
            role=spec.get("role") or "",
            secret_ref=SecretReference.from_spec(spec.get("secretRef")),
        )


class GenericIssuer(ABC):
    """Common capability contract of both issuer kinds.

    Wraps the resource body handed over by kopf. The status conditions are held
    on a private copy so the reconciler can replace them before a single write.
    """

    kind: str = ""
    plural: str = ""

    def __init__(self, body: Mapping[str, Any]):
        self.body = body
        metadata = body.get("metadata") or {}
        self._name = metadata.get("name", "")
        self._namespace = metadata.get("namespace", "") or ""
        self._uid = metadata.get("uid", "")
        self._generation = metadata.get("generation")
        self._spec = IssuerSpec.from_dict(body.get("spec"))
        status = body.get("status") or {}
        self._conditions: list[dict[str, Any]] = copy.deepcopy(list(status.get("conditions") or []))

    def get_spec(self) -> IssuerSpec:
        return self._spec

    def get_name(self) -> str:
        return self._name

    def get_namespace(self) -> str:
        return self._namespace

    def get_uid(self) -> str:
        return self._uid

    def get_generation(self) -> int | None:
        return self._generation

    def get_conditions(self) -> list[dict[str, Any]]:
        return self._conditions

    def set_conditions(self, conditions: list[dict[str, Any]]) -> None:
        self._conditions = conditions

    def status_body(self) -> dict[str, Any]:
        """Body of the status patch: the full conditions list."""
        return {"status": {"conditions": self._conditions}}

    def secret_namespace(self, ref: SecretReference) -> str:
        """Namespace to read a referenced credentials secret from."""
        return ref.namespace

    @abstractmethod
    def patch_status(self, api: client.CustomObjectsApi, body: dict[str, Any], **kwargs: Any) -> Any:
        """Write the status sub-resource through the variant's endpoint."""

    def __repr__(self) -> str:
        if self._namespace:
            return f"{self.kind}({self._namespace}/{self._name})"
        return f"{self.kind}({self._name})"


class AWSPCAIssuer(GenericIssuer):
    """Namespaced issuer."""

    kind = KIND_ISSUER
    plural = PLURAL_ISSUER

    def secret_namespace(self, ref: SecretReference) -> str:
        return ref.namespace or self._namespace

    def patch_status(self, api: client.CustomObjectsApi, body: dict[str, Any], **kwargs: Any) -> Any:
        return api.patch_namespaced_custom_object_status(
            group=API_GROUP,
            version=API_VERSION,
            namespace=self._namespace,
            plural=self.plural,
            name=self._name,
            body=body,
            **kwargs,
        )


class AWSPCAClusterIssuer(GenericIssuer):
    """Cluster-scoped issuer."""

    kind = KIND_CLUSTER_ISSUER
    plural = PLURAL_CLUSTER_ISSUER

    def patch_status(self, api: client.CustomObjectsApi, body: dict[str, Any], **kwargs: Any) -> Any:
        return api.patch_cluster_custom_object_status(
            group=API_GROUP,
            version=API_VERSION,
            plural=self.plural,
            name=self._name,
            body=body,
            **kwargs,
        )


ISSUER_KINDS: dict[str, type[GenericIssuer]] = {
    KIND_ISSUER: AWSPCAIssuer,
    KIND_CLUSTER_ISSUER: AWSPCAClusterIssuer,
}


def issuer_from_body(body: Mapping[str, Any]) -> GenericIssuer:
    """Build the issuer variant matching the body's kind."""
    kind = body.get("kind", "")
    try:
        issuer_cls = ISSUER_KINDS[kind]
    except KeyError:
        raise ValueError(f"Unsupported issuer kind: {kind}") from None
    return issuer_cls(body)
