"""Builder for authenticated AWS configuration from an issuer spec."""

from __future__ import annotations

import time

from botocore.exceptions import BotoCoreError, ClientError
from kubernetes import client

from .. import metrics
from ..config import OperatorConfig
from ..models import GenericIssuer
from ..services.aws.client import assume_role, create_session, make_client_config
from ..services.aws.models import ResolvedConfig
from ..utils.errors import ResolutionError
from ..utils.secrets import read_secret_data


class CredentialResolver:
    """Resolve a usable AWS configuration for an issuer.

    Credentials are layered in increasing priority: the ambient boto3 chain,
    static keys from the issuer's secretRef, then an optional sts:AssumeRole.
    Nothing is cached between passes.
    """

    def __init__(
        self,
        operator_config: OperatorConfig,
        core_api: client.CoreV1Api | None = None,
    ):
        self.operator_config = operator_config
        self._core_api = core_api

    @property
    def core_api(self) -> client.CoreV1Api:
        if self._core_api is None:
            from ..handlers.shared import get_core_api

            self._core_api = get_core_api()
        return self._core_api

    def resolve(self, issuer: GenericIssuer) -> ResolvedConfig:
        """Build the configuration for one reconciliation pass.

        Args:
            issuer: Issuer whose spec drives the resolution

        Returns:
            Resolved configuration

        Raises:
            ResolutionError: If any layer fails
        """
        try:
            config = self._resolve(issuer)
        except ResolutionError:
            metrics.credential_resolution_total.labels(result="error").inc()
            raise
        except (ClientError, BotoCoreError, client.exceptions.ApiException, ValueError) as e:
            metrics.credential_resolution_total.labels(result="error").inc()
            raise ResolutionError(str(e)) from e

        metrics.credential_resolution_total.labels(result="success").inc()
        return config

    def _resolve(self, issuer: GenericIssuer) -> ResolvedConfig:
        spec = issuer.get_spec()
        region = spec.region or self.operator_config.default_region
        client_config = make_client_config(
            connect_timeout=self.operator_config.aws_connect_timeout_seconds,
            read_timeout=self.operator_config.aws_read_timeout_seconds,
        )

        access_key = secret_key = None
        if spec.secret_ref is not None:
            access_key, secret_key = self._read_static_credentials(issuer)

        config = ResolvedConfig(
            session=create_session(region, access_key=access_key, secret_key=secret_key),
            region=region,
            client_config=client_config,
        )

        if spec.role:
            start_time = time.time()
            try:
                config = assume_role(config, spec.role)
                metrics.api_call_total.labels(api_type="aws", operation="assume_role", result="success").inc()
            except Exception:
                metrics.api_call_total.labels(api_type="aws", operation="assume_role", result="error").inc()
                raise
            finally:
                duration = time.time() - start_time
                metrics.api_call_duration_seconds.labels(api_type="aws", operation="assume_role").observe(duration)

        return config

    def _read_static_credentials(self, issuer: GenericIssuer) -> tuple[str, str]:
        ref = issuer.get_spec().secret_ref
        namespace = issuer.secret_namespace(ref)
        if not namespace:
            raise ResolutionError(f"secretRef {ref.name} must set a namespace for {issuer.kind}")

        try:
            data = read_secret_data(
                self.core_api,
                namespace,
                ref.name,
                request_timeout=self.operator_config.k8s_request_timeout_seconds,
            )
        except client.exceptions.ApiException as e:
            raise ResolutionError(f"failed to retrieve secret: {e.reason or e}") from e

        access_key = data.get(ref.access_key_id_key)
        if not access_key:
            raise ResolutionError("no AWS access key ID found in secret")
        secret_key = data.get(ref.secret_access_key_key)
        if not secret_key:
            raise ResolutionError("no AWS secret access key found in secret")
        return access_key, secret_key
