"""Identity probe confirming resolved credentials are live."""

from __future__ import annotations

import time

from botocore.exceptions import BotoCoreError, ClientError

from ... import metrics
from ...utils.errors import ProbeError
from .client import get_caller_identity
from .models import CallerIdentity, ResolvedConfig


def probe_identity(config: ResolvedConfig) -> CallerIdentity:
    """Perform a single read-only sts:GetCallerIdentity call.

    Raises:
        ProbeError: If the call fails
    """
    start_time = time.time()
    try:
        identity = get_caller_identity(config)
    except (ClientError, BotoCoreError) as e:
        metrics.identity_probe_total.labels(result="error").inc()
        metrics.api_call_total.labels(api_type="aws", operation="get_caller_identity", result="error").inc()
        raise ProbeError(f"failed to sts.GetCallerIdentity: {e}") from e
    finally:
        duration = time.time() - start_time
        metrics.api_call_duration_seconds.labels(api_type="aws", operation="get_caller_identity").observe(duration)

    metrics.identity_probe_total.labels(result="success").inc()
    metrics.api_call_total.labels(api_type="aws", operation="get_caller_identity", result="success").inc()
    return identity
