"""Models for AWS client configuration."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

import boto3


@dataclass
class ResolvedConfig:
    """Authenticated AWS configuration for one reconciliation pass."""

    session: boto3.session.Session
    region: str
    client_config: Any = None
    role_arn: str | None = None
    expiration: datetime | None = None

    def client(self, service_name: str) -> Any:
        """Create a boto3 client for the given service."""
        return self.session.client(
            service_name,
            region_name=self.region,
            config=self.client_config,
        )


@dataclass(frozen=True)
class CallerIdentity:
    """Result of sts:GetCallerIdentity."""

    arn: str
    account: str
    user_id: str
