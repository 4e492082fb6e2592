"""AWS session and STS helpers."""

from __future__ import annotations

import logging

import boto3
from botocore.config import Config

from ... import __version__
from ...constants import CONTROLLER_NAME, ROLE_SESSION_NAME
from .models import CallerIdentity, ResolvedConfig

logger = logging.getLogger(__name__)


def make_client_config(
    connect_timeout: float = 5.0,
    read_timeout: float = 10.0,
) -> Config:
    """Build the botocore client config shared by every AWS call.

    botocore retries are disabled; the operator retries whole passes.
    """
    return Config(
        user_agent_extra=f"{CONTROLLER_NAME}/{__version__}",
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        retries={"total_max_attempts": 1},
    )


def create_session(
    region: str,
    access_key: str | None = None,
    secret_key: str | None = None,
    session_token: str | None = None,
) -> boto3.session.Session:
    """Create a boto3 session.

    Without explicit keys the session falls back to the ambient credential
    chain (environment, shared config, web identity, instance metadata).
    """
    if access_key and secret_key:
        return boto3.session.Session(
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            aws_session_token=session_token,
            region_name=region,
        )
    return boto3.session.Session(region_name=region)


def assume_role(config: ResolvedConfig, role_arn: str) -> ResolvedConfig:
    """Exchange the credentials of a config for temporary role credentials.

    Args:
        config: Base configuration
        role_arn: ARN of the role to assume

    Returns:
        New configuration carrying the temporary credentials

    Raises:
        botocore.exceptions.ClientError: If the role assumption is denied
        botocore.exceptions.BotoCoreError: On transport or credential errors
    """
    sts = config.client("sts")
    response = sts.assume_role(RoleArn=role_arn, RoleSessionName=ROLE_SESSION_NAME)
    credentials = response["Credentials"]
    logger.debug(f"Assumed role {role_arn}")

    session = create_session(
        config.region,
        access_key=credentials["AccessKeyId"],
        secret_key=credentials["SecretAccessKey"],
        session_token=credentials["SessionToken"],
    )
    return ResolvedConfig(
        session=session,
        region=config.region,
        client_config=config.client_config,
        role_arn=role_arn,
        expiration=credentials.get("Expiration"),
    )


def get_caller_identity(config: ResolvedConfig) -> CallerIdentity:
    """Call sts:GetCallerIdentity with the given configuration."""
    response = config.client("sts").get_caller_identity()
    return CallerIdentity(
        arn=response.get("Arn", ""),
        account=response.get("Account", ""),
        user_id=response.get("UserId", ""),
    )
