"""Issuer spec validation."""

from __future__ import annotations

from ..models import IssuerSpec
from .errors import MissingAuthorityIdentifierError, MissingRegionError


def validate_issuer(spec: IssuerSpec, default_region: str = "") -> None:
    """Check an issuer spec before any network call is made.

    Args:
        spec: Issuer spec to validate
        default_region: Process-wide default region

    Raises:
        MissingAuthorityIdentifierError: If the spec has no CA ARN
        MissingRegionError: If neither the spec nor the default names a region
    """
    if not spec.arn:
        raise MissingAuthorityIdentifierError()
    if not spec.region and not default_region:
        raise MissingRegionError()
