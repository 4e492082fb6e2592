"""Builders for AWS client configuration."""

from .config import CredentialResolver

__all__ = ["CredentialResolver"]
