"""Kubernetes operator for AWS Private CA issuers."""

__version__ = "0.1.0"
