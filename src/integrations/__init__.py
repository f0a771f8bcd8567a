"""Integrations with external tools."""

from integrations.helm_client import HelmClient
from integrations.trivy_provider import TrivyProvider

__all__ = [
    "HelmClient",
    "TrivyProvider",
]
