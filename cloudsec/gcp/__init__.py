"""GCP provider implementation."""

from .provider import GCPProvider

__all__ = ["GCPProvider"]
