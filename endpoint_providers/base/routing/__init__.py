"""Capability routing: which vendor URL serves which abstract capability."""

from .capability import CapabilityEndpoint
from .url_context import UrlContext, UrlResolver
from .router import CapabilityRouter

__all__ = ["CapabilityEndpoint", "UrlContext", "UrlResolver", "CapabilityRouter"]
