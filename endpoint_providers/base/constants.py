"""Base shared constants for endpoint providers.

Central location to avoid scattering magic strings across adapters.

# pragma: allowlist secret
"""
from __future__ import annotations

from .. import __version__

# Library identification sent with every outbound request
USER_AGENT = f"endpoint-providers/{__version__}"

# Outbound HTTP protocol version applied when a provider does not override it
DEFAULT_PROTOCOL_VERSION = "1.1"
SUPPORTED_PROTOCOL_VERSIONS = ("1.1", "2")

# Media types
JSON_CONTENT_TYPE = "application/json"
NDJSON_CONTENT_TYPE = "application/x-ndjson"

# Replacement shown wherever a credential would otherwise be printed
REDACTED = "***"

__all__ = [
    "USER_AGENT",
    "DEFAULT_PROTOCOL_VERSION",
    "SUPPORTED_PROTOCOL_VERSIONS",
    "JSON_CONTENT_TYPE",
    "NDJSON_CONTENT_TYPE",
    "REDACTED",
]
