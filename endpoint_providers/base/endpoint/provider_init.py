"""Initialization bundle for endpoint providers.

Encapsulates the constructor parameters shared by every ``EndpointProvider``.
No I/O occurs here; this is a pure data container.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..constants import DEFAULT_PROTOCOL_VERSION
from ..routing import UrlResolver
from .outbound import CredentialSource, OutboundRequest

# hook(request, body, streaming) -> adjusted request, or None to keep it
RequestHook = Callable[[OutboundRequest, Any, bool], Optional[OutboundRequest]]


@dataclass(frozen=True)
class ProviderInit:
    """Initialization bundle for ``EndpointProvider``.

    Attributes:
        api_key: Credential source, a literal key or a zero-argument callable
            read on every request build. ``None`` sends anonymous requests.
        base_url: Vendor API root; ``None`` selects the vendor default.
        default_model: Model used when a call does not name one.
        url_resolver: Optional URL template delegate (see ``base.routing``).
        request_hook: Optional delegate adjusting each built request.
        protocol_version: Outbound HTTP protocol version.
        surface_ancillary_events: Whether stream records outside the canonical
            shape (citations, search activity) are surfaced as
            ``vendor_extensions`` increments.
    """

    api_key: CredentialSource = None
    base_url: Optional[str] = None
    default_model: Optional[str] = None
    url_resolver: Optional[UrlResolver] = None
    request_hook: Optional[RequestHook] = None
    protocol_version: str = DEFAULT_PROTOCOL_VERSION
    surface_ancillary_events: bool = False


__all__ = ["ProviderInit", "RequestHook"]
