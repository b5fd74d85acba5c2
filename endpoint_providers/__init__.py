"""Vendor-neutral endpoint layer for LLM chat-completion services.

Each vendor adapter (an :class:`~endpoint_providers.base.endpoint.EndpointProvider`)
resolves capability URLs, builds outbound requests, deserializes complete
responses, and decodes its streaming wire protocol into one canonical stream
of :class:`~endpoint_providers.base.models.ChatResult` increments.

Submodules are imported lazily by callers; this package module only carries
the version to stay free of import-time side effects.
"""

__version__ = "0.4.0"

__all__ = ["__version__"]
