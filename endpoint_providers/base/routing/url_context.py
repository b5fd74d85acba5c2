"""
Context handed to custom URL resolvers.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .capability import CapabilityEndpoint


@dataclass(frozen=True)
class UrlContext:
    """What a resolver knows about the URL being built.

    Attributes:
        endpoint_fragment: Vendor URL fragment for the capability (``"embed"``).
        path_suffix: Extra path appended after the fragment, if any.
        model: Model name the request targets, if any.
    """

    endpoint_fragment: str
    path_suffix: Optional[str] = None
    model: Optional[str] = None


# resolver(capability, path_suffix, context) -> template; the template is then
# formatted positionally with (endpoint_fragment, path_suffix, model name).
UrlResolver = Callable[[CapabilityEndpoint, Optional[str], UrlContext], str]


__all__ = ["UrlContext", "UrlResolver"]
