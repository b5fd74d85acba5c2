"""Capability router: abstract capability -> concrete vendor URL.

A router is built once per provider from the vendor's fragment table and base
URL. A custom resolver delegate, when installed, takes precedence over the
default ``{base_url}/{fragment}{suffix}`` template; its return value is a
format template receiving ``{0}`` = fragment, ``{1}`` = suffix and ``{2}`` =
model name, e.g. ``"https://proxy.internal/cohere/{0}{1}?model={2}"``.
"""
from __future__ import annotations

from typing import Mapping, Optional, Tuple

from ..errors import ConfigurationError
from .capability import CapabilityEndpoint
from .url_context import UrlContext, UrlResolver


class CapabilityRouter:
    """Resolve capability URLs for one vendor.

    Parameters
    ----------
    provider:
        Vendor key used in error messages.
    base_url:
        Vendor API root, without trailing slash requirements.
    fragments:
        Supported capabilities mapped to their URL fragment. Capabilities not
        in the mapping are unsupported and raise ``ConfigurationError``.
    url_resolver:
        Optional override delegate (see module docstring).
    """

    def __init__(
        self,
        *,
        provider: str,
        base_url: str,
        fragments: Mapping[CapabilityEndpoint, str],
        url_resolver: Optional[UrlResolver] = None,
    ) -> None:
        self._provider = provider
        self._base_url = base_url.rstrip("/")
        self._fragments = dict(fragments)
        self._url_resolver = url_resolver

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def url_resolver(self) -> Optional[UrlResolver]:
        return self._url_resolver

    def install_resolver(self, resolver: Optional[UrlResolver]) -> None:
        """Install the resolver delegate; allowed once per router."""
        if self._url_resolver is not None and resolver is not self._url_resolver:
            raise ConfigurationError(
                "url resolver already installed",
                provider=self._provider,
            )
        self._url_resolver = resolver

    def supported(self) -> Tuple[CapabilityEndpoint, ...]:
        return tuple(self._fragments)

    def supports(self, capability: "CapabilityEndpoint | str") -> bool:
        return CapabilityEndpoint.parse(capability) in self._fragments

    def fragment(self, capability: "CapabilityEndpoint | str") -> str:
        """Return the vendor URL fragment or raise ``ConfigurationError``."""
        try:
            cap = CapabilityEndpoint.parse(capability)
        except ValueError as exc:
            raise ConfigurationError(
                f"unknown capability '{capability}'",
                provider=self._provider,
            ) from exc
        frag = self._fragments.get(cap)
        if frag is None:
            raise ConfigurationError(
                f"{self._provider} doesn't support endpoint {cap.value}",
                provider=self._provider,
            )
        return frag

    def resolve(
        self,
        capability: "CapabilityEndpoint | str",
        path_suffix: Optional[str] = None,
        model: Optional[str] = None,
    ) -> str:
        """Return the absolute URL for ``capability``.

        Raises
        ------
        ConfigurationError
            When the vendor does not support the capability, or a resolver
            template references a placeholder it was not given.
        """
        frag = self.fragment(capability)
        suffix = path_suffix or ""
        if self._url_resolver is None:
            return f"{self._base_url}/{frag}{suffix}"
        cap = CapabilityEndpoint.parse(capability)
        template = self._url_resolver(cap, path_suffix, UrlContext(frag, path_suffix, model))
        try:
            return template.format(frag, suffix, model or "")
        except (IndexError, KeyError, ValueError) as exc:
            raise ConfigurationError(
                f"invalid url resolver template '{template}': {exc}",
                provider=self._provider,
                model=model,
            ) from exc


__all__ = ["CapabilityRouter"]
