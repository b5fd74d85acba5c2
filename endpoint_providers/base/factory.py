"""Provider Factory utilities.

Purpose
-------
Centralize vendor-agnostic creation of ``EndpointProvider`` instances.
Adapters are imported lazily using ``importlib`` so importing the factory
never pulls in every vendor module.

Configuration
-------------
``create`` merges settings through :func:`endpoint_providers.config.get_provider_config`
(defaults, config file, env vars, key aliases, overrides) and hands the
adapter a :class:`ProviderInit`. Unless a literal key is passed explicitly,
the credential source is a callable re-resolved on every request build, so
rotated keys take effect without recreating the provider.

Failure semantics
-----------------
The factory performs no retries or fallbacks; it either returns an instance
or raises :class:`UnknownProviderError` (a ``ConfigurationError``).
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from ..config import get_provider_config
from .endpoint import EndpointProvider, ProviderInit, RequestHook
from .errors import ConfigurationError, ErrorCode
from .routing import UrlResolver


class UnknownProviderError(ConfigurationError):
    """Raised when a vendor cannot be resolved or its adapter initialized.

    Failure modes include:
    - The vendor name is not registered in the factory mapping.
    - The adapter module cannot be imported or the adapter class is missing.
    """

    def __init__(self, message: str, *, provider: str) -> None:
        super().__init__(message, provider=provider, code=ErrorCode.NOT_FOUND)


def create_provider(provider: str, **kwargs: Any) -> EndpointProvider:
    """Shortcut delegating to :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


class ProviderFactory:
    """Create endpoint providers by canonical vendor name (e.g. ``"cohere"``)."""

    # Map canonical vendor names to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "cohere": {"module": "endpoint_providers.cohere.client", "class": "CohereEndpointProvider"},
    }

    @classmethod
    def register(cls, name: str, module: str, class_name: str) -> None:
        """Register (or replace) a vendor adapter import path."""
        key = (name or "").lower().strip()
        if not key:
            raise ValueError("provider name must be non-empty")
        cls._PROVIDERS[key] = {"module": module, "class": class_name}

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the registered vendor names in deterministic order."""
        return tuple(cls._PROVIDERS.keys())

    @classmethod
    def adapter_class(cls, provider: str) -> Type[EndpointProvider]:
        """Import and return the adapter class registered for ``provider``."""
        name = (provider or "").lower().strip()
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(f"Unknown provider '{provider}'", provider=name or str(provider))
        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}",
                provider=name,
            ) from exc
        try:
            return getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'",
                provider=name,
            ) from exc

    @classmethod
    def create(
        cls,
        provider: str,
        *,
        overrides: Optional[Mapping[str, Any]] = None,
        url_resolver: Optional[UrlResolver] = None,
        request_hook: Optional[RequestHook] = None,
    ) -> EndpointProvider:
        """Create a configured adapter instance.

        Parameters
        ----------
        provider:
            Canonical vendor name.
        overrides:
            Config values taking precedence over every other source
            (``model``, ``api_key``, ``base_url``, ``protocol_version``,
            ``surface_ancillary_events``).
        url_resolver, request_hook:
            Optional delegates installed on the new provider.
        """
        klass = cls.adapter_class(provider)
        name = provider.lower().strip()
        cfg = get_provider_config(name, dict(overrides) if overrides else None)
        return klass(cls._build_init(name, cfg, overrides, url_resolver, request_hook))

    @staticmethod
    def _build_init(
        name: str,
        cfg: Mapping[str, Any],
        overrides: Optional[Mapping[str, Any]],
        url_resolver: Optional[UrlResolver],
        request_hook: Optional[RequestHook],
    ) -> ProviderInit:
        explicit_key = (overrides or {}).get("api_key")
        return ProviderInit(
            api_key=explicit_key if explicit_key is not None else (lambda: get_provider_config(name).get("api_key")),
            base_url=cfg.get("base_url"),
            default_model=cfg.get("model"),
            url_resolver=url_resolver,
            request_hook=request_hook,
            protocol_version=str(cfg.get("protocol_version") or "1.1"),
            surface_ancillary_events=bool(cfg.get("surface_ancillary_events", False)),
        )


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider"]
