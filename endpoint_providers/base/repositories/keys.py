"""
Keys Repository

Purpose
- Centralize credential resolution for endpoint providers.
- Prefer environment variables; fall back to the external config file.
- Read-only: nothing here writes to the environment or to disk.

Design
- Non-throwing accessors that return ``None`` when no key is resolved.
- Alias-aware env lookup shared with ``endpoint_providers.config.env``.
- ``credential_source(provider)`` returns a zero-argument callable suitable
  for ``ProviderInit.api_key`` so rotated keys are picked up at request build.

Usage
- repo = KeysRepository()
- key = repo.get_api_key("cohere")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from ...config import _load_external_config
from ...config.env import ENV_MAP, is_placeholder, resolve_provider_key


@dataclass
class KeyResolution:
    provider: str
    api_key: Optional[str]
    source: str  # "env", "config", "none"
    extra: Dict[str, Any] = field(default_factory=dict)


class KeysRepository:
    """
    Resolve vendor credentials with a strict priority order:

    1) Environment variables, canonical name then aliases (authoritative)
    2) External config file section (``api_key``, ``key`` or ``token``)
    3) None

    Placeholder values (``changeme``, ``test_...``) are treated as unset.
    """

    ENV_MAP = ENV_MAP
    _CONFIG_FIELDS = ("api_key", "key", "token")

    def get_api_key(self, provider: str) -> Optional[str]:
        return self.get_resolution(provider).api_key

    def credential_source(self, provider: str) -> Callable[[], Optional[str]]:
        """Return a callable re-resolving the key on every call."""
        return lambda: self.get_api_key(provider)

    def get_resolution(self, provider: str) -> KeyResolution:
        p = (provider or "").lower().strip()
        val, used = resolve_provider_key(p)
        if val and not is_placeholder(val):
            return KeyResolution(provider=p, api_key=val, source="env", extra={"env_var": used})

        cfg_key, extra = self._from_config(p)
        if cfg_key:
            return KeyResolution(provider=p, api_key=cfg_key, source="config", extra=extra)

        return KeyResolution(provider=p, api_key=None, source="none", extra=extra)

    # -------------------- internal helpers --------------------

    def _from_config(self, provider: str) -> Tuple[Optional[str], Dict[str, Any]]:
        """Read a key from the external config file section for ``provider``."""
        meta: Dict[str, Any] = {}
        section = _load_external_config().get(provider)
        meta["has_provider_section"] = isinstance(section, Mapping)
        if not isinstance(section, Mapping):
            return None, meta
        return self._extract_field(section, meta), meta

    @classmethod
    def _extract_field(cls, section: Mapping[str, Any], meta: Dict[str, Any]) -> Optional[str]:
        """Return the first non-placeholder credential field, recording which matched."""
        for name in cls._CONFIG_FIELDS:
            val = section.get(name)
            if isinstance(val, str) and val.strip() and not is_placeholder(val):
                meta["field"] = name
                return val.strip()
        return None


__all__ = ["KeyResolution", "KeysRepository"]
