"""Unified configuration layer for endpoint providers.

Goals
-----
* Centralize defaults (models, base URLs, provider options).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       ``PROVIDERS_CONFIG_FILE``
    3. Environment variables (e.g. ``COHERE_MODEL``, ``COHERE_API_KEY``),
       after loading a ``.env`` file once
    4. ``KeysRepository`` credential aliases (only when no key is set yet)
    5. In-code overrides passed to the helper
* Provide a single call site: ``get_provider_config(provider)``.

Environment Variable Conventions
--------------------------------
``<PROVIDER>_MODEL``, ``<PROVIDER>_API_KEY``, ``<PROVIDER>_BASE_URL``,
``<PROVIDER>_PROTOCOL_VERSION``, ``<PROVIDER>_SURFACE_ANCILLARY_EVENTS``.

External Config File (Optional)
-------------------------------
JSON is tried first, then YAML (PyYAML). Structure example::

    cohere:
      model: command-r-plus
      base_url: https://api.cohere.ai/v2
      surface_ancillary_events: true

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* get_model(provider: str) -> str | None
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import COHERE_DEFAULT_BASE_URL, COHERE_DEFAULT_MODEL
from .env import is_placeholder

CONFIG_FILE_ENV = "PROVIDERS_CONFIG_FILE"
DOTENV_FILE_ENV = "DOTENV_FILE"


# -------------------- Defaults --------------------

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "cohere": {
        "model": COHERE_DEFAULT_MODEL,
        "base_url": COHERE_DEFAULT_BASE_URL,
        "protocol_version": "1.1",
        "surface_ancillary_events": False,
    },
}


ENV_FIELD_MAP = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
    "protocol_version": "PROTOCOL_VERSION",
    "surface_ancillary_events": "SURFACE_ANCILLARY_EVENTS",
}

_BOOL_FIELDS = ("surface_ancillary_events",)
_TRUE_STRINGS = ("1", "true", "yes", "on")

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Existing
    environment variables win unless they hold a placeholder value.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv(DOTENV_FILE_ENV, ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _parse_config_text(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    return data if isinstance(data, dict) else {}


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path or not Path(path).exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    _FILE_CACHE = _parse_config_text(Path(path).read_text(encoding="utf-8"))
    return _FILE_CACHE


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None:
            out[field] = val
    return out


def _coerce_bools(cfg: Dict[str, Any]) -> Dict[str, Any]:
    for field in _BOOL_FIELDS:
        val = cfg.get(field)
        if isinstance(val, str):
            cfg[field] = val.strip().lower() in _TRUE_STRINGS
    return cfg


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a vendor.

    Merge order (later wins): defaults -> external config -> env vars -> key repo -> overrides
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    # 1. Defaults
    cfg |= DEFAULTS.get(name, {})

    # 2. External config file section
    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    # 3. Env overrides
    cfg |= _env_overrides(name)

    # 4. API key via KeysRepository (only if not already set)
    if not cfg.get("api_key"):
        # Local import: the repository reads this package's env helpers.
        from ..base.repositories.keys import KeysRepository

        if key := KeysRepository().get_api_key(name):
            cfg["api_key"] = key

    # 5. Explicit overrides arg
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return _coerce_bools(cfg)


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


def reset_config_cache() -> None:
    """Forget the cached config file and .env state (tests, reloads)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


__all__ = [
    "get_provider_config",
    "get_model",
    "reset_config_cache",
    "DEFAULTS",
]
