"""endpoint_providers.config.env
=============================

Centralized environment variable mapping and helpers for vendor credentials.

Purpose
-------
- Provide a single source of truth mapping vendor identifiers to their
  credential environment variable names (canonical and aliases).
- Offer small lookup utilities shared by the keys repository and the config
  merge.

Design Notes
------------
- Canonical mapping is defined in ``ENV_MAP``. Vendors that accept several
  variable names list them in ``ENV_ALIASES`` with the canonical name first to
  establish precedence (Cohere's SDK reads ``CO_API_KEY``).

Failure Modes
-------------
- Functions return ``None`` when a vendor is unknown or no value is present;
  callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical vendor → env var mapping
ENV_MAP: Dict[str, str] = {
    "cohere": "COHERE_API_KEY",
}


# Vendor → ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "cohere": ("COHERE_API_KEY", "CO_API_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like a placeholder or test value.

    Heuristics: contains 'placeholder', 'changeme' or 'example', or starts
    with 'test_' (case-insensitive).
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical credential variable for ``provider``, if known."""
    return ENV_MAP.get(provider.lower()) if provider else None


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable variable names for ``provider``, canonical first."""
    p = (provider or "").lower()
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):  # pragma: no branch - small tuples
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve a credential from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-empty candidate, or
        ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(provider):
        if val := os.environ.get(name):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]
