"""
Canonical result of a model-listing call.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .model_info import ModelInfo


@dataclass(frozen=True)
class ModelListResult:
    """Models returned by one page of a listing call."""

    models: Tuple[ModelInfo, ...] = ()
    next_page_token: Optional[str] = None
    provider: Optional[str] = None

    def names(self) -> Tuple[str, ...]:
        return tuple(m.name for m in self.models)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "models": [m.to_dict() for m in self.models],
            "next_page_token": self.next_page_token,
        }


__all__ = ["ModelListResult"]
