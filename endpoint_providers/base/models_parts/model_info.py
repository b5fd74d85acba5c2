"""
Model descriptor returned by a vendor's model-listing capability.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class ModelInfo:
    """A model advertised by a vendor.

    Attributes:
        name: Vendor model identifier.
        endpoints: Capability fragments the model serves (e.g. ``"chat"``).
        context_length: Maximum context window in tokens when advertised.
        provider: Vendor that listed the model.
    """

    name: str
    endpoints: Tuple[str, ...] = ()
    context_length: Optional[int] = None
    provider: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["endpoints"] = list(self.endpoints)
        return out


__all__ = ["ModelInfo"]
