"""
Function invocation requested by the model.

``arguments`` is always canonical JSON text regardless of how the vendor
encoded it (object, string, or missing), so consumers can ``json.loads`` it
without vendor branches.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class FunctionCall:
    """Name and JSON-encoded arguments of a requested function call."""

    name: str
    arguments: str = "{}"

    def parsed_arguments(self) -> Dict[str, Any]:
        """Decode ``arguments``; an empty or non-object payload yields ``{}``."""
        if not self.arguments:
            return {}
        value = json.loads(self.arguments)
        return value if isinstance(value, dict) else {}

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "arguments": self.arguments}


__all__ = ["FunctionCall"]
