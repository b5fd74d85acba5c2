"""Cooperative cancellation primitives (public API facade).

Expose stable, vendor-agnostic cancellation constructs via the canonical
``endpoint_providers.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

- ``CancellationToken`` signals cancellation into stream decode loops.
- ``CancelledError`` is raised once a decode loop has observed the request
  and finalized its accumulated content.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
