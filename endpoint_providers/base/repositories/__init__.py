"""Read-only repositories used by the endpoint layer."""

from .keys import KeyResolution, KeysRepository

__all__ = ["KeyResolution", "KeysRepository"]
