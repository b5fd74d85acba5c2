"""Cohere vendor adapter."""

from .client import CohereEndpointProvider
from .stream_decoder import CohereStreamDecoder

__all__ = ["CohereEndpointProvider", "CohereStreamDecoder"]
