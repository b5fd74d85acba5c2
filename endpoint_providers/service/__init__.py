"""Service layer: the transport executor and the command-line interface."""

from .endpoint_client import EndpointClient

__all__ = ["EndpointClient"]
