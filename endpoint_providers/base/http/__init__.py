"""HTTP utilities package for the transport executor.

Exposes pooled ``httpx.AsyncClient`` instances and the streamed-body line
reader.
"""

from .client import aclose_all_clients, get_httpx_client
from .line_reader import HttpxLineReader

__all__ = ["get_httpx_client", "aclose_all_clients", "HttpxLineReader"]
