"""Outbound request shaping.

Builds a transport-agnostic :class:`OutboundRequest` (verb, absolute URL,
headers, serialized body, protocol version). Every request carries the library
user agent and protocol version; bearer authentication is added from the
credential source read at build time, and omitted when no credential is set
(anonymous calls are legal).

The streaming flag selects how the response body is read later; it does not
change how the request is built beyond the ``Accept`` header.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Union

import httpx

from ..constants import (
    DEFAULT_PROTOCOL_VERSION,
    JSON_CONTENT_TYPE,
    NDJSON_CONTENT_TYPE,
    REDACTED,
    USER_AGENT,
)

# A credential is a literal key or a zero-argument callable returning one.
CredentialSource = Union[str, Callable[[], Optional[str]], None]


def read_credential(source: CredentialSource) -> Optional[str]:
    """Return the current credential (stripped), or ``None`` when unset."""
    value = source() if callable(source) else source
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass(frozen=True)
class OutboundRequest:
    """Transport-agnostic outbound HTTP request.

    Attributes:
        method: HTTP verb (upper-case).
        url: Absolute URL.
        headers: Header mapping including user agent and optional auth.
        body: Serialized body bytes, if any.
        http_version: Protocol version (``"1.1"`` or ``"2"``).
        streaming: Whether the response body will be read as a line stream.
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    http_version: str = DEFAULT_PROTOCOL_VERSION
    streaming: bool = False

    def redacted_headers(self) -> Dict[str, str]:
        """Headers with the credential masked, safe for logs and CLI output."""
        out = dict(self.headers)
        if "Authorization" in out:
            scheme = out["Authorization"].split(" ", 1)[0]
            out["Authorization"] = f"{scheme} {REDACTED}"
        return out

    def to_httpx(self, client: httpx.AsyncClient, *, timeout: Optional[httpx.Timeout] = None) -> httpx.Request:
        """Materialize as an ``httpx.Request`` on ``client``."""
        return client.build_request(
            self.method,
            self.url,
            headers=dict(self.headers),
            content=self.body,
            timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )

    def to_dict(self, *, redact: bool = True) -> Dict[str, Any]:
        return {
            "method": self.method,
            "url": self.url,
            "headers": self.redacted_headers() if redact else dict(self.headers),
            "body": self.body.decode("utf-8") if self.body is not None else None,
            "http_version": self.http_version,
            "streaming": self.streaming,
        }


def serialize_body(body: Any) -> Optional[bytes]:
    """Serialize a request body: mappings/lists to JSON, text to UTF-8."""
    if body is None:
        return None
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    return json.dumps(body, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def build_outbound_request(
    url: str,
    method: str = "POST",
    body: Any = None,
    streaming: bool = False,
    *,
    credential: CredentialSource = None,
    protocol_version: str = DEFAULT_PROTOCOL_VERSION,
    extra_headers: Optional[Mapping[str, str]] = None,
) -> OutboundRequest:
    """Assemble an :class:`OutboundRequest`.

    The credential source is read on every call so rotated keys take effect
    without rebuilding the provider.
    """
    headers: Dict[str, str] = {"User-Agent": USER_AGENT}
    payload = serialize_body(body)
    if payload is not None:
        headers["Content-Type"] = JSON_CONTENT_TYPE
    headers["Accept"] = NDJSON_CONTENT_TYPE if streaming else JSON_CONTENT_TYPE
    if extra_headers:
        headers.update(extra_headers)
    api_key = read_credential(credential)
    if api_key is not None:
        headers["Authorization"] = f"Bearer {api_key}"
    return OutboundRequest(
        method=method.upper(),
        url=url,
        headers=headers,
        body=payload,
        http_version=protocol_version,
        streaming=streaming,
    )


__all__ = [
    "CredentialSource",
    "OutboundRequest",
    "build_outbound_request",
    "read_credential",
    "serialize_body",
]
