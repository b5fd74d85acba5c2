"""CLI action handlers.

Purpose
-------
Subcommand handlers for the endpoint-providers CLI. Each handler builds a
provider through :class:`ProviderFactory`, performs its action and prints the
result to stdout. This module has no top-level side effects and is safe to
import in tests.

Error Semantics
---------------
Errors are printed as JSON to stderr and mapped to exit codes:

- ``0``: success
- ``2``: configuration or usage error (unknown vendor or capability,
  invalid request fields)
- ``1``: transport failure, unusable vendor response, or cancellation

Network access happens only in ``chat``, ``models`` and ``embed``; ``url``,
``request`` and ``decode`` are offline.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional

import httpx
from pydantic import ValidationError

from ...base.cancellation import CancelledError
from ...base.dto import ChatRequest
from ...base.endpoint import EndpointProvider
from ...base.errors import ConfigurationError, ProviderError
from ...base.factory import ProviderFactory
from ...base.http import aclose_all_clients
from ...base.logging import LogContext, get_logger, normalized_log_event
from ...base.models import StreamInternalKind
from ...base.routing import CapabilityEndpoint
from ..endpoint_client import EndpointClient

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, default=str))


def _print_error(exc: BaseException, **extra: Any) -> None:
    payload: Dict[str, Any] = {"error": str(exc), "type": exc.__class__.__name__}
    if isinstance(exc, ProviderError):
        payload["code"] = exc.code.value
    payload.update(extra)
    print(json.dumps(payload, ensure_ascii=False, default=str), file=sys.stderr)


def build_provider(args: argparse.Namespace) -> EndpointProvider:
    """Create the provider named on the command line with CLI overrides."""
    overrides: Dict[str, Any] = {"model": args.model, "base_url": args.base_url}
    if getattr(args, "ancillary", False):
        overrides["surface_ancillary_events"] = True
    return ProviderFactory.create(args.provider, overrides=overrides)


def _chat_request(args: argparse.Namespace, provider: EndpointProvider) -> ChatRequest:
    return ChatRequest.from_prompt(
        args.prompt,
        model=args.model or provider.default_model(),
        system=args.system,
        max_tokens=getattr(args, "max_tokens", None),
        temperature=getattr(args, "temperature", None),
        stream=bool(args.stream),
    )


# ----- offline handlers -----
def handle_url(args: argparse.Namespace, **_: Any) -> int:
    provider = build_provider(args)
    url = provider.resolve_url(args.capability, args.suffix, args.model)
    if args.json:
        _print_json({"provider": provider.provider_name, "capability": args.capability, "url": url})
    else:
        print(url)
    return EXIT_OK


def handle_request(args: argparse.Namespace, **_: Any) -> int:
    provider = build_provider(args)
    request = _chat_request(args, provider)
    outbound = provider.build_request(
        provider.resolve_url(CapabilityEndpoint.CHAT, model=request.model),
        "POST",
        provider.build_chat_body(request, stream=bool(args.stream)),
        streaming=bool(args.stream),
    )
    _print_json(outbound.to_dict(redact=True))
    return EXIT_OK


def _read_lines(path: str) -> Iterable[str]:
    if path == "-":
        return sys.stdin.read().splitlines()
    return Path(path).read_text(encoding="utf-8").splitlines()


async def _decode(provider: EndpointProvider, lines: Iterable[str]) -> int:
    async for item in provider.decode_stream(lines):
        _print_json(item.to_dict())
    return EXIT_OK


def handle_decode(args: argparse.Namespace, **_: Any) -> int:
    provider = build_provider(args)
    lines = _read_lines(args.file)
    return asyncio.run(_decode(provider, lines))


# ----- network handlers -----
async def _chat(args: argparse.Namespace, http_client: Optional[httpx.AsyncClient]) -> int:
    provider = build_provider(args)
    request = _chat_request(args, provider)
    client = EndpointClient(provider, http_client=http_client)
    if not args.stream:
        result = await client.chat(request)
        if args.json:
            _print_json(result.to_dict())
        else:
            print(result.text)
        return EXIT_OK
    async for item in client.stream_chat(request):
        if args.json:
            _print_json(item.to_dict())
        elif item.stream_kind is StreamInternalKind.NONE and item.delta_text:
            print(item.delta_text, end="", flush=True)
    if not args.json:
        print()
    return EXIT_OK


async def _models(args: argparse.Namespace, http_client: Optional[httpx.AsyncClient]) -> int:
    client = EndpointClient(build_provider(args), http_client=http_client)
    result = await client.list_models(page_token=args.page_token, page_size=args.page_size)
    if args.json:
        _print_json(result.to_dict())
    else:
        for name in result.names():
            print(name)
    return EXIT_OK


async def _embed(args: argparse.Namespace, http_client: Optional[httpx.AsyncClient]) -> int:
    client = EndpointClient(build_provider(args), http_client=http_client)
    result = await client.embed(args.texts, model=args.model)
    if args.json:
        _print_json(result.to_dict())
    else:
        for text, vector in zip(args.texts, result.embeddings):
            print(f"{text[:40]!r}: dim={len(vector)}")
    return EXIT_OK


async def _run_network(
    action: Callable[[argparse.Namespace, Optional[httpx.AsyncClient]], Awaitable[int]],
    args: argparse.Namespace,
    http_client: Optional[httpx.AsyncClient],
) -> int:
    try:
        return await action(args, http_client)
    finally:
        if http_client is None:
            # pooled clients are bound to this event loop
            await aclose_all_clients()


def handle_chat(args: argparse.Namespace, *, http_client: Optional[httpx.AsyncClient] = None) -> int:
    return asyncio.run(_run_network(_chat, args, http_client))


def handle_models(args: argparse.Namespace, *, http_client: Optional[httpx.AsyncClient] = None) -> int:
    return asyncio.run(_run_network(_models, args, http_client))


def handle_embed(args: argparse.Namespace, *, http_client: Optional[httpx.AsyncClient] = None) -> int:
    return asyncio.run(_run_network(_embed, args, http_client))


HANDLERS: Dict[str, Callable[..., int]] = {
    "url": handle_url,
    "request": handle_request,
    "decode": handle_decode,
    "chat": handle_chat,
    "models": handle_models,
    "embed": handle_embed,
}


def dispatch(args: argparse.Namespace, *, http_client: Optional[httpx.AsyncClient] = None) -> int:
    """Run the selected subcommand and map failures to exit codes."""
    logger = get_logger(f"cli.{args.cmd}")
    ctx = LogContext(provider=getattr(args, "provider", None), model=getattr(args, "model", None))
    handler = HANDLERS[args.cmd]
    try:
        return handler(args, http_client=http_client)
    except (ConfigurationError, ValidationError, OSError) as exc:
        _print_error(exc)
        return EXIT_USAGE
    except (ProviderError, CancelledError) as exc:
        normalized_log_event(
            logger,
            "cli.error",
            ctx,
            phase="finalize",
            emitted=False,
            tokens=None,
            error_code=exc.code.value if isinstance(exc, ProviderError) else "cancelled",
            error=str(exc),
        )
        _print_error(exc)
        return EXIT_FAILURE


__all__ = [
    "EXIT_OK",
    "EXIT_FAILURE",
    "EXIT_USAGE",
    "HANDLERS",
    "build_provider",
    "dispatch",
    "handle_url",
    "handle_request",
    "handle_decode",
    "handle_chat",
    "handle_models",
    "handle_embed",
]
