"""CLI parser construction for endpoint-providers.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions`` to keep the presentation layer thin.
"""

from __future__ import annotations

import argparse

from ...base.routing import CapabilityEndpoint
from ...config.defaults import PROVIDER_CLI_DEFAULT_CAPABILITY, PROVIDER_CLI_DEFAULT_PROVIDER

SUBCOMMANDS = ("url", "request", "chat", "models", "embed", "decode")


def _str2bool(v: str | None) -> bool:
    """Permissive truthy/falsey parsing for optional boolean flags."""
    if v is None:
        return True
    val = v.strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    return False if val in {"0", "f", "false", "n", "no", "off"} else bool(val)


def add_stream_flags(parser: argparse.ArgumentParser) -> None:
    """Attach ``--stream``/``--no-stream`` flags to a parser."""
    grp = parser.add_mutually_exclusive_group()
    grp.add_argument("--stream", nargs="?", const=True, type=_str2bool, default=False)
    grp.add_argument("--no-stream", dest="stream", action="store_false")


def _add_provider_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--provider", default=PROVIDER_CLI_DEFAULT_PROVIDER)
    parser.add_argument("--model", default=None)
    parser.add_argument("--base-url", default=None, help="Override the vendor API root")
    parser.add_argument(
        "--ancillary",
        action="store_true",
        help="Surface citation and search records as vendor-extension increments",
    )
    parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    No I/O happens here; only argument shapes are declared.
    """
    p = argparse.ArgumentParser(
        prog="endpoint-providers",
        description="Inspect and exercise vendor endpoint adapters",
    )
    p.add_argument("--log-level", default=None, help="Override ENDPOINT_PROVIDERS_LOG_LEVEL")
    sub = p.add_subparsers(dest="cmd")

    capabilities = [c.value for c in CapabilityEndpoint]

    # url
    p_url = sub.add_parser("url", help="Print the resolved URL for a capability")
    _add_provider_flags(p_url)
    p_url.add_argument("--capability", choices=capabilities, default=PROVIDER_CLI_DEFAULT_CAPABILITY)
    p_url.add_argument("--suffix", default=None, help="Path suffix appended after the fragment")

    # request
    p_req = sub.add_parser("request", help="Print the outbound chat request (credential redacted)")
    _add_provider_flags(p_req)
    p_req.add_argument("--prompt", required=True)
    p_req.add_argument("--system", default=None)
    add_stream_flags(p_req)

    # chat
    p_chat = sub.add_parser("chat", help="Send a prompt and print the reply")
    _add_provider_flags(p_chat)
    p_chat.add_argument("--prompt", required=True)
    p_chat.add_argument("--system", default=None)
    p_chat.add_argument("--max-tokens", type=int, default=None)
    p_chat.add_argument("--temperature", type=float, default=None)
    add_stream_flags(p_chat)

    # models
    p_models = sub.add_parser("models", help="List vendor models")
    _add_provider_flags(p_models)
    p_models.add_argument("--page-size", type=int, default=None)
    p_models.add_argument("--page-token", default=None)

    # embed
    p_embed = sub.add_parser("embed", help="Embed one or more texts")
    _add_provider_flags(p_embed)
    p_embed.add_argument("texts", nargs="+")

    # decode
    p_decode = sub.add_parser("decode", help="Replay a recorded NDJSON stream through the decoder")
    _add_provider_flags(p_decode)
    p_decode.add_argument("file", help="Path to the recorded stream, or '-' for stdin")

    return p


__all__ = ["SUBCOMMANDS", "add_stream_flags", "build_parser"]
