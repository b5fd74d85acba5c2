"""endpoint-providers CLI (package entrypoint).

Wires argument parsing to the action handlers in ``cli_actions``; it performs
no vendor logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import sys
from typing import Optional

import httpx

from ...base.logging import configure_logger
from .cli_actions import EXIT_USAGE, dispatch
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None, *, http_client: Optional[httpx.AsyncClient] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.
    http_client: Optional[httpx.AsyncClient]
        Transport override for network subcommands (tests).

    Returns
    -------
    int
        Process exit code (0 success, 2 usage/configuration, 1 failure).
    """
    p = build_parser()
    args = p.parse_args(list(sys.argv[1:] if argv is None else argv))
    if not args.cmd:
        p.print_help(sys.stderr)
        return EXIT_USAGE
    if args.log_level:
        configure_logger(level=args.log_level)
    return dispatch(args, http_client=http_client)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
