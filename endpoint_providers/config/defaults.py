"""endpoint_providers.config.defaults
==================================

Central place for small, stable default values used across the
endpoint_providers package and its CLI. These defaults can be overridden via
environment variables or external configuration, but provide sensible
fallbacks for local development and tests.

Only plain constants live here; this module imports nothing from the rest of
the package to avoid circular dependencies.
"""

from __future__ import annotations

# ---- CLI Defaults ----
# Default vendor selected by the CLI when none is specified.
PROVIDER_CLI_DEFAULT_PROVIDER = "cohere"
# Default capability for the ``url`` subcommand.
PROVIDER_CLI_DEFAULT_CAPABILITY = "chat"


# ---- Vendor-specific sane defaults ----
# Cohere defaults used when config does not explicitly set them.
COHERE_DEFAULT_MODEL = "command-r-plus"
COHERE_DEFAULT_BASE_URL = "https://api.cohere.ai/v2"
COHERE_DEFAULT_EMBED_MODEL = "embed-english-v3.0"


__all__ = [
    # CLI
    "PROVIDER_CLI_DEFAULT_PROVIDER",
    "PROVIDER_CLI_DEFAULT_CAPABILITY",
    # Vendor defaults
    "COHERE_DEFAULT_MODEL",
    "COHERE_DEFAULT_BASE_URL",
    "COHERE_DEFAULT_EMBED_MODEL",
]
