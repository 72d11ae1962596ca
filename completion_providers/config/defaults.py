"""completion_providers.config.defaults
=====================================

Small, stable default values for the completion engines. They can be
overridden via environment variables or an external config file, but give
sensible fallbacks for local development and tests.

Only plain constants live here; this module imports nothing from the rest of
the package.
"""

from __future__ import annotations

# ---- OpenAI (streaming completions endpoint) ----
OPENAI_DEFAULT_MODEL = "gpt-3.5-turbo-instruct"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"

# ---- Azure OpenAI (chat completions endpoint) ----
# Azure requires an explicit endpoint and deployment; only the API version and
# model have a meaningful default.
AZURE_DEFAULT_MODEL = "gpt-35-turbo"
AZURE_DEFAULT_API_VERSION = "2024-02-15-preview"

# ---- Config file / dotenv discovery ----
CONFIG_FILE_ENV = "COMPLETION_CONFIG_FILE"
DOTENV_FILE_ENV = "DOTENV_FILE"
DOTENV_DEFAULT_PATH = ".env"

# Purpose tag for pooled HTTP clients built by the engines.
HTTP_CLIENT_PURPOSE = "completions"

__all__ = [
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "AZURE_DEFAULT_MODEL",
    "AZURE_DEFAULT_API_VERSION",
    "CONFIG_FILE_ENV",
    "DOTENV_FILE_ENV",
    "DOTENV_DEFAULT_PATH",
    "HTTP_CLIENT_PURPOSE",
]
