"""Configuration loader – reads .env and environment variables with secret redaction."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv

from exa_cli.domain.errors import MissingCredential
from exa_cli.domain.value_objects import DEFAULT_API_BASE, Credentials


# Patterns that should NEVER be printed/logged
_SECRET_PATTERNS = [
    re.compile(r"(EXA_API_KEY\s*=\s*)\S+"),
    re.compile(r"(Bearer\s+)[A-Za-z0-9._-]{8,}"),
    re.compile(r"(x-api-key[\"']?\s*[:=]\s*[\"']?)[A-Za-z0-9_-]{8,}", re.IGNORECASE),
    re.compile(r"(key[\"']?\s*[:=]\s*[\"']?)[A-Za-z0-9_-]{16,}"),
]


def redact_secrets(text: str) -> str:
    """Mask anything that looks like a secret in *text*."""
    result = text
    for pat in _SECRET_PATTERNS:
        result = pat.sub(lambda m: m.group(1) + "***REDACTED***", result)
    return result


def load_config(env_path: str | None = None) -> dict[str, str | None]:
    """Load configuration from .env file and environment variables.

    Returns a dict of the config keys this CLI cares about.
    Values are never logged or printed.
    """
    if env_path:
        load_dotenv(env_path)
    else:
        # Walk up to find .env
        cwd = Path.cwd()
        for d in [cwd, *cwd.parents]:
            candidate = d / ".env"
            if candidate.exists():
                load_dotenv(candidate)
                break

    return {
        "EXA_API_KEY": os.environ.get("EXA_API_KEY"),
        "EXA_API_BASE": os.environ.get("EXA_API_BASE"),
        "EXA_TIMEOUT": os.environ.get("EXA_TIMEOUT"),
    }


def resolve_credentials(
    config: Mapping[str, str | None],
    api_key: str | None = None,
    api_base: str | None = None,
) -> Credentials:
    """Pick the API key and base URL; explicit arguments beat *config*.

    Raises ``MissingCredential`` when no non-blank key is available.
    """
    key = api_key or config.get("EXA_API_KEY")
    if not key or not key.strip():
        raise MissingCredential("EXA_API_KEY")
    base = api_base or config.get("EXA_API_BASE") or DEFAULT_API_BASE
    return Credentials(api_key=key.strip(), base_url=base.strip())


def resolve_timeout(config: Mapping[str, str | None], override: float | None = None) -> float:
    if override is not None:
        return override
    raw = config.get("EXA_TIMEOUT")
    if raw:
        try:
            return float(raw)
        except ValueError:
            raise ValueError(f"EXA_TIMEOUT must be a number of seconds, got {raw!r}") from None
    return 30.0
