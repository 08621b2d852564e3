"""Unified configuration layer.

Goals
-----
* Centralize defaults (models, hosts, routing names).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Optional external config file (JSON or YAML) named by AICHAT_CONFIG_FILE
    3. Environment variables (e.g. OPENAI_MODEL, OLLAMA_HOST)
    4. In-code overrides passed to the helper
* Provide single call sites: ``get_provider_config(family)`` for adapters and
  ``get_routing_config()`` for the orchestrator.

Environment Variable Conventions
--------------------------------
<FAMILY>_MODEL, <FAMILY>_API_KEY, <FAMILY>_BASE_URL, <FAMILY>_HOST,
<FAMILY>_MAX_TOKENS, e.g. OPENAI_MODEL, OLLAMA_HOST.

External Config File (Optional)
-------------------------------
JSON is tried first, then YAML. Structure example:

```
routing:
  default_provider: PRIMARY
  fallback_provider: OPENAI
  providers:
    PRIMARY: ollama
    OPENAI: openai
ollama:
  model: llama3
  host: http://localhost:11434
openai:
  model: gpt-4o-mini
```
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    ANTHROPIC_DEFAULT_MAX_TOKENS,
    ANTHROPIC_DEFAULT_MODEL,
    OLLAMA_DEFAULT_HOST,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_DEFAULT_MODEL,
)
from .env import is_placeholder, resolve_provider_key


DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"model": OPENAI_DEFAULT_MODEL},
    "anthropic": {"model": ANTHROPIC_DEFAULT_MODEL, "max_tokens": ANTHROPIC_DEFAULT_MAX_TOKENS},
    "ollama": {"model": OLLAMA_DEFAULT_MODEL, "host": OLLAMA_DEFAULT_HOST},
}


ENV_FIELD_MAP = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
    "host": "HOST",
    "max_tokens": "MAX_TOKENS",
}


_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Load KEY=VALUE lines from ``DOTENV_FILE`` (default ``.env``) once.

    Existing environment variables win unless they hold a placeholder value.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        return
    with open(path, "r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip()
            v = v.strip().strip('"').strip("'")
            if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                os.environ[k] = v


def load_external_config() -> Dict[str, Any]:
    """Return the parsed AICHAT_CONFIG_FILE contents (cached), or ``{}``.

    Raises ``ValueError`` when the file exists but is neither JSON nor YAML
    mapping; a broken config file is a startup defect, not something to mask.
    """
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("AICHAT_CONFIG_FILE")
    if not path or not Path(path).exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Config file '{path}' is neither valid JSON nor YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Config file '{path}' must contain a mapping at top level")
    _FILE_CACHE = data
    return data


def reset_config_cache() -> None:
    """Forget cached file contents and the .env marker (tests, reloads)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def _env_overrides(family: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = family.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None:
            out[field] = val
    return out


def get_provider_config(family: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for an adapter family.

    Merge order (later wins): defaults -> external config -> env vars ->
    overrides. ``api_key`` additionally falls back to the canonical/alias env
    names from ``config.env`` when still unset; placeholder keys are dropped.
    """
    _load_dotenv_once()
    name = (family or "").lower().strip()
    cfg: Dict[str, Any] = {}

    cfg |= DEFAULTS.get(name, {})

    file_cfg = load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if not cfg.get("api_key") or is_placeholder(cfg.get("api_key")):
        cfg.pop("api_key", None)
        key, _ = resolve_provider_key(name)
        if key:
            cfg["api_key"] = key

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


from .routing import RoutingConfig, get_routing_config, parse_routes  # noqa: E402

__all__ = [
    "get_provider_config",
    "load_external_config",
    "reset_config_cache",
    "DEFAULTS",
    "RoutingConfig",
    "get_routing_config",
    "parse_routes",
]
