"""Configuration merge order and routing configuration parsing."""
from __future__ import annotations

import json

import pytest

from aichat_providers.config import (
    RoutingConfig,
    get_provider_config,
    get_routing_config,
    load_external_config,
    parse_routes,
    reset_config_cache,
)
from aichat_providers.config.env import get_env_var_candidates, is_placeholder, resolve_provider_key


def test_defaults_without_env():
    cfg = get_provider_config("ollama")
    assert cfg["model"] == "llama3"
    assert cfg["host"] == "http://localhost:11434"
    assert "api_key" not in get_provider_config("openai")


def test_env_overrides_defaults(monkeypatch):
    monkeypatch.setenv("OLLAMA_HOST", "http://gpu-box:11434")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o")
    assert get_provider_config("ollama")["host"] == "http://gpu-box:11434"
    assert get_provider_config("openai")["model"] == "gpt-4o"


def test_explicit_overrides_win_and_none_is_ignored(monkeypatch):
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o")
    cfg = get_provider_config("openai", overrides={"model": "o3-mini", "base_url": None})
    assert cfg["model"] == "o3-mini"
    assert "base_url" not in cfg


def test_config_file_json_then_env(monkeypatch, tmp_path):
    path = tmp_path / "aichat.json"
    path.write_text(json.dumps({"ollama": {"model": "mistral", "host": "http://file-host:1"}}), encoding="utf-8")
    monkeypatch.setenv("AICHAT_CONFIG_FILE", str(path))
    monkeypatch.setenv("OLLAMA_HOST", "http://env-host:2")
    reset_config_cache()

    cfg = get_provider_config("ollama")
    assert cfg["model"] == "mistral"
    assert cfg["host"] == "http://env-host:2"


def test_config_file_yaml(monkeypatch, tmp_path):
    path = tmp_path / "aichat.yaml"
    path.write_text(
        "routing:\n"
        "  default_provider: openai\n"
        "  fallback_provider: anthropic\n"
        "  providers:\n"
        "    OPENAI: openai\n"
        "    ANTHROPIC: anthropic\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("AICHAT_CONFIG_FILE", str(path))
    reset_config_cache()

    cfg = get_routing_config()
    assert cfg.default_provider == "OPENAI"
    assert cfg.fallback_provider == "ANTHROPIC"
    assert dict(cfg.routes) == {"OPENAI": "openai", "ANTHROPIC": "anthropic"}


def test_config_file_must_be_mapping(monkeypatch, tmp_path):
    path = tmp_path / "aichat.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    monkeypatch.setenv("AICHAT_CONFIG_FILE", str(path))
    reset_config_cache()
    with pytest.raises(ValueError):
        load_external_config()


def test_dotenv_loaded_without_clobbering_real_env(monkeypatch, tmp_path):
    dotenv = tmp_path / ".env"
    dotenv.write_text("OPENAI_API_KEY=sk-from-dotenv\nOLLAMA_MODEL='phi3'\n# comment\n", encoding="utf-8")
    monkeypatch.setenv("DOTENV_FILE", str(dotenv))
    monkeypatch.setenv("OPENAI_API_KEY", "changeme")
    monkeypatch.setenv("OLLAMA_MODEL", "qwen2")
    reset_config_cache()

    assert get_provider_config("openai")["api_key"] == "sk-from-dotenv"
    assert get_provider_config("ollama")["model"] == "qwen2"


def test_placeholder_keys_are_ignored(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "changeme")
    assert "api_key" not in get_provider_config("openai")
    assert is_placeholder("your-placeholder-key")
    assert not is_placeholder("sk-live-123")
    assert not is_placeholder(None)


def test_anthropic_alias_key(monkeypatch):
    monkeypatch.setenv("CLAUDE_API_KEY", "sk-ant-alias")
    assert list(get_env_var_candidates("anthropic")) == ["ANTHROPIC_API_KEY", "CLAUDE_API_KEY"]
    assert resolve_provider_key("anthropic") == ("sk-ant-alias", "CLAUDE_API_KEY")
    assert get_provider_config("anthropic")["api_key"] == "sk-ant-alias"


def test_routing_defaults():
    cfg = get_routing_config(file_cfg={})
    assert cfg.default_provider == "PRIMARY"
    assert cfg.fallback_provider == "OPENAI"
    assert dict(cfg.routes) == {"PRIMARY": "ollama", "OPENAI": "openai", "ANTHROPIC": "anthropic"}


def test_routing_env_overrides(monkeypatch):
    monkeypatch.setenv("AICHAT_DEFAULT_PROVIDER", "openai")
    monkeypatch.setenv("AICHAT_FALLBACK_PROVIDER", "local")
    monkeypatch.setenv("AICHAT_PROVIDERS", "local=Ollama, openai=openai")
    cfg = get_routing_config(file_cfg={})
    assert cfg.default_provider == "OPENAI"
    assert cfg.fallback_provider == "LOCAL"
    assert dict(cfg.routes) == {"LOCAL": "ollama", "OPENAI": "openai"}


def test_parse_routes_rejects_bad_entries():
    assert parse_routes("A=mock,,B=mock") == {"A": "mock", "B": "mock"}
    with pytest.raises(ValueError):
        parse_routes("PRIMARY")
    with pytest.raises(ValueError):
        parse_routes("=ollama")
    with pytest.raises(ValueError):
        parse_routes("primary=ollama,PRIMARY=openai")


def test_routing_config_rejects_case_duplicates():
    with pytest.raises(ValueError):
        RoutingConfig(routes={"openai": "openai", "OPENAI": "openai"})
