"""Tests for layered configuration loading."""

from pathlib import Path

import pytest

from english_optimizer.config import (
    CloudProviderConfig,
    Config,
    LocalProviderConfig,
    load_config,
)
from english_optimizer.errors import ConfigurationError


def _write(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")
    return path


def test_defaults():
    config = load_config()

    assert config.ai.provider == "ollama"
    assert config.hotkeys["grammar"] == "g"
    assert config.hotkeys["quit"] == "q"
    assert config.features.history_limit == 100
    assert config.provider_config() == LocalProviderConfig(
        base_url="http://localhost:11434", model="llama3.2:3b"
    )


def test_layer_precedence(tmp_path):
    _write(
        tmp_path / "home" / ".english-optimizer" / "config.toml",
        '[ai.ollama]\nmodel = "global-model"\nbase_url = "http://global:11434"\n',
    )
    _write(tmp_path / ".english-optimizer.toml", '[ai.ollama]\nmodel = "local-model"\n')
    explicit = _write(tmp_path / "explicit.toml", "[hotkeys]\ngrammar = \"x\"\n")

    config = Config.load(str(explicit))

    assert config.ai.ollama.model == "local-model"
    assert config.ai.ollama.base_url == "http://global:11434"
    assert config.hotkeys["grammar"] == "x"
    assert config.hotkeys["concise"] == "c"


def test_env_overrides_files(tmp_path, monkeypatch):
    _write(tmp_path / ".english-optimizer.toml", '[ai]\nprovider = "ollama"\n')
    monkeypatch.setenv("AI_PROVIDER", "api")
    monkeypatch.setenv("API_PROVIDER", "glm")
    monkeypatch.setenv("API_KEY", "sk-env-key")
    monkeypatch.setenv("API_BASE_URL", "https://open.bigmodel.cn/api/paas/v4/")
    monkeypatch.setenv("ENABLE_HISTORY", "false")

    config = load_config()

    assert config.features.enable_history is False
    assert config.provider_config() == CloudProviderConfig(
        api_key="sk-env-key",
        base_url="https://open.bigmodel.cn/api/paas/v4",
        model="gpt-3.5-turbo",
        vendor="glm",
    )


def test_api_key_from_named_env_var(tmp_path, monkeypatch):
    _write(
        tmp_path / ".english-optimizer.toml",
        '[ai]\nprovider = "api"\n[ai.api]\napi_key_env = "MY_KEY"\n',
    )
    monkeypatch.setenv("MY_KEY", "sk-from-named")

    assert load_config().provider_config().api_key == "sk-from-named"


def test_unknown_provider_or_vendor():
    config = Config()
    config.ai.provider = "carrier-pigeon"
    with pytest.raises(ConfigurationError):
        config.provider_config()

    config.ai.provider = "api"
    config.ai.api.provider = "mystery"
    with pytest.raises(ConfigurationError):
        config.provider_config()


def test_invalid_toml_is_skipped(tmp_path):
    _write(tmp_path / ".english-optimizer.toml", "[ai\nprovider=")
    assert load_config().ai.provider == "ollama"


def test_unknown_keys_are_ignored(tmp_path):
    _write(tmp_path / ".english-optimizer.toml", "[features]\nno_such_flag = true\n")
    config = load_config()
    assert not hasattr(config.features, "no_such_flag")


def test_to_dict_masks_api_key():
    config = Config()
    config.ai.api.api_key = "sk-1234567890abcdef"

    assert config.to_dict()["ai"]["api"]["api_key"] == "sk-12345..."
    assert config.to_dict(mask_secrets=False)["ai"]["api"]["api_key"] == "sk-1234567890abcdef"
    assert Config().to_dict()["ai"]["api"]["api_key"] == ""
