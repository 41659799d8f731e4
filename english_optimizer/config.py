"""Configuration loading for english_optimizer.

Config precedence (lowest to highest):
1. Built-in defaults (in code)
2. ~/.english-optimizer/config.toml (user global)
3. ./.english-optimizer.toml (directory local)
4. Explicit --config path
5. Environment variables
6. CLI flags (applied by the caller)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import logging
import os
from pathlib import Path
import tomllib
from typing import Any, Literal

from english_optimizer.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path("~/.english-optimizer")

VENDORS = ("openai", "glm", "custom")


@dataclass(frozen=True)
class LocalProviderConfig:
    """Local inference server (Ollama)."""

    base_url: str
    model: str
    kind: Literal["local"] = "local"


@dataclass(frozen=True)
class CloudProviderConfig:
    """OpenAI-style chat-completion API."""

    api_key: str
    base_url: str
    model: str
    vendor: str = "openai"
    kind: Literal["cloud"] = "cloud"


ProviderConfig = LocalProviderConfig | CloudProviderConfig


@dataclass
class OllamaConfig:
    base_url: str = "http://localhost:11434"
    model: str = "llama3.2:3b"


@dataclass
class ApiConfig:
    provider: str = "openai"
    api_key: str = ""
    api_key_env: str = ""
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-3.5-turbo"


@dataclass
class AIConfig:
    provider: str = "ollama"  # "ollama" | "api"
    ollama: OllamaConfig = field(default_factory=OllamaConfig)
    api: ApiConfig = field(default_factory=ApiConfig)


def _default_hotkeys() -> dict[str, str]:
    return {
        "professional": "p",
        "concise": "c",
        "grammar": "g",
        "senior_developer": "d",
        "reset": "r",
        "history": "h",
        "quit": "q",
    }


@dataclass
class FeaturesConfig:
    enable_history: bool = True
    history_path: str = str(CONFIG_DIR / "history.json")
    history_limit: int = 100
    enable_custom_prompts: bool = True
    custom_prompts_path: str = str(CONFIG_DIR / "prompts.json")
    structured_prompt_path: str = "prompt.yaml"
    translation_prompt_path: str = str(CONFIG_DIR / "translation-prompt.txt")


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    file: str = ""


@dataclass
class Config:
    """Root configuration."""

    ai: AIConfig = field(default_factory=AIConfig)
    hotkeys: dict[str, str] = field(default_factory=_default_hotkeys)
    features: FeaturesConfig = field(default_factory=FeaturesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: str | None = None) -> Config:
        """Load configuration with precedence."""
        config = cls()

        config_files = [
            CONFIG_DIR.expanduser() / "config.toml",
            Path.cwd() / ".english-optimizer.toml",
        ]
        if config_path:
            config_files.append(Path(config_path).expanduser())

        for path in config_files:
            if path.exists():
                config = _merge_config(config, _load_toml(path))

        return _apply_env_overrides(config)

    def provider_config(self) -> ProviderConfig:
        """Resolve the immutable provider selection."""
        if self.ai.provider == "ollama":
            return LocalProviderConfig(
                base_url=self.ai.ollama.base_url.rstrip("/"),
                model=self.ai.ollama.model,
            )
        if self.ai.provider == "api":
            api = self.ai.api
            if api.provider not in VENDORS:
                raise ConfigurationError(
                    f"Unknown API vendor: {api.provider} (expected one of {', '.join(VENDORS)})"
                )
            api_key = api.api_key
            if not api_key and api.api_key_env:
                api_key = os.environ.get(api.api_key_env, "")
            return CloudProviderConfig(
                api_key=api_key,
                base_url=api.base_url.rstrip("/"),
                model=api.model,
                vendor=api.provider,
            )
        raise ConfigurationError(f"Unknown provider: {self.ai.provider}")

    def to_dict(self, mask_secrets: bool = True) -> dict[str, Any]:
        data = asdict(self)
        key = data["ai"]["api"]["api_key"]
        if mask_secrets and key:
            data["ai"]["api"]["api_key"] = key[:8] + "..."
        return data


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Skipping config file %s: %s", path, e)
        return {}


def _merge_section(target: Any, data: Any) -> None:
    if not isinstance(data, dict):
        return
    for key, value in data.items():
        if hasattr(target, key):
            setattr(target, key, value)


def _merge_config(config: Config, data: dict[str, Any]) -> Config:
    """Merge TOML data into config."""

    if "ai" in data:
        ai_data = data["ai"]
        if "provider" in ai_data:
            config.ai.provider = ai_data["provider"]
        _merge_section(config.ai.ollama, ai_data.get("ollama"))
        _merge_section(config.ai.api, ai_data.get("api"))

    if isinstance(data.get("hotkeys"), dict):
        config.hotkeys.update({k: str(v) for k, v in data["hotkeys"].items()})

    _merge_section(config.features, data.get("features"))
    _merge_section(config.logging, data.get("logging"))

    return config


def _parse_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides."""

    env_map = {
        "AI_PROVIDER": (config.ai, "provider"),
        "OLLAMA_BASE_URL": (config.ai.ollama, "base_url"),
        "OLLAMA_MODEL": (config.ai.ollama, "model"),
        "API_PROVIDER": (config.ai.api, "provider"),
        "API_KEY": (config.ai.api, "api_key"),
        "API_BASE_URL": (config.ai.api, "base_url"),
        "API_MODEL": (config.ai.api, "model"),
        "ENABLE_HISTORY": (config.features, "enable_history", _parse_bool),
        "ENABLE_CUSTOM_PROMPTS": (config.features, "enable_custom_prompts", _parse_bool),
        "ENGLISH_OPTIMIZER_LOG_LEVEL": (config.logging, "level"),
    }

    for env_var, spec in env_map.items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        target, key = spec[0], spec[1]
        converter = spec[2] if len(spec) > 2 else str
        try:
            setattr(target, key, converter(value))
        except (ValueError, TypeError):
            logger.warning("Ignoring invalid value for %s", env_var)

    return config


def load_config(config_path: str | None = None) -> Config:
    """Load configuration."""
    return Config.load(config_path)
