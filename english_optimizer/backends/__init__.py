"""Text-generation backends."""

from english_optimizer.backends.base import Provider, clean_response
from english_optimizer.backends.ollama import OllamaProvider
from english_optimizer.backends.openai_compat import OpenAICompatProvider
from english_optimizer.config import CloudProviderConfig, LocalProviderConfig, ProviderConfig
from english_optimizer.errors import ConfigurationError


def create_provider(config: ProviderConfig) -> Provider:
    """Build the provider variant selected by ``config``."""
    if isinstance(config, LocalProviderConfig):
        return OllamaProvider(base_url=config.base_url, model=config.model)
    if isinstance(config, CloudProviderConfig):
        return OpenAICompatProvider(
            api_key=config.api_key,
            base_url=config.base_url,
            model=config.model,
            vendor=config.vendor,
        )
    raise ConfigurationError(f"Unsupported provider config: {config!r}")


__all__ = [
    "OllamaProvider",
    "OpenAICompatProvider",
    "Provider",
    "clean_response",
    "create_provider",
]
