# src/llm/client_factory.py — v3
"""Factory: instantiate the LLM client from settings."""

from __future__ import annotations

import importlib
import logging

from scripturai.config.settings import Settings
from scripturai.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

# Registry of provider name → adapter class path (lazy import).
_PROVIDER_REGISTRY: dict[str, str] = {
    "openai": "scripturai.llm.adapters.openai_adapter.OpenAIAdapter",
    "azure": "scripturai.llm.adapters.openai_adapter.OpenAIAdapter",
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def create_llm_client(settings: Settings, **kwargs: object) -> BaseLLMClient:
    """Instantiate the configured chat/image adapter.

    Raises:
        UnsupportedProviderError: If the provider is not registered.
    """
    provider = settings.llm_provider
    if provider not in _PROVIDER_REGISTRY:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    adapter_cls = _import_class(_PROVIDER_REGISTRY[provider])

    init_kwargs = dict(kwargs)
    init_kwargs.setdefault("model", settings.llm_chat_model)
    init_kwargs.setdefault("image_model", settings.llm_image_model)
    init_kwargs.setdefault("image_size", settings.llm_image_size)
    init_kwargs.setdefault("api_key", settings.openai_api_key)
    if provider == "azure":
        init_kwargs.setdefault("azure_endpoint", settings.azure_openai_endpoint)
        init_kwargs.setdefault("api_version", settings.azure_openai_api_version)

    logger.debug("Creating LLM client: provider=%s, model=%s", provider, init_kwargs["model"])
    return adapter_cls(**init_kwargs)


def register_provider(name: str, class_path: str) -> None:
    """Register a custom provider adapter."""
    _PROVIDER_REGISTRY[name] = class_path
    logger.info("Registered LLM provider: %s → %s", name, class_path)


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
