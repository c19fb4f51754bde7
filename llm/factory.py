"""
Backend Factory

Resolves the configured provider to a CompletionBackend, once,
at session construction. Selection is a plain mapping from
LLMProvider to constructor.
"""

import logging
from enum import Enum
from typing import Callable, Dict

from app.core.config import Settings, settings as default_settings
from llm.azure_openai import AzureOpenAIBackend
from llm.base import CompletionBackend
from llm.errors import ConfigurationError
from llm.langchain_adapter import LangChainBackend, build_azure_chat_model
from llm.openai_client import OpenAIBackend


logger = logging.getLogger(__name__)


class LLMProvider(str, Enum):
    OPENAI = "openai"
    AZURE_OPENAI = "azure_openai"
    OLLAMA = "ollama"
    LANGCHAIN_AZURE = "langchain_azure"


def _openai(cfg: Settings) -> CompletionBackend:
    return OpenAIBackend(
        model=cfg.model_id,
        api_key=cfg.openai_api_key,
        base_url=cfg.openai_base_url,
        timeout=cfg.request_timeout_seconds,
    )


def _ollama(cfg: Settings) -> CompletionBackend:
    # Ollama ignores the key but the SDK requires one
    return OpenAIBackend(
        model=cfg.model_id,
        api_key="ollama",
        base_url=cfg.ollama_base_url,
        timeout=cfg.request_timeout_seconds,
    )


def _azure_openai(cfg: Settings) -> CompletionBackend:
    return AzureOpenAIBackend(
        deployment=cfg.azure_openai_deployment_name,
        endpoint=cfg.azure_openai_endpoint,
        api_key=cfg.azure_openai_api_key,
        api_version=cfg.azure_openai_api_version,
        timeout=cfg.request_timeout_seconds,
    )


def _langchain_azure(cfg: Settings) -> CompletionBackend:
    llm = build_azure_chat_model(
        deployment=cfg.azure_openai_deployment_name,
        endpoint=cfg.azure_openai_endpoint,
        api_key=cfg.azure_openai_api_key,
        api_version=cfg.azure_openai_api_version,
        timeout=cfg.request_timeout_seconds,
    )
    return LangChainBackend(llm, model=cfg.azure_openai_deployment_name)


BACKEND_CONSTRUCTORS: Dict[LLMProvider, Callable[[Settings], CompletionBackend]] = {
    LLMProvider.OPENAI: _openai,
    LLMProvider.AZURE_OPENAI: _azure_openai,
    LLMProvider.OLLAMA: _ollama,
    LLMProvider.LANGCHAIN_AZURE: _langchain_azure,
}


def create_backend(cfg: Settings | None = None) -> CompletionBackend:
    """
    Build the completion backend named by cfg.llm_provider.
    
    Raises:
        ConfigurationError: if the provider is unknown
    """
    cfg = cfg or default_settings
    try:
        provider = LLMProvider(cfg.llm_provider.lower())
    except ValueError:
        supported = ", ".join(p.value for p in LLMProvider)
        raise ConfigurationError(
            f"Unsupported llm_provider {cfg.llm_provider!r} (expected one of: {supported})"
        ) from None

    logger.info(f"Creating completion backend: provider={provider.value}")
    return BACKEND_CONSTRUCTORS[provider](cfg)
