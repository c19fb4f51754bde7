"""
LangChain Adapter

Completion backend over any LangChain chat model.
Exposes CompletionResult only - NO LangChain objects leak out.

DESIGN RULES (LOCK THIS IN):
- LangChain stays INSIDE this module
- Returns CompletionResult only - no LangChain types
- Default model is AzureChatOpenAI built from Settings

BOUNDARY:
    API ❌
    ChatSession ❌
    Composer / Parser / Summarizer ❌
    Backends ✅  ← ONLY HERE
"""

import time
from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage
from langchain_openai import AzureChatOpenAI

from llm.base import CompletionBackend, CompletionResult, CompletionUsage
from llm.errors import BackendError, MalformedCompletionError


def build_azure_chat_model(
    deployment: str,
    endpoint: str,
    api_key: str,
    api_version: str,
    timeout: Optional[float] = None,
) -> AzureChatOpenAI:
    """Get configured AzureChatOpenAI instance."""
    return AzureChatOpenAI(
        azure_deployment=deployment,
        openai_api_version=api_version,
        azure_endpoint=endpoint,
        api_key=api_key,
        temperature=0.7,
        timeout=timeout,
    )


class LangChainBackend(CompletionBackend):
    """
    Completion backend that delegates to a LangChain chat model.
    
    Token usage is read from AIMessage.usage_metadata when the
    model reports it.
    """

    name = "langchain"

    def __init__(self, llm: BaseChatModel, model: Optional[str] = None):
        self._llm = llm
        self.model = model

    async def complete(self, text: str) -> CompletionResult:
        start_time = time.time()

        try:
            response = await self._llm.ainvoke([HumanMessage(content=text)])
        except Exception as exc:
            raise BackendError(f"langchain completion failed: {exc}") from exc

        latency_ms = int((time.time() - start_time) * 1000)

        # Extract content as plain string
        content = response.content if hasattr(response, "content") else None
        if not isinstance(content, str):
            raise MalformedCompletionError(
                f"langchain model returned non-text content: {type(content).__name__}"
            )

        usage = None
        usage_metadata = getattr(response, "usage_metadata", None)
        if usage_metadata:
            usage = CompletionUsage(
                input_tokens=usage_metadata.get("input_tokens"),
                output_tokens=usage_metadata.get("output_tokens"),
                total_tokens=usage_metadata.get("total_tokens"),
            )

        return CompletionResult(
            text=content,
            usage=usage,
            model=self.model,
            latency_ms=latency_ms,
        )
