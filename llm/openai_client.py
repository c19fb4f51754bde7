"""
OpenAI Client Wrapper

Backend for the OpenAI chat completions API and for any server that
speaks it (Ollama's /v1 endpoint, vLLM, LM Studio).

DESIGN RULES:
- No retries (the SDK's own max_retries applies)
- No streaming
- No prompt logging
"""

import logging
import time

from openai import AsyncOpenAI, OpenAIError

from llm.base import CompletionBackend, CompletionResult, CompletionUsage
from llm.errors import BackendError, MalformedCompletionError


logger = logging.getLogger(__name__)


def usage_from_openai(usage) -> CompletionUsage | None:
    """Map an SDK CompletionUsage onto ours (None when not reported)."""
    if usage is None:
        return None
    return CompletionUsage(
        input_tokens=getattr(usage, "prompt_tokens", None),
        output_tokens=getattr(usage, "completion_tokens", None),
        total_tokens=getattr(usage, "total_tokens", None),
    )


async def create_chat_completion(client, model: str, text: str, provider: str) -> CompletionResult:
    """
    Run one single-message chat completion on an OpenAI-style async client.
    
    Shared by the OpenAI and Azure OpenAI backends.
    """
    start_time = time.time()

    try:
        response = await client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": text}],
        )
    except OpenAIError as exc:
        raise BackendError(f"{provider} completion failed: {exc}") from exc

    latency_ms = int((time.time() - start_time) * 1000)

    if not response.choices or response.choices[0].message.content is None:
        raise MalformedCompletionError(f"{provider} returned no message content")

    logger.debug(f"{provider} completion: model={model} latency_ms={latency_ms}")

    return CompletionResult(
        text=response.choices[0].message.content,
        usage=usage_from_openai(response.usage),
        model=model,
        latency_ms=latency_ms,
    )


class OpenAIBackend(CompletionBackend):
    """
    Completion backend over openai.AsyncOpenAI.
    
    Pass base_url to target an OpenAI-compatible server such as Ollama.
    """

    name = "openai"

    def __init__(
        self,
        model: str,
        api_key: str,
        base_url: str | None = None,
        timeout: float | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self.model = model
        self._client = client or AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)

    async def complete(self, text: str) -> CompletionResult:
        return await create_chat_completion(self._client, self.model, text, self.name)
