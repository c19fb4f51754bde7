"""
Azure OpenAI Client Wrapper

Backend for an Azure OpenAI deployment.
Credentials come from Settings (GENAI_CHAT_AZURE_OPENAI_* or .env).

DESIGN RULES:
- No retries or error handling frameworks
- No streaming
- No prompt logging
- No Key Vault integration
"""

from openai import AsyncAzureOpenAI

from llm.base import CompletionBackend, CompletionResult
from llm.openai_client import create_chat_completion


class AzureOpenAIBackend(CompletionBackend):
    """
    Completion backend over openai.AsyncAzureOpenAI.
    
    The deployment name is used as the model identifier.
    """

    name = "azure_openai"

    def __init__(
        self,
        deployment: str,
        endpoint: str,
        api_key: str,
        api_version: str = "2024-02-15-preview",
        timeout: float | None = None,
        client: AsyncAzureOpenAI | None = None,
    ):
        self.model = deployment
        self._client = client or AsyncAzureOpenAI(
            api_key=api_key,
            api_version=api_version,
            azure_endpoint=endpoint,
            timeout=timeout,
        )

    async def complete(self, text: str) -> CompletionResult:
        return await create_chat_completion(self._client, self.model, text, self.name)
