"""
Completion Backend

The single capability the chat core needs from an LLM provider:
send one composed text, get text (and optional usage) back.

DESIGN RULES:
- Provider SDK types stay inside the concrete backend modules
- Returns CompletionResult only
- Failures raise BackendError subclasses
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, Field


class CompletionUsage(BaseModel):
    """Token usage reported for a single completion. Any field may be missing."""
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


class CompletionResult(BaseModel):
    """Raw completion text plus whatever usage the provider reported."""
    text: str
    usage: Optional[CompletionUsage] = None
    model: Optional[str] = None
    latency_ms: int = Field(default=0, ge=0)


class CompletionBackend(ABC):
    """
    Pluggable completion provider.
    
    One variant per provider; chosen once at session construction
    by llm.factory.create_backend.
    """

    name: str = "base"

    @abstractmethod
    async def complete(self, text: str) -> CompletionResult:
        """
        Send a composed prompt and return the raw completion.
        
        Args:
            text: Full prompt text (instructions + memory + user line)
            
        Returns:
            CompletionResult with text and optional usage
            
        Raises:
            BackendError: on transport, API or content failure
        """
        pass
