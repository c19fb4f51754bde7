"""
Token Usage

Running token accounting for a chat session.

DESIGN RULES:
- Counters only grow
- Mutated only through add()
- Callers receive copies, never the live accumulator
"""

from typing import Optional
from pydantic import BaseModel, Field


class TokenUsage(BaseModel):
    """
    Input/output/total token counters aggregated across turns.
    """
    input_tokens: int = Field(default=0, ge=0, description="Prompt tokens consumed")
    output_tokens: int = Field(default=0, ge=0, description="Completion tokens produced")
    total_tokens: int = Field(default=0, ge=0, description="Total tokens as reported by the backend")

    def add(
        self,
        input_tokens: Optional[int] = None,
        output_tokens: Optional[int] = None,
        total_tokens: Optional[int] = None,
    ) -> None:
        """Add one call's reported usage. Missing counts contribute 0."""
        self.input_tokens += max(input_tokens or 0, 0)
        self.output_tokens += max(output_tokens or 0, 0)
        self.total_tokens += max(total_tokens or 0, 0)

    def merge(self, other: "TokenUsage") -> None:
        """Fold another accumulator into this one."""
        self.add(other.input_tokens, other.output_tokens, other.total_tokens)

    def snapshot(self) -> "TokenUsage":
        """Point-in-time copy."""
        return self.model_copy()
