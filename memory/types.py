"""
Memory Types

Data structures for conversation memory.

DESIGN RULES:
- Immutable data
- No business logic
- Session-scoped only
"""

from dataclasses import dataclass


USER_PREFIX = "User: "
ASSISTANT_PREFIX = "Assistant: "


@dataclass(frozen=True)
class HistoryItem:
    """
    A single remembered exchange.
    
    Represents one user prompt and the assistant response stored
    for it (possibly summarized).
    """
    prompt: str
    response: str

    def to_prompt_format(self) -> str:
        """Format for prompt injection."""
        return f"{USER_PREFIX}{self.prompt}\n{ASSISTANT_PREFIX}{self.response}\n"

    def to_dict(self) -> dict:
        return {"prompt": self.prompt, "response": self.response}
