"""
Prompt Options

Configuration bundle selecting the memory strategy for prompt composition.
Immutable once constructed; replace the whole object to change behaviour.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Tag names are interpolated into the reasoning-block pattern
REASONING_TAG_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_.:-]*$")


class PromptOptions(BaseModel):
    """
    Memory and parsing options for a chat session.
    
    Exactly one history rendering path applies per composition:
    plain full history when use_memory is set and no modifier
    (truncation, summarization, RAG) is active, the options-aware
    path otherwise.
    """
    model_config = ConfigDict(frozen=True)

    reasoning_tag: str = Field(default="think", description="Tag name delimiting the reasoning block")
    summarize_max_word_count: int = Field(default=50, ge=1, description="Word budget before a history entry is summarized")
    truncation_max_previous_prompts: int = Field(default=5, ge=0, description="History entries kept when truncating")
    use_memory: bool = Field(default=True, description="Include conversation history in prompts")
    use_truncation: bool = False
    use_summarization: bool = False
    use_rag: bool = Field(default=False, description="Reserved for retrieval augmentation; no effect yet")

    @field_validator("reasoning_tag")
    @classmethod
    def _validate_reasoning_tag(cls, value: str) -> str:
        if not REASONING_TAG_PATTERN.match(value):
            raise ValueError(
                f"reasoning_tag {value!r} is not a plain tag name "
                "(letters, digits, '_', '-', '.', ':'; must not start with a digit)"
            )
        return value

    @property
    def uses_plain_history(self) -> bool:
        """True when full history is rendered with no modifier."""
        return not (self.use_truncation or self.use_summarization or self.use_rag)
