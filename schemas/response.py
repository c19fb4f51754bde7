from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from schemas.usage import TokenUsage


class PromptResponse(BaseModel):
    """
    Snapshot record of one completed turn.
    
    reasoning is set only when the model output contained a
    matching reasoning block. token_usage covers the primary
    completion call of this turn only.
    """
    prompt: str = Field(..., description="The user's original prompt")
    reasoning: Optional[str] = Field(default=None, description="Extracted reasoning block, if any")
    response: str = Field(..., description="Answer text with the reasoning block removed")
    request_timestamp_utc: datetime
    response_timestamp_utc: datetime
    token_usage: TokenUsage = Field(default_factory=TokenUsage)


# --- API Contracts ---

class HistoryResponse(BaseModel):
    """API response listing a session's memory in conversation order."""
    session_id: str
    items: List[dict] = Field(default_factory=list)


class ImportHistoryResponse(BaseModel):
    """API response after seeding memory."""
    session_id: str
    imported: int
    history_length: int
