from datetime import datetime, timezone
from typing import List
from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PromptRequest(BaseModel):
    """
    A user prompt for one turn, stamped when it was created.
    """
    model_config = ConfigDict(frozen=True)

    prompt: str
    request_timestamp_utc: datetime = Field(default_factory=utc_now)


# --- API Contracts ---

class SubmitPromptRequest(BaseModel):
    """API request for a chat turn."""
    prompt: str = Field(..., description="User's prompt")


class HistoryItemPayload(BaseModel):
    """One prompt/response pair as sent over the API."""
    prompt: str
    response: str


class ImportHistoryRequest(BaseModel):
    """API request seeding a session's memory."""
    items: List[HistoryItemPayload] = Field(default_factory=list)


class SystemPromptRequest(BaseModel):
    """API request replacing a session's instructions."""
    system_prompt: str = Field(..., description="Instructions prepended to every prompt")
