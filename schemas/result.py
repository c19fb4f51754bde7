from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from schemas.response import PromptResponse


class TurnErrorKind(str, Enum):
    """Why a turn produced no response."""
    BACKEND_FAILURE = "backend_failure"
    TIMEOUT = "timeout"
    MALFORMED_RESPONSE = "malformed_response"
    SUMMARIZATION_FAILURE = "summarization_failure"
    INTERNAL_ERROR = "internal_error"


class TurnError(BaseModel):
    """Diagnostic detail for a failed turn."""
    kind: TurnErrorKind
    detail: str = ""


class TurnResult(BaseModel):
    """
    Outcome of a chat turn: either a response or an error, never both.
    
    A failed turn (response is None) is distinct from an answer
    without a reasoning block (response.reasoning is None).
    """
    response: Optional[PromptResponse] = None
    error: Optional[TurnError] = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "TurnResult":
        if (self.response is None) == (self.error is None):
            raise ValueError("TurnResult requires exactly one of response or error")
        return self

    @property
    def succeeded(self) -> bool:
        return self.response is not None

    @classmethod
    def success(cls, response: PromptResponse) -> "TurnResult":
        return cls(response=response)

    @classmethod
    def failure(cls, kind: TurnErrorKind, detail: str = "") -> "TurnResult":
        return cls(error=TurnError(kind=kind, detail=detail))
