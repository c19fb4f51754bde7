"""
Chat API Routes

Thin delegation layer over ChatSession.
Contains NO prompt composition, parsing or memory logic.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_session_store
from llm.errors import ConfigurationError
from memory.session_store import SessionStore
from memory.types import HistoryItem
from orchestration.session import ChatSession
from schemas.options import PromptOptions
from schemas.request import ImportHistoryRequest, SubmitPromptRequest, SystemPromptRequest
from schemas.response import HistoryResponse, ImportHistoryResponse, PromptResponse
from schemas.usage import TokenUsage


logger = logging.getLogger(__name__)

router = APIRouter()


def _session(session_id: str, store: SessionStore) -> ChatSession:
    try:
        return store.get_session(session_id)
    except ConfigurationError as e:
        logger.error(f"Cannot create session {session_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/sessions/{session_id}/prompts", response_model=PromptResponse)
async def submit_prompt(
    session_id: str,
    request: SubmitPromptRequest,
    store: SessionStore = Depends(get_session_store),
) -> PromptResponse:
    """
    Run one chat turn.
    
    A failed turn returns 502 with the error kind; the session's
    history and usage are unchanged.
    """
    result = await _session(session_id, store).submit_prompt(request.prompt)
    if not result.succeeded:
        raise HTTPException(status_code=502, detail=result.error.model_dump(mode="json"))
    return result.response


@router.get("/sessions/{session_id}/usage", response_model=TokenUsage)
async def get_usage(session_id: str, store: SessionStore = Depends(get_session_store)) -> TokenUsage:
    return _session(session_id, store).get_token_usage()


@router.get("/sessions/{session_id}/history", response_model=HistoryResponse)
async def get_history(session_id: str, store: SessionStore = Depends(get_session_store)) -> HistoryResponse:
    items: List[dict] = [item.to_dict() for item in _session(session_id, store).get_prompt_history()]
    return HistoryResponse(session_id=session_id, items=items)


@router.post("/sessions/{session_id}/history", response_model=ImportHistoryResponse)
async def import_history(
    session_id: str,
    request: ImportHistoryRequest,
    store: SessionStore = Depends(get_session_store),
) -> ImportHistoryResponse:
    session = _session(session_id, store)
    imported = await session.import_prompt_history(
        HistoryItem(prompt=item.prompt, response=item.response) for item in request.items
    )
    return ImportHistoryResponse(
        session_id=session_id,
        imported=imported,
        history_length=len(session.get_prompt_history()),
    )


@router.put("/sessions/{session_id}/options", response_model=PromptOptions)
async def set_options(
    session_id: str,
    options: PromptOptions,
    store: SessionStore = Depends(get_session_store),
) -> PromptOptions:
    session = _session(session_id, store)
    session.set_prompt_options(options)
    return session.prompt_options


@router.put("/sessions/{session_id}/system-prompt")
async def set_system_prompt(
    session_id: str,
    request: SystemPromptRequest,
    store: SessionStore = Depends(get_session_store),
) -> dict:
    _session(session_id, store).set_system_prompt(request.system_prompt)
    return {"session_id": session_id, "system_prompt": request.system_prompt}


@router.delete("/sessions/{session_id}")
async def end_session(session_id: str, store: SessionStore = Depends(get_session_store)) -> dict:
    if not store.end_session(session_id):
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return {"session_id": session_id, "ended": True}
