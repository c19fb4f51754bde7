import asyncio

import pytest

from llm.base import CompletionBackend, CompletionResult, CompletionUsage
from llm.errors import BackendError
from orchestration.session import ChatSession


def completion(text: str, input_tokens=None, output_tokens=None, total_tokens=None) -> CompletionResult:
    """CompletionResult with optional usage (None when no counts given)."""
    usage = None
    if input_tokens is not None or output_tokens is not None or total_tokens is not None:
        usage = CompletionUsage(
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            total_tokens=total_tokens,
        )
    return CompletionResult(text=text, usage=usage)


class FakeBackend(CompletionBackend):
    """
    Scripted backend: replies are consumed in order.
    
    A reply may be a str, a CompletionResult or an exception to raise.
    Every composed text is recorded in calls.
    """

    name = "fake"

    def __init__(self, replies=(), delay: float = 0.0):
        self.replies = list(replies)
        self.calls = []
        self.delay = delay

    async def complete(self, text: str) -> CompletionResult:
        self.calls.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)
        if not self.replies:
            raise BackendError("no scripted reply left")
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, str):
            return CompletionResult(text=reply)
        return reply


@pytest.fixture
def make_backend():
    return FakeBackend


@pytest.fixture
def make_completion():
    return completion


@pytest.fixture
def make_session():
    def _make(replies=(), **kwargs):
        backend = FakeBackend(replies, delay=kwargs.pop("delay", 0.0))
        return ChatSession(backend, session_id="test-session", **kwargs), backend
    return _make
