from datetime import datetime, timedelta

import pytest

from app.core.config import Settings
from llm.errors import ConfigurationError
from llm.factory import create_backend
from memory.session_store import SessionStore, default_prompt_options
from prompting.templates import default_system_prompt


@pytest.fixture
def store(make_backend):
    created = []

    def factory():
        backend = make_backend(["ok"] * 10)
        created.append(backend)
        return backend

    store = SessionStore(backend_factory=factory, cfg=Settings(use_truncation=True, truncation_max_previous_prompts=3))
    store.created_backends = created
    return store


def test_get_session_creates_once(store):
    first = store.get_session("abc")
    again = store.get_session("abc")

    assert first is again
    assert first.session_id == "abc"
    assert store.session_count() == 1


def test_sessions_share_backend_not_memory(store):
    a = store.get_session("a")
    b = store.get_session("b")

    assert len(store.created_backends) == 1
    assert store.session_count() == 2


@pytest.mark.asyncio
async def test_session_memory_is_isolated(store):
    await store.get_session("a").submit_prompt("only in a")

    assert len(store.get_session("a").get_prompt_history()) == 1
    assert store.get_session("b").get_prompt_history() == ()


def test_new_sessions_use_configured_defaults(store):
    session = store.get_session("abc")

    assert session.prompt_options.use_truncation is True
    assert session.prompt_options.truncation_max_previous_prompts == 3
    assert session.system_prompt == default_system_prompt()


def test_default_prompt_options_from_settings():
    options = default_prompt_options(Settings(reasoning_tag="reasoning", use_memory=False))

    assert options.reasoning_tag == "reasoning"
    assert options.use_memory is False


@pytest.mark.asyncio
async def test_end_session_discards_memory(store):
    await store.get_session("abc").submit_prompt("Hi")

    assert store.end_session("abc") is True
    assert store.end_session("abc") is False
    assert store.get_session("abc").get_prompt_history() == ()


def test_inactive_sessions_expire(store):
    store.get_session("stale")
    store._last_access["stale"] = datetime.now() - timedelta(hours=1)

    assert store.session_count() == 0


def test_unknown_provider_fails_session_creation():
    store = SessionStore(backend_factory=lambda: create_backend(Settings(llm_provider="nope")))

    with pytest.raises(ConfigurationError):
        store.get_session("abc")
