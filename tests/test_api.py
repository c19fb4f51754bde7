import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.dependencies import get_session_store
from app.main import app
from llm.errors import BackendError
from memory.session_store import SessionStore


@pytest.fixture
def backend(make_backend, make_completion):
    return make_backend([
        make_completion("<think>name?</think>Hello, fellow human being", 10, 5, 15),
        BackendError("upstream unavailable"),
    ])


@pytest.fixture
def client(backend):
    store = SessionStore(backend_factory=lambda: backend, cfg=Settings())
    app.dependency_overrides[get_session_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "genai-chat-orchestrator"}


def test_chat_turn_flow(client, backend):
    client.put("/v1/sessions/s1/system-prompt", json={"system_prompt": "Greet people."})

    response = client.post("/v1/sessions/s1/prompts", json={"prompt": "Hi"})

    assert response.status_code == 200
    data = response.json()
    assert data["prompt"] == "Hi"
    assert data["reasoning"] == "name?"
    assert data["response"] == "Hello, fellow human being"
    assert data["token_usage"] == {"input_tokens": 10, "output_tokens": 5, "total_tokens": 15}
    assert backend.calls == ["[Instructions] \nGreet people.\nUser: Hi"]

    history = client.get("/v1/sessions/s1/history").json()
    assert history["items"] == [{"prompt": "Hi", "response": "Hello, fellow human being"}]

    usage = client.get("/v1/sessions/s1/usage").json()
    assert usage["total_tokens"] == 15


def test_failed_turn_returns_502_and_keeps_state(client):
    client.post("/v1/sessions/s1/prompts", json={"prompt": "Hi"})

    response = client.post("/v1/sessions/s1/prompts", json={"prompt": "Again"})

    assert response.status_code == 502
    assert response.json()["detail"]["kind"] == "backend_failure"
    assert len(client.get("/v1/sessions/s1/history").json()["items"]) == 1
    assert client.get("/v1/sessions/s1/usage").json()["total_tokens"] == 15


def test_import_history_appends(client):
    response = client.post(
        "/v1/sessions/s2/history",
        json={"items": [{"prompt": "a", "response": "b"}, {"prompt": "c", "response": "d"}]},
    )

    assert response.status_code == 200
    assert response.json() == {"session_id": "s2", "imported": 2, "history_length": 2}


def test_set_options_validates_reasoning_tag(client):
    ok = client.put("/v1/sessions/s3/options", json={"use_truncation": True, "truncation_max_previous_prompts": 2})
    bad = client.put("/v1/sessions/s3/options", json={"reasoning_tag": "(.*)"})

    assert ok.status_code == 200
    assert ok.json()["use_truncation"] is True
    assert bad.status_code == 422


def test_end_session(client):
    client.get("/v1/sessions/s4/usage")

    assert client.delete("/v1/sessions/s4").status_code == 200
    assert client.delete("/v1/sessions/s4").status_code == 404
