from fastapi.testclient import TestClient

from conftest import FakeResponse

from relay_core.api.server import app
from relay_core.domain.exceptions import UpstreamNotFoundError

client = TestClient(app)


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_chat_passes_fields_to_service(monkeypatch):
    captured = {}

    def fake_run_chat(**kwargs):
        captured.update(kwargs)
        return {"reply": "hi there", "success": True}

    monkeypatch.setattr("relay_core.api.server.run_chat", fake_run_chat)
    resp = client.post(
        "/chat",
        json={
            "messages": [{"role": "user", "content": "hi"}],
            "provider": "ragflow",
            "ragflowApiKey": "rk",
            "ragflowBaseUrl": "http://rag.local",
        },
    )

    assert resp.status_code == 200
    assert resp.json() == {"reply": "hi there", "success": True}
    assert captured["provider"] == "ragflow"
    assert captured["ragflow_api_key"] == "rk"
    assert captured["ragflow_base_url"] == "http://rag.local"
    assert captured["messages"] == [{"role": "user", "content": "hi"}]


def test_chat_business_error_payload(monkeypatch):
    def fake_run_chat(**kwargs):
        raise UpstreamNotFoundError("http://rag.local/api/v1/chat/completions")

    monkeypatch.setattr("relay_core.api.server.run_chat", fake_run_chat)
    resp = client.post("/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert resp.status_code == 502
    body = resp.json()
    assert body["success"] is False
    assert "Base URL" in body["error"]


def test_chat_missing_api_key_is_400(fake_http):
    resp = client.post("/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert resp.status_code == 400
    assert resp.json() == {"error": "API Key 未提供", "success": False}
    assert fake_http.clients_opened == 0


def test_invalid_body_is_400():
    resp = client.post("/chat", json={"messages": [{"content": "no role"}]})

    assert resp.status_code == 400
    assert resp.json()["success"] is False


def test_summarise_end_to_end(fake_http):
    fake_http.add(
        "POST",
        "https://api.siliconflow.cn/v1/chat/completions",
        FakeResponse(json_body={"choices": [{"message": {"content": " 摘要 "}}]}),
    )

    resp = client.post("/summarise", json={"content": "hello", "url": "https://e.co", "apiKey": "sk-1"})

    assert resp.status_code == 200
    assert resp.json() == {"summary": "摘要", "success": True}


def test_cors_preflight():
    resp = client.options(
        "/chat",
        headers={"Origin": "http://192.168.1.8:8081", "Access-Control-Request-Method": "POST"},
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"


def test_cors_allows_only_post_and_options():
    resp = client.options(
        "/summarise",
        headers={"Origin": "http://192.168.1.8:8081", "Access-Control-Request-Method": "POST"},
    )
    methods = {m.strip() for m in resp.headers["access-control-allow-methods"].split(",")}
    assert methods == {"POST", "OPTIONS"}


def test_non_post_request_is_405_error_payload():
    resp = client.get("/chat")

    assert resp.status_code == 405
    assert resp.json() == {"error": "仅支持 POST 请求", "success": False}
    assert "POST" in resp.headers["allow"]


def test_unknown_path_uses_error_payload():
    resp = client.get("/nope")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found", "success": False}


def test_chat_forwards_extra_message_fields(fake_http):
    url = "https://api.siliconflow.cn/v1/chat/completions"
    fake_http.add("POST", url, FakeResponse(json_body={"choices": [{"message": {"content": "ok"}}]}))

    resp = client.post(
        "/chat",
        json={"messages": [{"role": "user", "content": "hi", "name": "alice"}], "apiKey": "sk-1"},
    )

    assert resp.status_code == 200
    assert fake_http.calls[0]["json"]["messages"] == [{"role": "user", "content": "hi", "name": "alice"}]
