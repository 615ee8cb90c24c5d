import json

import httpx
import pytest

_UNSET = object()


class FakeResponse:
    def __init__(self, status_code=200, json_body=_UNSET, text=None):
        self.status_code = status_code
        self._json = json_body
        if text is None:
            text = "" if json_body is _UNSET else json.dumps(json_body, ensure_ascii=False)
        self.text = text

    def json(self):
        if self._json is _UNSET:
            return json.loads(self.text)
        return self._json


class FakeTransport:
    """按 (method, url) 返回预设响应，并记录所有调用。"""

    def __init__(self):
        self.routes = {}
        self.calls = []
        self.clients_opened = 0
        self.timeouts = []

    def add(self, method, url, response):
        self.routes[(method, url)] = response

    def handle(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        result = self.routes.get((method, url), FakeResponse(404, text="not found"))
        if isinstance(result, Exception):
            raise result
        return result

    def urls(self, method=None):
        return [c["url"] for c in self.calls if method is None or c["method"] == method]

    def client_class(self):
        transport = self

        class Client:
            def __init__(self, *a, timeout=None, **kw):
                transport.clients_opened += 1
                transport.timeouts.append(timeout)

            def __enter__(self):
                return self

            def __exit__(self, *a):
                return False

            def get(self, url, headers=None, **kw):
                return transport.handle("GET", url, headers=headers, **kw)

            def post(self, url, json=None, headers=None, **kw):
                return transport.handle("POST", url, json=json, headers=headers, **kw)

        return Client


@pytest.fixture
def fake_http(monkeypatch):
    transport = FakeTransport()
    monkeypatch.setattr("httpx.Client", transport.client_class())
    return transport


@pytest.fixture
def connect_error():
    def make(url):
        return httpx.ConnectError("connection refused", request=httpx.Request("GET", url))

    return make
