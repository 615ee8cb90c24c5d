"""RAGFlow Provider 适配器。

调用流程：

1. 校验 api_key / base_url（缺失直接报错，不发任何请求）。
2. 通过 discovery.resolve_endpoint 找到目标 completions 端点。
3. POST {stream: false, messages, model: "ragflow"}，model 只是占位，真实模型在 RAGFlow 服务端配置。
4. 404 单独报错（提示检查 Base URL），其余非 200 带状态码与响应文本报错。
5. 200 时用 normalize.normalize_reply 把多种响应格式归一化为一段文本。
"""

from typing import Any, Dict

import httpx

from relay_core.config.settings import settings
from relay_core.domain.exceptions import (
    MalformedResponseError,
    NetworkError,
    PreconditionError,
    UpstreamNotFoundError,
    UpstreamStatusError,
)
from relay_core.domain.models import ChatRequest, ResolvedEndpoint
from relay_core.infrastructure.logging.logger import logger
from relay_core.providers.discovery import normalize_base_url, resolve_endpoint
from relay_core.providers.normalize import normalize_reply


class RagFlowClient:
    """RAGFlow Provider 客户端实现。"""

    name = "ragflow"

    def __init__(self, cfg=settings):
        self._settings = cfg

    def chat(self, req: ChatRequest) -> str:
        if not req.api_key:
            raise PreconditionError(code="MISSING_API_KEY", message="RAGFlow API Key 未提供")
        base_url = normalize_base_url(req.base_url or "")
        if not base_url:
            raise PreconditionError(code="MISSING_BASE_URL", message="RAGFlow Base URL 未提供")
        if not req.messages:
            raise PreconditionError(code="MISSING_MESSAGES", message="messages 不能为空")

        endpoint = resolve_endpoint(
            base_url,
            req.api_key,
            probe_timeout=getattr(self._settings, "ragflow_probe_timeout", 5.0),
        )
        logger.info(
            f"Target RAGFlow URL: {endpoint.url}",
            extra={"extra": {"resource_kind": endpoint.resource_kind.value, "resource_id": endpoint.resource_id}},
        )
        return self._complete(endpoint, req)

    def _build_payload(self, req: ChatRequest) -> Dict[str, Any]:
        return {
            "stream": False,
            "messages": req.messages_payload(),
            "model": getattr(self._settings, "ragflow_model_placeholder", "ragflow"),
        }

    def _complete(self, endpoint: ResolvedEndpoint, req: ChatRequest) -> str:
        try:
            with httpx.Client(timeout=getattr(self._settings, "http_timeout", None), trust_env=False) as client:
                resp = client.post(
                    endpoint.url,
                    json=self._build_payload(req),
                    headers={
                        "Authorization": f"Bearer {req.api_key}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.RequestError as e:
            raise NetworkError(str(e), url=endpoint.url)
        except (httpx.InvalidURL, UnicodeError) as e:
            raise PreconditionError(
                code="INVALID_BASE_URL",
                message=f"RAGFlow Base URL 无效: {e}",
                url=endpoint.url,
            )

        if resp.status_code == 404:
            raise UpstreamNotFoundError(endpoint.url)
        if resp.status_code != 200:
            raise UpstreamStatusError(
                resp.status_code,
                resp.text,
                message=f"RAGFlow 请求失败: {resp.status_code} {resp.text}".strip(),
            )

        logger.debug(f"RAGFlow Response: {resp.text}")
        try:
            body = resp.json()
        except ValueError as e:
            raise MalformedResponseError(f"RAGFlow 响应不是 JSON: {e}", url=endpoint.url)
        return normalize_reply(body)
