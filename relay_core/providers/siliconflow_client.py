"""SiliconFlow（OpenAI 兼容）Provider 适配器。

固定端点，无分支逻辑：
- URL: {siliconflow_base_url}/chat/completions
- 认证: Authorization: Bearer <api_key>
- 请求体: model/stream/max_tokens/temperature/messages
- 响应: choices[0].message.content
"""

from typing import Any, Dict

import httpx

from relay_core.config.settings import settings
from relay_core.domain.exceptions import (
    MalformedResponseError,
    NetworkError,
    PreconditionError,
    UpstreamStatusError,
)
from relay_core.domain.models import ChatRequest
from relay_core.infrastructure.logging.logger import logger
from relay_core.providers.normalize import extract_choices_content
from relay_core.providers.registry import SILICONFLOW_CONFIG


class SiliconFlowClient:
    """SiliconFlow Provider 客户端实现。"""

    name = "siliconflow"

    def __init__(self, cfg=settings):
        self._settings = cfg

    def chat(self, req: ChatRequest) -> str:
        if not req.api_key:
            raise PreconditionError(code="MISSING_API_KEY", message="API Key 未提供")
        if not req.messages:
            raise PreconditionError(code="MISSING_MESSAGES", message="messages 不能为空")

        payload = self._build_payload(req)
        url = self._completions_url()
        try:
            with httpx.Client(timeout=getattr(self._settings, "http_timeout", None), trust_env=False) as client:
                resp = client.post(
                    url,
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {req.api_key}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.RequestError as e:
            raise NetworkError(str(e), url=url)

        if resp.status_code != 200:
            raise UpstreamStatusError(
                resp.status_code,
                resp.text,
                message=f"API 请求失败，状态码: {resp.status_code}",
            )
        return self._parse_response(resp)

    # ---- 辅助方法 ----

    def _completions_url(self) -> str:
        base = getattr(self._settings, "siliconflow_base_url", None) or SILICONFLOW_CONFIG.base_url
        return f"{base.rstrip('/')}{SILICONFLOW_CONFIG.completions_path}"

    def _build_payload(self, req: ChatRequest) -> Dict[str, Any]:
        model = req.model or getattr(self._settings, "default_model", None) or SILICONFLOW_CONFIG.default_model
        return {
            "model": model,
            "stream": False,
            "max_tokens": getattr(self._settings, "max_tokens", SILICONFLOW_CONFIG.max_tokens),
            "temperature": getattr(self._settings, "temperature", SILICONFLOW_CONFIG.default_temperature),
            "messages": req.messages_payload(),
        }

    def _parse_response(self, resp: httpx.Response) -> str:
        try:
            data = resp.json()
        except ValueError as e:
            logger.error(
                "SiliconFlow 响应不是 JSON",
                extra={"extra": {"status_code": resp.status_code, "body_snippet": resp.text[:1000]}},
            )
            raise MalformedResponseError(f"SiliconFlow 响应不是 JSON: {e}")
        if not isinstance(data, dict):
            raise MalformedResponseError("SiliconFlow 响应不是 JSON 对象")
        content = extract_choices_content(data)
        if content is None:
            raise MalformedResponseError("SiliconFlow 响应缺少 choices")
        return content
