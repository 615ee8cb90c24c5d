"""对外 API 服务模块。

提供简化的函数接口供 HTTP 层调用：按 provider 选择适配器、构造总结提示词，
返回可直接序列化的字典。
"""

from typing import Any, Dict, Iterable, Optional

from relay_core.domain.exceptions import BusinessError, PreconditionError
from relay_core.domain.models import ChatMessage, ChatRequest, SummariseRequest
from relay_core.infrastructure.logging.logger import logger
from relay_core.prompts import load_prompt
from relay_core.providers import create_provider


def build_summary_prompt(content: str, url: Optional[str] = None) -> str:
    """拼接网页总结提示词：固定指令 +（可选）网址 + 正文。"""

    prompt = load_prompt("summarise_page") + "\n\n"
    if url:
        prompt += f"网址：{url}\n\n"
    prompt += f"内容：\n{content}"
    return prompt


def run_chat(
    messages: Optional[Iterable[Any]],
    provider: Optional[str] = None,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    ragflow_api_key: Optional[str] = None,
    ragflow_base_url: Optional[str] = None,
    cfg=None,
) -> Dict[str, Any]:
    """运行一次对话。

    Args:
        messages: 按顺序排列的 {role, content} 消息
        provider: "siliconflow"（默认）或 "ragflow"
        api_key: SiliconFlow API Key
        model: SiliconFlow 模型名（可选）
        ragflow_api_key: RAGFlow API Key
        ragflow_base_url: RAGFlow 服务地址，例如 http://localhost:9380

    Returns:
        {"reply": str, "success": True}

    Raises:
        domain.exceptions 中定义的 BusinessError 子类
    """
    messages = list(messages or [])
    if not messages:
        raise PreconditionError(code="MISSING_MESSAGES", message="messages 不能为空")

    if (provider or "").strip().lower() == "ragflow":
        req = ChatRequest.build("ragflow", messages, api_key=ragflow_api_key, base_url=ragflow_base_url)
    else:
        req = ChatRequest.build(provider, messages, api_key=api_key, model=model)

    client = create_provider(req.provider, cfg)
    try:
        reply = client.chat(req)
    except BusinessError as e:
        logger.error(f"Chat failed: {e.message}", extra={"extra": {
            "provider": client.name,
            "code": e.code,
        }})
        raise
    return {"reply": reply, "success": True}


def run_summarise(
    content: Optional[str],
    api_key: Optional[str],
    url: Optional[str] = None,
    model: Optional[str] = None,
    cfg=None,
) -> Dict[str, Any]:
    """总结网页内容，返回 {"summary": str, "success": True}。"""

    req = SummariseRequest(
        content=content or "",
        api_key=(api_key or "").strip(),
        url=(url or "").strip() or None,
        model=(model or "").strip() or None,
    )
    if not req.content:
        raise PreconditionError(code="MISSING_CONTENT", message="content 不能为空")
    if not req.api_key:
        raise PreconditionError(code="MISSING_API_KEY", message="API Key 未提供")

    chat_req = ChatRequest.build(
        "siliconflow",
        [ChatMessage(role="user", content=build_summary_prompt(req.content, req.url))],
        api_key=req.api_key,
        model=req.model,
    )
    client = create_provider(chat_req.provider, cfg)
    try:
        summary = client.chat(chat_req)
    except BusinessError as e:
        logger.error(f"Summarise failed: {e.message}", extra={"extra": {
            "url": req.url,
            "code": e.code,
        }})
        raise
    return {"summary": summary.strip(), "success": True}
