"""Provider 抽象接口。

上层服务不直接依赖具体后端的 HTTP 细节，而是依赖此协议：

- 每个后端实现一个 ProviderClient（如 SiliconFlowClient、RagFlowClient）。
- 负责：把 ChatRequest 转成具体 API 请求，并把响应 JSON 归一化为一段纯文本回复。
"""

from typing import Protocol

from relay_core.domain.models import ChatRequest


class ProviderClient(Protocol):
    """LLM Provider 客户端协议。

    - name: Provider 名称，用于日志。
    - chat(req): 执行一次非流式对话调用，返回回复文本。
    """

    name: str

    def chat(self, req: ChatRequest) -> str:
        ...
