"""统一的对话请求与端点数据模型。

本模块定义了中转服务在不同 Provider 之间共享的标准数据结构：

- ChatMessage: 一条对话消息（role/content），按调用方给定的顺序原样转发。
- ChatRequest: 一次聊天调用的完整输入，构造后不可变。
- ResolvedEndpoint: RAGFlow 探测得到的目标 completions 端点。
- SummariseRequest: 网页总结调用的输入。

所有对象只在单次请求/响应周期内存在，不做缓存或持久化。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Literal, Optional, Tuple


ProviderName = Literal["siliconflow", "ragflow"]
DEFAULT_PROVIDER: ProviderName = "siliconflow"


@dataclass(frozen=True)
class ChatMessage:
    """一条对话消息。

    - role: 消息角色，如 system/user/assistant，不做校验，原样转发。
    - content: 纯文本内容。
    - extra: role/content 之外调用方附带的字段（如 name），原样转发。
    """

    role: str
    content: str
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_payload(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content, **self.extra}


@dataclass(frozen=True)
class ChatRequest:
    """一次聊天请求。

    provider 为 "ragflow" 时走探测路径，使用 api_key/base_url；
    其余取值一律走固定端点路径，使用 api_key/model。
    """

    provider: str
    messages: Tuple[ChatMessage, ...]
    api_key: str = ""
    model: Optional[str] = None
    base_url: Optional[str] = None

    @classmethod
    def build(
        cls,
        provider: Optional[str],
        messages: Iterable[Any],
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> "ChatRequest":
        """从松散输入（dict 或 ChatMessage）构造请求，消息顺序保持不变。"""

        msgs = []
        for m in messages or ():
            if isinstance(m, ChatMessage):
                msgs.append(m)
            else:
                extra = {k: v for k, v in m.items() if k not in ("role", "content")}
                msgs.append(ChatMessage(role=str(m["role"]), content=str(m["content"]), extra=extra))
        return cls(
            provider=(provider or DEFAULT_PROVIDER).strip().lower(),
            messages=tuple(msgs),
            api_key=(api_key or "").strip(),
            model=(model or "").strip() or None,
            base_url=(base_url or "").strip() or None,
        )

    def messages_payload(self) -> list[Dict[str, Any]]:
        return [m.to_payload() for m in self.messages]


class ResourceKind(str, Enum):
    """RAGFlow 上可用于对话的资源类型。"""

    CHAT_SESSION = "chat_session"
    AGENT = "agent"
    NONE = "none"


@dataclass(frozen=True)
class ResolvedEndpoint:
    """探测结果：最终 completion 请求要打到的 URL。"""

    url: str
    resource_kind: ResourceKind
    resource_id: Optional[str] = None


@dataclass(frozen=True)
class SummariseRequest:
    """网页总结请求。url 可选，仅用于拼进提示词。"""

    content: str
    api_key: str
    url: Optional[str] = None
    model: Optional[str] = None
