"""LLM Provider 集成层。

该包下的模块负责：
- 定义 Provider 抽象接口 (base)。
- 维护固定地址与路径模板 (registry)。
- 提供各后端的具体实现 (siliconflow_client、ragflow_client)。
- RAGFlow 端点探测 (discovery) 与响应归一化 (normalize)。
"""

from typing import Optional

from relay_core.config.settings import settings
from relay_core.providers.base import ProviderClient
from relay_core.providers.ragflow_client import RagFlowClient
from relay_core.providers.siliconflow_client import SiliconFlowClient


def create_provider(name: Optional[str] = None, cfg=None) -> ProviderClient:
    """根据名称创建 Provider 实例；除 "ragflow" 外一律使用 SiliconFlow。"""

    cfg = cfg or settings
    if (name or "").strip().lower() == "ragflow":
        return RagFlowClient(cfg)
    return SiliconFlowClient(cfg)


__all__ = ["ProviderClient", "RagFlowClient", "SiliconFlowClient", "create_provider"]
