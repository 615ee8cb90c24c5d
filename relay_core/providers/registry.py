"""Provider 静态配置。

本模块集中描述每个后端的固定部分：默认地址、路径模板、默认模型与采样参数。
运行期可被 settings 覆盖（例如 siliconflow_base_url），这里只提供缺省值。"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProviderConfig:
    """固定端点 Provider 的整体配置。"""

    name: str
    base_url: str
    completions_path: str
    default_model: str
    max_tokens: int
    default_temperature: float


@dataclass(frozen=True)
class RagFlowRoutes:
    """RAGFlow 各版本 API 的路径模板，均相对于 Base URL。"""

    chats_list: str = "/api/v1/chats"
    agents_list: str = "/api/v1/agents"
    chat_completions: str = "/api/v1/chats_openai/{resource_id}/chat/completions"
    agent_completions: str = "/api/v1/agents_openai/{resource_id}/chat/completions"
    generic_completions: str = "/api/v1/chat/completions"
    # 只需要拿到第一个资源
    list_query: str = "page=1&page_size=1"


# SiliconFlow（OpenAI 兼容）配置
SILICONFLOW_CONFIG = ProviderConfig(
    name="siliconflow",
    base_url="https://api.siliconflow.cn/v1",
    completions_path="/chat/completions",
    default_model="Qwen/Qwen2.5-7B-Instruct",
    max_tokens=1024,
    default_temperature=0.7,
)

RAGFLOW_ROUTES = RagFlowRoutes()
