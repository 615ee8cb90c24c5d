"""Relay Core 顶层包。

该包提供移动端对话与网页总结的中转服务实现，
包括配置加载、领域模型、Provider 适配（SiliconFlow / RAGFlow 端点探测与响应归一化）、
HTTP 服务与日志。
"""

from relay_core.api.service import run_chat, run_summarise

__all__ = ["run_chat", "run_summarise"]
