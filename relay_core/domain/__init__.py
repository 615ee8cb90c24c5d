"""领域层模型与异常。

包含：
- models: ChatMessage / ChatRequest / ResolvedEndpoint / SummariseRequest。
- exceptions: 业务异常类型定义。
"""
