"""统一业务异常模型。

所有跨模块抛出的业务级错误都继承自 BusinessError，
由 HTTP 层统一捕获并转换成 {"error": ..., "success": false}。
"""

from typing import Optional


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "MISSING_API_KEY"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时使用的状态码，默认 400。
        extra: 其他补充字段（例如 url、provider 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class PreconditionError(BusinessError):
    """缺少凭证、Base URL、内容或消息列表，在任何网络调用之前抛出。"""


class NetworkError(BusinessError):
    """网络层错误，例如 DNS 失败、连接被拒绝、超时等。"""

    def __init__(self, message: str, **extra):
        super().__init__(code="NETWORK_ERROR", message=message, http_status=502, **extra)


class UpstreamStatusError(BusinessError):
    """上游返回非 200（且非 RAGFlow 404）时抛出，保留原始状态码与响应文本。"""

    def __init__(self, status_code: int, body: str = "", message: Optional[str] = None, **extra):
        self.status_code = status_code
        self.body = body
        super().__init__(
            code="UPSTREAM_STATUS",
            message=message or f"上游请求失败: {status_code} {body}".strip(),
            http_status=502,
            status_code=status_code,
            **extra,
        )


class UpstreamNotFoundError(BusinessError):
    """RAGFlow completion 端点返回 404，通常是 Base URL 配置错误。"""

    def __init__(self, url: str, **extra):
        self.url = url
        super().__init__(
            code="UPSTREAM_NOT_FOUND",
            message="RAGFlow 接口路径未找到，请检查 Base URL 是否正确 (例如: http://localhost:9380)",
            http_status=502,
            url=url,
            **extra,
        )


class MalformedResponseError(BusinessError):
    """上游返回 200，但响应体无法解析为预期结构。"""

    def __init__(self, message: str, **extra):
        super().__init__(code="MALFORMED_RESPONSE", message=message, http_status=502, **extra)


class DiscoveryProbeError(BusinessError):
    """探测 chats/agents 列表失败。只在探测链内部使用，不会抛给调用方。"""

    def __init__(self, message: str, **extra):
        super().__init__(code="DISCOVERY_PROBE_FAILED", message=message, http_status=502, **extra)
