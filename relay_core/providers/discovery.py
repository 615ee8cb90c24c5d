"""RAGFlow 端点探测。

RAGFlow 不同版本暴露的 OpenAI 兼容接口不同，调用前需要先找到一个可用的对话资源：

1. 列出 chats，取第一个 id -> /api/v1/chats_openai/{id}/chat/completions
2. 否则列出 agents，取第一个 id -> /api/v1/agents_openai/{id}/chat/completions
3. 否则退回通用路径 /api/v1/chat/completions（某些版本上会 404，由调用方报告）

每个探测函数返回 Optional[ResolvedEndpoint]，按顺序尝试，第一个非 None 即为结果。
探测失败（非 200、网络错误、响应格式不对）只记录日志并进入下一档，不会中断整个调用。
探测结果不缓存，每次调用重新探测。
"""

from typing import Callable, Optional, Tuple

import httpx

from relay_core.domain.exceptions import DiscoveryProbeError
from relay_core.domain.models import ResolvedEndpoint, ResourceKind
from relay_core.infrastructure.logging.logger import logger
from relay_core.providers.registry import RAGFLOW_ROUTES

Probe = Callable[[httpx.Client, str, str], Optional[ResolvedEndpoint]]


def normalize_base_url(base_url: str) -> str:
    return (base_url or "").strip().rstrip("/")


def fetch_first_id(client: httpx.Client, list_url: str, api_key: str) -> Optional[str]:
    """GET 资源列表并返回第一个条目的 id；列表为空时返回 None。

    任何失败都包装成 DiscoveryProbeError。
    """

    url = f"{list_url}?{RAGFLOW_ROUTES.list_query}"
    try:
        resp = client.get(url, headers={"Authorization": f"Bearer {api_key}"})
    except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as e:
        raise DiscoveryProbeError(f"请求失败: {e}", url=url)
    if resp.status_code != 200:
        raise DiscoveryProbeError(f"状态码 {resp.status_code}", url=url)
    try:
        body = resp.json()
    except ValueError as e:
        raise DiscoveryProbeError(f"响应不是 JSON: {e}", url=url)

    data = body.get("data") if isinstance(body, dict) else None
    if not data:
        return None
    if not isinstance(data, list) or not isinstance(data[0], dict):
        raise DiscoveryProbeError("data 不是对象列表", url=url)
    resource_id = data[0].get("id")
    if resource_id is None or str(resource_id) == "":
        raise DiscoveryProbeError("第一个条目缺少 id", url=url)
    return str(resource_id)


def _resource_probe(list_path: str, completions_path: str, kind: ResourceKind) -> Probe:
    def probe(client: httpx.Client, base_url: str, api_key: str) -> Optional[ResolvedEndpoint]:
        resource_id = fetch_first_id(client, f"{base_url}{list_path}", api_key)
        if resource_id is None:
            return None
        logger.info(
            f"Found RAGFlow {kind.value} id: {resource_id}",
            extra={"extra": {"resource_kind": kind.value, "resource_id": resource_id}},
        )
        return ResolvedEndpoint(
            url=f"{base_url}{completions_path.format(resource_id=resource_id)}",
            resource_kind=kind,
            resource_id=resource_id,
        )

    probe.__name__ = f"probe_{kind.value}"
    return probe


probe_chats = _resource_probe(
    RAGFLOW_ROUTES.chats_list, RAGFLOW_ROUTES.chat_completions, ResourceKind.CHAT_SESSION
)
probe_agents = _resource_probe(
    RAGFLOW_ROUTES.agents_list, RAGFLOW_ROUTES.agent_completions, ResourceKind.AGENT
)

PROBES: Tuple[Probe, ...] = (probe_chats, probe_agents)


def generic_endpoint(base_url: str) -> ResolvedEndpoint:
    return ResolvedEndpoint(
        url=f"{base_url}{RAGFLOW_ROUTES.generic_completions}",
        resource_kind=ResourceKind.NONE,
    )


def resolve_endpoint(
    base_url: str,
    api_key: str,
    *,
    probe_timeout: float,
    probes: Tuple[Probe, ...] = PROBES,
) -> ResolvedEndpoint:
    """按 chat -> agent -> 通用路径 的顺序确定 completion 端点。"""

    base_url = normalize_base_url(base_url)
    with httpx.Client(timeout=httpx.Timeout(probe_timeout), trust_env=False) as client:
        for probe in probes:
            try:
                endpoint = probe(client, base_url, api_key)
            except DiscoveryProbeError as e:
                name = getattr(probe, "__name__", repr(probe))
                logger.warning(
                    f"RAGFlow probe {name} failed: {e.message}",
                    extra={"extra": {"probe": name, **e.extra}},
                )
                continue
            if endpoint is not None:
                return endpoint

    endpoint = generic_endpoint(base_url)
    logger.info(f"No Chat or Agent found, using default URL: {endpoint.url}")
    return endpoint
