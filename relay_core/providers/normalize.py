"""上游响应归一化。

不同后端（以及同一 RAGFlow 的不同版本）返回的 JSON 结构不一致。
这里把若干“提取器”按优先级排成一个元组，依次尝试，第一个返回非 None 的结果即为回复：

1. OpenAI 兼容格式：choices[0].message.content
2. RAGFlow 原生格式：data.answer / data.content / data 本身
3. 顶层 answer
4. 兜底：整个响应体的 JSON 文本

新增一种响应格式时，只需要写一个提取器并插入到 EXTRACTORS 里合适的位置。
"""

import json
from typing import Any, Callable, Optional, Tuple

from relay_core.domain.exceptions import MalformedResponseError

Extractor = Callable[[dict], Optional[str]]


def to_text(value: Any) -> str:
    """把任意 JSON 值转成文本；对象与数组输出紧凑 JSON。"""

    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def extract_choices_content(body: dict) -> Optional[str]:
    choices = body.get("choices")
    if choices is None:
        return None
    try:
        message = choices[0]["message"]
        content = message["content"]
    except (IndexError, KeyError, TypeError) as e:
        raise MalformedResponseError(f"choices 结构无法解析: {e!r}")

    if isinstance(content, str):
        return content

    # 少数实现会把 content 作为 parts 列表
    if isinstance(content, list):
        texts = [p["text"] for p in content if isinstance(p, dict) and isinstance(p.get("text"), str)]
        if texts:
            return "\n".join(texts)

    raise MalformedResponseError("choices[0].message.content 不是文本")


def extract_data(body: dict) -> Optional[str]:
    data = body.get("data")
    if data is None:
        return None
    if isinstance(data, dict):
        # RAGFlow 原生格式通常包含 answer
        if data.get("answer") is not None:
            return to_text(data["answer"])
        if data.get("content") is not None:
            return to_text(data["content"])
    return to_text(data)


def extract_top_level_answer(body: dict) -> Optional[str]:
    answer = body.get("answer")
    if answer is None:
        return None
    return to_text(answer)


def passthrough(body: dict) -> Optional[str]:
    return to_text(body)


EXTRACTORS: Tuple[Extractor, ...] = (
    extract_choices_content,
    extract_data,
    extract_top_level_answer,
    passthrough,
)


def normalize_reply(body: Any, extractors: Tuple[Extractor, ...] = EXTRACTORS) -> str:
    """把上游 JSON 响应归一化为一段回复文本。"""

    if not isinstance(body, dict):
        raise MalformedResponseError(f"响应体不是 JSON 对象: {to_text(body)[:200]}")
    for extractor in extractors:
        text = extractor(body)
        if text is not None:
            return text
    raise MalformedResponseError("响应中未找到可解析文本")
