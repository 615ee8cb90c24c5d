"""HTTP 请求/响应模式定义。

字段名与移动端保持一致（camelCase），Python 侧通过别名使用 snake_case。
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MessageIn(BaseModel):
    """单条消息；role/content 之外的字段原样转发。"""

    model_config = ConfigDict(extra="allow")

    role: str
    content: str


class ChatPayload(BaseModel):
    """POST /chat 请求体。"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    messages: Optional[List[MessageIn]] = None
    provider: str = "siliconflow"
    api_key: str = Field(default="", alias="apiKey")
    model: Optional[str] = None
    ragflow_api_key: str = Field(default="", alias="ragflowApiKey")
    ragflow_base_url: str = Field(default="", alias="ragflowBaseUrl")


class SummarisePayload(BaseModel):
    """POST /summarise 请求体。"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    content: Optional[str] = None
    url: Optional[str] = None
    api_key: str = Field(default="", alias="apiKey")
    model: Optional[str] = None


class ChatResponse(BaseModel):
    reply: str
    success: bool = True


class SummariseResponse(BaseModel):
    summary: str
    success: bool = True


class ErrorResponse(BaseModel):
    error: str
    success: bool = False
