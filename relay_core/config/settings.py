"""配置管理模块。

支持从环境变量、.env 以及 config.yaml 加载配置。
所有固定的后端地址、默认模型与采样参数都集中在这里，测试可以直接替换。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("RELAY_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class RelaySettings(BaseSettings):
    """中转服务配置。"""

    # ---- SiliconFlow / OpenAI 兼容后端 ----
    siliconflow_base_url: str = Field(
        default="https://api.siliconflow.cn/v1",
        description="固定 completions 端点所在的基础 URL",
    )
    default_model: str = Field(
        default="Qwen/Qwen2.5-7B-Instruct",
        description="请求未指定 model 时使用的模型",
    )
    max_tokens: int = Field(default=1024, ge=1, description="单次回复的最大 token 数")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="采样温度")
    http_timeout: Optional[float] = Field(
        default=None,
        description="completion 请求超时（秒），None 表示不限制",
    )

    # ---- RAGFlow ----
    ragflow_probe_timeout: float = Field(
        default=5.0,
        gt=0.0,
        description="探测 chats/agents 列表时的连接与读取超时（秒）",
    )
    ragflow_model_placeholder: str = Field(
        default="ragflow",
        description="RAGFlow 在服务端配置模型，请求体里的 model 只是占位",
    )

    # ---- HTTP 服务 ----
    server_host: str = Field(default="0.0.0.0", description="监听地址")
    server_port: int = Field(default=8080, ge=1, le=65535, description="监听端口")
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])

    # ---- 日志 ----
    log_dir: str = Field(default="logs", description="日志目录")
    log_level: str = Field(default="INFO", description="日志级别")
    log_redact_content: bool = Field(default=False, description="是否截断日志内容")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RELAY_",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("siliconflow_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @field_validator("http_timeout")
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("http_timeout must be positive or unset")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


settings = RelaySettings()

Settings = RelaySettings
