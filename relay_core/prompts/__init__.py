"""提示词加载工具。

按语言(locale) 从 prompts/<locale> 目录读取提示词模板。
"""

from functools import lru_cache
from pathlib import Path


PROMPTS_DIR = Path(__file__).resolve().parent


@lru_cache(maxsize=None)
def load_prompt(name: str, locale: str = "zh") -> str:
    """加载提示词文本，去掉末尾换行。"""

    fname = PROMPTS_DIR / locale / f"{name}.md"
    return fname.read_text(encoding="utf-8").rstrip("\n")
