"""Minimal demonstration of the relay service layer."""

import os

from relay_core import run_chat, run_summarise

if __name__ == "__main__":
    api_key = os.getenv("SILICONFLOW_API_KEY", "")
    question = "用一句话介绍一下 RAGFlow"
    result = run_chat([{"role": "user", "content": question}], api_key=api_key)
    print("User:", question)
    print("Assistant:", result["reply"])

    summary = run_summarise(
        content="RAGFlow 是一个基于深度文档理解的开源 RAG 引擎。",
        api_key=api_key,
        url="https://ragflow.io",
    )
    print("Summary:", summary["summary"])
