"""
FastAPI 服务
为移动端提供 /chat 与 /summarise 接口
"""
import argparse
from typing import Optional, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from relay_core.api.schemas import (
    ChatPayload,
    ChatResponse,
    ErrorResponse,
    SummarisePayload,
    SummariseResponse,
)
from relay_core.api.service import run_chat, run_summarise
from relay_core.config.settings import settings
from relay_core.domain.exceptions import BusinessError
from relay_core.infrastructure.logging.logger import logger

app = FastAPI(
    title="LLM Relay",
    description="SiliconFlow / RAGFlow 对话与网页总结中转服务",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@app.exception_handler(BusinessError)
async def business_error_handler(request: Request, exc: BusinessError) -> JSONResponse:
    logger.error(
        f"{request.url.path} failed: {exc.message}",
        extra={"extra": {"code": exc.code, "http_status": exc.http_status}},
    )
    return _error(exc.http_status, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 405:
        message = "仅支持 POST 请求"
    else:
        message = str(exc.detail)
    response = _error(exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"{request.url.path} invalid request body: {exc.errors()}")
    return _error(400, "请求体格式错误")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/chat", response_model=ChatResponse)
def chat(payload: ChatPayload):
    result = run_chat(
        messages=[m.model_dump() for m in payload.messages or []],
        provider=payload.provider,
        api_key=payload.api_key,
        model=payload.model,
        ragflow_api_key=payload.ragflow_api_key,
        ragflow_base_url=payload.ragflow_base_url,
    )
    return ChatResponse(**result)


@app.post("/summarise", response_model=SummariseResponse)
def summarise(payload: SummarisePayload):
    result = run_summarise(
        content=payload.content,
        api_key=payload.api_key,
        url=payload.url,
        model=payload.model,
    )
    return SummariseResponse(**result)


def main(argv: Optional[Sequence[str]] = None) -> None:
    import uvicorn

    parser = argparse.ArgumentParser(description="启动 LLM 中转服务")
    parser.add_argument("port", nargs="?", type=int, default=settings.server_port)
    parser.add_argument("--host", default=settings.server_host)
    args = parser.parse_args(argv)

    logger.info(f"中转服务已启动，监听端口: {args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
