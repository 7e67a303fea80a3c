"""异常到响应信封的映射

所有错误响应统一为 {"ok": false, "error": <message>}：
- ValidationError / 请求体校验失败 -> 400
- NotFoundError -> 404
- StoreError -> 500（底层信息原样透传，不重试）
- 其余未捕获异常 -> 500 "internal server error"（详情只进日志）
"""

import structlog
from devmemory.core.exceptions import NotFoundError, StoreError, ValidationError
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

log = structlog.get_logger()


def error_response(status_code: int, message: str) -> JSONResponse:
    """构造统一错误信封"""
    return JSONResponse(
        status_code=status_code,
        content={"ok": False, "error": message},
    )


async def _handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return error_response(400, exc.message)


async def _handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    return error_response(400, f"invalid request: {details}")


async def _handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(404, exc.message)


async def _handle_store_error(request: Request, exc: StoreError) -> JSONResponse:
    await log.aerror(
        "store_error",
        method=request.method,
        path=request.url.path,
        error=exc.message,
    )
    return error_response(500, exc.message)


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    await log.aerror(
        "unhandled_error",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return error_response(500, "internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """注册全部异常处理器"""
    app.add_exception_handler(ValidationError, _handle_validation_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation_error)
    app.add_exception_handler(NotFoundError, _handle_not_found)
    app.add_exception_handler(StoreError, _handle_store_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)
