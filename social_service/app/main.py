from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from common.logger import setup_logger
from common.middleware.request_trace import RequestTraceMiddleware
from common.mongo.client import MongoConnection

from .api.health import router as health_router
from .api.v1 import api_router
from .config import get_config
from .exceptions import SocialServiceError
from .repositories.indexes import ensure_indexes


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - framework hook
    """MongoDB 연결을 앱 생명주기에 묶는다. (인덱스 보장 포함)"""

    connection = MongoConnection.from_env()
    connection.connect(ensure_indexes)
    app.state.mongo = connection
    try:
        yield
    finally:
        connection.close()


async def handle_service_error(request: Request, exc: SocialServiceError) -> JSONResponse:
    """SocialServiceError 계열을 {"code", "message"} 응답으로 변환한다."""

    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "request rejected: %s",
        exc.message,
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "path": request.url.path,
            "status": exc.status_code,
            "error_code": exc.code,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "message": exc.message},
    )


def create_app() -> FastAPI:
    setup_logger(name="social-service")
    app = FastAPI(
        title="Social Service",
        version="0.1.0",
        lifespan=lifespan,
    )

    # 공통 Request/Span ID 로그 미들웨어
    app.add_middleware(RequestTraceMiddleware)
    app.add_exception_handler(SocialServiceError, handle_service_error)

    app.include_router(health_router, tags=["health"])
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


def main() -> None:
    import uvicorn

    uvicorn.run(
        "social_service.app.main:app",
        host="0.0.0.0",
        port=get_config().port,
        reload=False,
        access_log=False,
    )


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
