from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from common.logger import setup_logger
from common.middleware.request_trace import RequestTraceMiddleware
from common.mongo.client import close_client

from .api.health import router as health_router
from .api.v1 import api_router
from .config import AppConfig, load_config
from .exceptions import SocialServiceError, StoreUnavailable


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - framework hook
    yield
    close_client()


async def handle_service_error(request: Request, exc: SocialServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def handle_store_error(request: Request, exc: PyMongoError) -> JSONResponse:
    # cascade 밖(조회/단건 변경)에서 발생한 저장소 오류. 부분 성공 정보는 노출하지 않는다.
    logger.error("store unavailable: %s", exc, exc_info=exc)
    error = StoreUnavailable("store unavailable")
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


def create_app(config: AppConfig | None = None) -> FastAPI:
    setup_logger()
    config = config or load_config()

    app = FastAPI(
        title="Tuiter Social Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config

    # 공통 Request/Span ID 로그 미들웨어
    app.add_middleware(RequestTraceMiddleware, requester_header=config.requester_header)

    app.add_exception_handler(SocialServiceError, handle_service_error)  # type: ignore[arg-type]
    app.add_exception_handler(PyMongoError, handle_store_error)  # type: ignore[arg-type]

    app.include_router(health_router, tags=["health"])
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


def main() -> None:
    import uvicorn

    uvicorn.run(
        "social_service.app.main:app",
        host="0.0.0.0",
        port=app.state.config.port,
        reload=False,
        access_log=False,
    )


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
