import logging
import time
import uuid
from dataclasses import dataclass, field
from urllib.parse import parse_qs

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response


REQUEST_ID_HEADER = "X-Request-Id"
SPAN_ID_HEADER = "X-Span-Id"
DEFAULT_REQUESTER_HEADER = "X-User-Id"

# 헬스 체크는 로그에서 제외
IGNORED_LOG_PATHS: frozenset[str] = frozenset({"/health"})

MUTATING_METHODS: frozenset[str] = frozenset({"POST", "PUT", "PATCH", "DELETE"})
MAX_BODY_LOG_LENGTH = 1024


@dataclass
class _Trace:
    request_id: str
    span_id: str
    requester_id: str | None
    started: float = field(default_factory=time.monotonic)

    def elapsed(self) -> str:
        return f"{(time.monotonic() - self.started) * 1000:.3f}ms"


class RequestTraceMiddleware(BaseHTTPMiddleware):
    """요청 단위 trace 로그 미들웨어.

    - X-Request-Id / X-Span-Id 를 이어받고, 없으면 request_id 를 새로 만든다.
    - Gateway 가 넣어 준 요청자 헤더 값을 requester_id 로 남긴다. (인증 판단은 하지 않는다.)
    - 변경 요청은 바디 앞부분을 함께 남긴다.
    - 5xx 응답은 warning 으로 올려 cascade 중간 실패를 찾기 쉽게 한다.
    """

    def __init__(  # type: ignore[override]
        self,
        app,
        logger: logging.Logger | None = None,
        requester_header: str = DEFAULT_REQUESTER_HEADER,
    ) -> None:
        super().__init__(app)
        self._logger = logger or logging.getLogger("request_trace")
        self._requester_header = requester_header

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        trace = _Trace(
            request_id=request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex,
            span_id=request.headers.get(SPAN_ID_HEADER) or "0",
            requester_id=request.headers.get(self._requester_header) or None,
        )
        request.state.request_id = trace.request_id
        request.state.span_id = trace.span_id

        body = await self._body_snippet(request)
        if request.url.path in IGNORED_LOG_PATHS:
            return await call_next(request)

        try:
            response = await call_next(request)
        except Exception:
            self._logger.exception(
                "request failed", extra=self._extra(request, trace, body)
            )
            raise

        response.headers.setdefault(REQUEST_ID_HEADER, trace.request_id)
        response.headers.setdefault(SPAN_ID_HEADER, trace.span_id)

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        self._logger.log(
            level,
            "completed request",
            extra=self._extra(request, trace, body, status=response.status_code),
        )
        return response

    @staticmethod
    async def _body_snippet(request: Request) -> str | None:
        if request.method not in MUTATING_METHODS:
            return None
        raw = await request.body()
        if not raw:
            return None
        return raw.decode("utf-8", errors="replace")[:MAX_BODY_LOG_LENGTH]

    @staticmethod
    def _extra(
        request: Request,
        trace: _Trace,
        body: str | None,
        status: int | None = None,
    ) -> dict[str, object]:
        extra: dict[str, object] = {
            "request_id": trace.request_id,
            "span_id": trace.span_id,
            "method": request.method,
            "path": request.url.path,
            "duration": trace.elapsed(),
        }
        if trace.requester_id:
            extra["requester_id"] = trace.requester_id
        if request.url.query:
            parsed = parse_qs(request.url.query, keep_blank_values=True)
            extra["query_params"] = {
                key: values[0] if len(values) == 1 else values
                for key, values in parsed.items()
            }
        if body:
            extra["body"] = body
        if status is not None:
            extra["status"] = status
        return extra
