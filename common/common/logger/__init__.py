import json
import logging
import os
import sys


# extra 로 넘기면 JSON 필드로 그대로 옮겨지는 키
# 요청 trace 필드와 cascade 삭제 진행 필드로 나뉜다.
REQUEST_LOG_KEYS: tuple[str, ...] = (
    "request_id",
    "span_id",
    "requester_id",
    "method",
    "path",
    "query_params",
    "status",
    "body",
    "duration",
)
CASCADE_LOG_KEYS: tuple[str, ...] = ("cascade", "root_id", "step", "deleted")
EXTRA_LOG_KEYS: tuple[str, ...] = REQUEST_LOG_KEYS + CASCADE_LOG_KEYS


def _resolve_level(level: str | None) -> int:
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    return getattr(logging, name, logging.INFO)


def setup_logger(name: str = "tuiter", level: str | None = None) -> logging.Logger:
    """서비스 로거에 stdout JSON 핸들러를 붙인다.

    Args:
        name: 로거 이름. SERVICE_NAME 환경변수가 있으면 그 값이 우선한다.
        level: 로그 레벨. 없으면 LOG_LEVEL 환경변수, 그것도 없으면 INFO.

    create_app 이 여러 번 호출되어도(테스트) 핸들러는 하나만 유지된다.
    모듈 로거(logging.getLogger(__name__))도 같은 포맷으로 나가도록 루트 로거가
    비어 있으면 같은 핸들러를 붙인다.
    """

    log_level = _resolve_level(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(JsonFormatter())

    logger = logging.getLogger(os.getenv("SERVICE_NAME", name))
    logger.setLevel(log_level)
    logger.handlers[:] = [handler]

    root = logging.getLogger()
    if not root.handlers:
        root.addHandler(handler)
        root.setLevel(log_level)

    return logger


class JsonFormatter(logging.Formatter):
    """한 줄에 JSON 객체 하나를 출력하는 포맷터.

    datetime/level/logger/message 는 항상 들어가고, EXTRA_LOG_KEYS 는 record 에
    있을 때만 들어간다. deleted 같은 dict 값은 중첩 객체로 남는다.
    """

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, object] = {
            "datetime": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            {key: getattr(record, key) for key in EXTRA_LOG_KEYS if hasattr(record, key)}
        )

        service_name = getattr(record, "service_name", None) or os.getenv("SERVICE_NAME")
        if service_name:
            payload["service_name"] = service_name
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)
