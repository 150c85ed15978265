from __future__ import annotations

import os


MONGO_URI_ENV = "MONGO_URI"
MONGO_DB_NAME_ENV = "MONGO_DB_NAME"
MONGO_TIMEOUT_MS_ENV = "MONGO_TIMEOUT_MS"

DEFAULT_MONGO_TIMEOUT_MS = 5000


def get_mongo_uri() -> str:
    """MONGO_URI 값. 비어 있으면 기동을 멈춘다. (기본 접속 정보는 두지 않는다.)"""

    uri = os.getenv(MONGO_URI_ENV, "").strip()
    if not uri:
        raise RuntimeError(f"{MONGO_URI_ENV} must be set to reach MongoDB")
    return uri


def get_mongo_db_name() -> str | None:
    """MONGO_DB_NAME 값. 없으면 None 이고 URI 경로의 DB 를 쓴다."""

    return os.getenv(MONGO_DB_NAME_ENV, "").strip() or None


def get_mongo_timeout_ms() -> int:
    """서버 선택/소켓 타임아웃(ms). 잘못된 값은 기본값으로 대체하지 않고 실패한다.

    이 시간이 지나면 repository 호출이 PyMongoError 로 끝나고, API 는 503 을 돌려준다.
    """

    raw = os.getenv(MONGO_TIMEOUT_MS_ENV, "").strip()
    if not raw:
        return DEFAULT_MONGO_TIMEOUT_MS
    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"invalid {MONGO_TIMEOUT_MS_ENV}: {raw!r}") from exc
    if value <= 0:
        raise RuntimeError(f"{MONGO_TIMEOUT_MS_ENV} must be positive: {raw!r}")
    return value
