from __future__ import annotations

import os
from dataclasses import dataclass


SERVICE_PORT_ENV = "SOCIAL_SERVICE_PORT"
REQUESTER_HEADER_ENV = "REQUESTER_HEADER"

DEFAULT_SERVICE_PORT = 8003
DEFAULT_REQUESTER_HEADER = "X-User-Id"


@dataclass(slots=True)
class AppConfig:
    """social-service 설정 루트.

    - port: uvicorn 이 바인딩할 포트
    - requester_header: Gateway 가 인증된 유저 id 를 실어 보내는 헤더 이름
    """

    port: int
    requester_header: str


def get_service_port() -> int:
    raw = os.getenv(SERVICE_PORT_ENV, "").strip()
    if not raw:
        return DEFAULT_SERVICE_PORT
    try:
        return int(raw)
    except ValueError as exc:  # noqa: TRY003
        raise RuntimeError(f"invalid {SERVICE_PORT_ENV}: {raw!r}") from exc


def get_requester_header() -> str:
    value = os.getenv(REQUESTER_HEADER_ENV, "").strip()
    return value or DEFAULT_REQUESTER_HEADER


def load_config() -> AppConfig:
    """환경 변수에서 social-service 설정을 읽어 AppConfig 로 반환한다."""

    return AppConfig(port=get_service_port(), requester_header=get_requester_header())
