from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated

from pydantic.functional_serializers import PlainSerializer


def utc_now() -> datetime:
    """저장소 타임스탬프(created_at/updated_at, posted_on, joined)에 쓰는 현재 UTC 시각."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """naive 값은 UTC 로 간주하고, aware 값은 UTC 로 변환한다."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso8601_utc(value: datetime) -> str:
    return as_utc(value).isoformat()


# 응답 스키마의 tuit 작성 시각, 가입일 등. JSON 으로 내보낼 때만 문자열이 된다.
UtcDateTime = Annotated[
    datetime,
    PlainSerializer(to_iso8601_utc, return_type=str, when_used="json"),
]
