from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Follow(BaseModel):
    """user_following 이 user_followed 를 팔로우하는 방향성 있는 관계."""

    id: str | None = None
    user_following: str
    user_followed: str
    created_at: datetime
