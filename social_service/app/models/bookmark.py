from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Bookmark(BaseModel):
    """유저가 북마크한 tuit 도메인 모델.

    (bookmarked_by, bookmarked_tuit) 쌍마다 최대 1건만 존재한다.
    """

    id: str | None = None
    bookmarked_by: str
    bookmarked_tuit: str
    created_at: datetime


class BookmarkToggleResult(BaseModel):
    """토글 이후의 북마크 상태."""

    bookmarked: bool
    bookmark: Bookmark | None = None
