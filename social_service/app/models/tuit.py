from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Tuit(BaseModel):
    """유저가 작성한 짧은 게시글(tuit) 도메인 모델."""

    id: str | None = None
    tuit: str
    posted_by: str
    posted_on: datetime
    created_at: datetime
    updated_at: datetime
