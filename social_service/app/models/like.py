from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Like(BaseModel):
    id: str | None = None
    liked_by: str
    tuit: str
    created_at: datetime
