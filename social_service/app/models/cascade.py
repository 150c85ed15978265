from __future__ import annotations

from pydantic import BaseModel

from common.models.user import User

from .tuit import Tuit


class CascadeCounts(BaseModel):
    """cascade 삭제 중 컬렉션별로 삭제된 도큐먼트 수."""

    follows: int = 0
    bookmarks: int = 0
    likes: int = 0
    tuits: int = 0


class UserCascadeResult(BaseModel):
    user: User
    deleted: CascadeCounts


class TuitCascadeResult(BaseModel):
    """tuit 삭제 결과. 단건 삭제면 tuit 이, 작성자 단위 삭제면 author_id 가 채워진다."""

    tuit: Tuit | None = None
    author_id: str
    deleted: CascadeCounts
