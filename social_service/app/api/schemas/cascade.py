from __future__ import annotations

from pydantic import BaseModel

from ...models.cascade import CascadeCounts, TuitCascadeResult, UserCascadeResult
from .tuits import TuitResponse
from .users import UserResponse


class CascadeCountsResponse(BaseModel):
    follows: int
    bookmarks: int
    likes: int
    tuits: int

    @classmethod
    def from_domain(cls, counts: CascadeCounts) -> "CascadeCountsResponse":
        return cls(**counts.model_dump())


class UserDeleteResponse(BaseModel):
    user: UserResponse
    deleted: CascadeCountsResponse

    @classmethod
    def from_domain(cls, result: UserCascadeResult) -> "UserDeleteResponse":
        return cls(
            user=UserResponse.from_domain(result.user),
            deleted=CascadeCountsResponse.from_domain(result.deleted),
        )


class TuitDeleteResponse(BaseModel):
    tuit: TuitResponse | None = None
    author_id: str
    deleted: CascadeCountsResponse

    @classmethod
    def from_domain(cls, result: TuitCascadeResult) -> "TuitDeleteResponse":
        return cls(
            tuit=TuitResponse.from_domain(result.tuit) if result.tuit else None,
            author_id=result.author_id,
            deleted=CascadeCountsResponse.from_domain(result.deleted),
        )
