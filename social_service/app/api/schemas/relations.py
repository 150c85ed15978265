"""북마크/좋아요/팔로우 관계 응답 스키마."""

from __future__ import annotations

from pydantic import BaseModel

from common.types.datetime import UtcDateTime

from ...models.bookmark import Bookmark, BookmarkToggleResult
from ...models.follow import Follow
from ...models.like import Like


class BookmarkResponse(BaseModel):
    bookmarked_by: str
    bookmarked_tuit: str
    created_at: UtcDateTime

    @classmethod
    def from_domain(cls, bookmark: Bookmark) -> "BookmarkResponse":
        return cls(
            bookmarked_by=bookmark.bookmarked_by,
            bookmarked_tuit=bookmark.bookmarked_tuit,
            created_at=bookmark.created_at,
        )


class BookmarkToggleResponse(BaseModel):
    bookmarked: bool
    bookmark: BookmarkResponse | None = None

    @classmethod
    def from_domain(cls, result: BookmarkToggleResult) -> "BookmarkToggleResponse":
        return cls(
            bookmarked=result.bookmarked,
            bookmark=(
                BookmarkResponse.from_domain(result.bookmark)
                if result.bookmark is not None
                else None
            ),
        )


class LikeResponse(BaseModel):
    liked_by: str
    tuit: str
    created_at: UtcDateTime

    @classmethod
    def from_domain(cls, like: Like) -> "LikeResponse":
        return cls(liked_by=like.liked_by, tuit=like.tuit, created_at=like.created_at)


class FollowResponse(BaseModel):
    user_following: str
    user_followed: str
    created_at: UtcDateTime

    @classmethod
    def from_domain(cls, follow: Follow) -> "FollowResponse":
        return cls(
            user_following=follow.user_following,
            user_followed=follow.user_followed,
            created_at=follow.created_at,
        )
