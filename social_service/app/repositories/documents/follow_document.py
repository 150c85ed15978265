from __future__ import annotations

from common.mongo.types import BaseDocument, from_object_id

from ...models.follow import Follow


class FollowDocument(BaseDocument):
    """MongoDB follows 컬렉션 도큐먼트 모델."""

    user_following: str
    user_followed: str

    @classmethod
    def from_domain(cls, follow: Follow) -> "FollowDocument":
        data = {
            "user_following": follow.user_following,
            "user_followed": follow.user_followed,
            "created_at": follow.created_at,
            "updated_at": follow.created_at,
        }
        return cls.model_validate(data)

    def to_domain(self) -> Follow:
        return Follow(
            id=from_object_id(self.id),
            user_following=self.user_following,
            user_followed=self.user_followed,
            created_at=self.created_at,
        )
