from __future__ import annotations

from common.mongo.types import BaseDocument, from_object_id

from ...models.like import Like


class LikeDocument(BaseDocument):
    """MongoDB likes 컬렉션 도큐먼트 모델."""

    liked_by: str
    tuit: str

    @classmethod
    def from_domain(cls, like: Like) -> "LikeDocument":
        data = {
            "liked_by": like.liked_by,
            "tuit": like.tuit,
            "created_at": like.created_at,
            "updated_at": like.created_at,
        }
        return cls.model_validate(data)

    def to_domain(self) -> Like:
        return Like(
            id=from_object_id(self.id),
            liked_by=self.liked_by,
            tuit=self.tuit,
            created_at=self.created_at,
        )
