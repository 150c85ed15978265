from __future__ import annotations

from pymongo.database import Database

from common.types.datetime import utc_now

from .documents.follow_document import FollowDocument
from .interfaces import FollowRepositoryInterface
from ..models.follow import Follow


class FollowRepository(FollowRepositoryInterface):
    """follows 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["follows"]

    def _find(self, query: dict) -> list[Follow]:
        cursor = self._col.find(query, sort=[("created_at", -1), ("_id", -1)])
        return [FollowDocument.model_validate(raw).to_domain() for raw in cursor]

    def find_followers(self, user_id: str) -> list[Follow]:
        return self._find({"user_followed": user_id})

    def find_following(self, user_id: str) -> list[Follow]:
        return self._find({"user_following": user_id})

    def create(self, follower_id: str, followed_id: str) -> Follow:
        doc = FollowDocument.from_domain(
            Follow(
                user_following=follower_id,
                user_followed=followed_id,
                created_at=utc_now(),
            )
        )
        key = {"user_following": follower_id, "user_followed": followed_id}
        self._col.update_one(key, {"$setOnInsert": doc.to_mongo_record()}, upsert=True)
        found = self._col.find_one(key)
        assert found is not None
        return FollowDocument.model_validate(found).to_domain()

    def delete(self, follower_id: str, followed_id: str) -> bool:
        result = self._col.delete_one(
            {"user_following": follower_id, "user_followed": followed_id}
        )
        return result.deleted_count > 0
