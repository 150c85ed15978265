from __future__ import annotations

from pymongo.database import Database

from common.types.datetime import utc_now

from .documents.like_document import LikeDocument
from .interfaces import LikeRepositoryInterface
from ..models.like import Like


class LikeRepository(LikeRepositoryInterface):
    """likes 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["likes"]

    def _find(self, query: dict) -> list[Like]:
        cursor = self._col.find(query, sort=[("created_at", -1), ("_id", -1)])
        return [LikeDocument.model_validate(raw).to_domain() for raw in cursor]

    def find_all_by_user(self, user_id: str) -> list[Like]:
        return self._find({"liked_by": user_id})

    def find_all_by_tuit(self, tuit_id: str) -> list[Like]:
        return self._find({"tuit": tuit_id})

    def create(self, user_id: str, tuit_id: str) -> Like:
        doc = LikeDocument.from_domain(
            Like(liked_by=user_id, tuit=tuit_id, created_at=utc_now())
        )
        key = {"liked_by": user_id, "tuit": tuit_id}
        self._col.update_one(key, {"$setOnInsert": doc.to_mongo_record()}, upsert=True)
        found = self._col.find_one(key)
        assert found is not None
        return LikeDocument.model_validate(found).to_domain()

    def delete(self, tuit_id: str, user_id: str) -> bool:
        result = self._col.delete_one({"liked_by": user_id, "tuit": tuit_id})
        return result.deleted_count > 0

    def delete_by_tuit(self, tuit_id: str) -> int:
        result = self._col.delete_many({"tuit": tuit_id})
        return result.deleted_count

    def delete_by_user(self, user_id: str) -> int:
        result = self._col.delete_many({"liked_by": user_id})
        return result.deleted_count
