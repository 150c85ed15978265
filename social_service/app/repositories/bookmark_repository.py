from __future__ import annotations

from pymongo.database import Database

from common.types.datetime import utc_now

from .documents.bookmark_document import BookmarkDocument
from .interfaces import BookmarkRepositoryInterface
from ..models.bookmark import Bookmark


class BookmarkRepository(BookmarkRepositoryInterface):
    """bookmarks 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["bookmarks"]

    def find_one(self, user_id: str, tuit_id: str) -> Bookmark | None:
        found = self._col.find_one({"bookmarked_by": user_id, "bookmarked_tuit": tuit_id})
        if not found:
            return None
        return BookmarkDocument.model_validate(found).to_domain()

    def find_all_by_user(self, user_id: str) -> list[Bookmark]:
        cursor = self._col.find(
            {"bookmarked_by": user_id},
            sort=[("created_at", -1), ("_id", -1)],
        )
        return [BookmarkDocument.model_validate(raw).to_domain() for raw in cursor]

    def create(self, user_id: str, tuit_id: str) -> Bookmark:
        doc = BookmarkDocument.from_domain(
            Bookmark(bookmarked_by=user_id, bookmarked_tuit=tuit_id, created_at=utc_now())
        )
        key = {"bookmarked_by": user_id, "bookmarked_tuit": tuit_id}
        # 동시 요청이 와도 (유저, tuit) 쌍마다 1건만 남도록 upsert 로 생성한다.
        self._col.update_one(key, {"$setOnInsert": doc.to_mongo_record()}, upsert=True)
        found = self._col.find_one(key)
        assert found is not None
        return BookmarkDocument.model_validate(found).to_domain()

    def delete(self, tuit_id: str, user_id: str) -> bool:
        result = self._col.delete_one({"bookmarked_by": user_id, "bookmarked_tuit": tuit_id})
        return result.deleted_count > 0

    def delete_by_tuit(self, tuit_id: str) -> int:
        result = self._col.delete_many({"bookmarked_tuit": tuit_id})
        return result.deleted_count
