from __future__ import annotations

from pymongo import ReturnDocument
from pymongo.database import Database

from common.mongo.types import try_object_id
from common.types.datetime import utc_now

from .documents.tuit_document import TuitDocument
from .interfaces import TuitRepositoryInterface
from ..models.tuit import Tuit


class TuitRepository(TuitRepositoryInterface):
    """tuits 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["tuits"]

    @staticmethod
    def _from_document(doc: dict) -> Tuit:
        return TuitDocument.model_validate(doc).to_domain()

    def find_by_id(self, tuit_id: str) -> Tuit | None:
        oid = try_object_id(tuit_id)
        if oid is None:
            return None
        doc = self._col.find_one({"_id": oid})
        if not doc:
            return None
        return self._from_document(doc)

    def find_by_ids(self, tuit_ids: list[str]) -> list[Tuit]:
        oids = [oid for oid in (try_object_id(v) for v in tuit_ids) if oid is not None]
        if not oids:
            return []

        by_id: dict[str, Tuit] = {}
        for raw in self._col.find({"_id": {"$in": oids}}):
            tuit = self._from_document(raw)
            by_id[str(tuit.id)] = tuit
        return [by_id[v] for v in tuit_ids if v in by_id]

    def find_by_author(self, user_id: str) -> list[Tuit]:
        cursor = self._col.find(
            {"posted_by": user_id},
            sort=[("posted_on", -1), ("_id", -1)],
        )
        return [self._from_document(raw) for raw in cursor]

    def insert(self, tuit: Tuit) -> Tuit:
        now = utc_now()
        tuit.created_at = now
        tuit.updated_at = now

        payload = TuitDocument.from_domain(tuit).to_mongo_record()
        result = self._col.insert_one(payload)
        payload["_id"] = result.inserted_id
        return self._from_document(payload)

    def update_text(self, tuit_id: str, text: str) -> Tuit | None:
        oid = try_object_id(tuit_id)
        if oid is None:
            return None
        result = self._col.find_one_and_update(
            {"_id": oid},
            {"$set": {"tuit": text, "updated_at": utc_now()}},
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            return None
        return self._from_document(result)

    def delete_by_id(self, tuit_id: str) -> bool:
        oid = try_object_id(tuit_id)
        if oid is None:
            return False
        result = self._col.delete_one({"_id": oid})
        return result.deleted_count > 0

    def delete_by_author(self, user_id: str) -> int:
        result = self._col.delete_many({"posted_by": user_id})
        return result.deleted_count

    def list(self, page: int, page_size: int) -> tuple[list[Tuit], int]:
        if page <= 0:
            page = 1
        if page_size <= 0 or page_size > 100:
            page_size = 20

        total = self._col.count_documents({})
        cursor = self._col.find(
            {},
            sort=[("posted_on", -1), ("_id", -1)],
            skip=(page - 1) * page_size,
            limit=page_size,
        )
        return [self._from_document(raw) for raw in cursor], total
