from __future__ import annotations

import re
from typing import Any

from pymongo import ReturnDocument
from pymongo.database import Database

from common.models.user import User
from common.mongo.types import try_object_id
from common.types.datetime import utc_now

from .documents.user_document import UserDocument
from .interfaces import UserRepositoryInterface


class UserRepository(UserRepositoryInterface):
    """users 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["users"]

    @staticmethod
    def _from_document(doc: dict) -> User:
        return UserDocument.model_validate(doc).to_domain()

    def find_by_id(self, user_id: str) -> User | None:
        oid = try_object_id(user_id)
        if oid is None:
            return None
        doc = self._col.find_one({"_id": oid})
        if not doc:
            return None
        return self._from_document(doc)

    def find_by_ids(self, user_ids: list[str]) -> list[User]:
        oids = [oid for oid in (try_object_id(v) for v in user_ids) if oid is not None]
        if not oids:
            return []

        by_id: dict[str, User] = {}
        for raw in self._col.find({"_id": {"$in": oids}}):
            user = self._from_document(raw)
            by_id[str(user.id)] = user
        return [by_id[v] for v in user_ids if v in by_id]

    def find_by_username(self, username: str) -> list[User]:
        cursor = self._col.find({"username": username})
        return [self._from_document(raw) for raw in cursor]

    def find_by_email(self, email: str) -> list[User]:
        # 이메일은 대소문자를 구분하지 않고 정확히 일치하는 것만 찾는다.
        pattern = re.compile(f"^{re.escape(email)}$", re.IGNORECASE)
        cursor = self._col.find({"email": pattern})
        return [self._from_document(raw) for raw in cursor]

    def insert(self, user: User) -> User:
        now = utc_now()
        user.created_at = now
        user.updated_at = now

        payload = UserDocument.from_domain(user).to_mongo_record()
        result = self._col.insert_one(payload)
        payload["_id"] = result.inserted_id
        return self._from_document(payload)

    def update_fields(self, user_id: str, updates: dict[str, Any]) -> User | None:
        oid = try_object_id(user_id)
        if oid is None:
            return None
        result = self._col.find_one_and_update(
            {"_id": oid},
            {"$set": {**updates, "updated_at": utc_now()}},
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            return None
        return self._from_document(result)

    def delete_by_id(self, user_id: str) -> bool:
        """유저 도큐먼트만 삭제한다. 연관 도큐먼트 정리는 CascadeService 의 책임이다."""

        oid = try_object_id(user_id)
        if oid is None:
            return False
        result = self._col.delete_one({"_id": oid})
        return result.deleted_count > 0

    def list(self, page: int, page_size: int) -> tuple[list[User], int]:
        if page <= 0:
            page = 1
        if page_size <= 0 or page_size > 100:
            page_size = 20

        total = self._col.count_documents({})
        cursor = self._col.find(
            {},
            sort=[("joined", -1), ("_id", -1)],
            skip=(page - 1) * page_size,
            limit=page_size,
        )
        return [self._from_document(raw) for raw in cursor], total
