from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, ConfigDict, Field
from pydantic.functional_validators import BeforeValidator
from typing_extensions import Annotated

from common.types.datetime import as_utc


def to_object_id(value: Any) -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    if value is None:
        raise TypeError("ObjectId cannot be None")
    return ObjectId(str(value))


def try_object_id(value: Any) -> ObjectId | None:
    """경로 파라미터로 들어온 id 를 ObjectId 로 바꾼다.

    형식이 잘못된 id 는 None 을 돌려주고, repository 는 이를 "해당 도큐먼트 없음" 으로 처리한다.
    그래서 잘못된 id 로 삭제를 요청해도 400 이 아니라 404 가 된다.
    """

    try:
        return to_object_id(value)
    except (InvalidId, TypeError):
        return None


def canonical_id(value: str) -> str:
    """ObjectId 형식의 id 를 str(ObjectId) 표기(소문자 hex)로 맞춘다.

    조인 컬렉션은 참조 id 를 문자열 그대로 저장/비교하므로, 저장이나 조회, 락 키에
    쓰기 전에 반드시 이 형태로 바꿔야 한다. ObjectId 가 아닌 값은 그대로 돌려준다.
    """

    oid = try_object_id(value)
    return value if oid is None else str(oid)


def from_object_id(value: Optional[ObjectId]) -> Optional[str]:
    return None if value is None else str(value)


def _coerce_stored_datetime(value: Any) -> datetime:
    # 과거 데이터에는 ISO 문자열로 저장된 시각이 섞여 있을 수 있다.
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(str(value))
    return as_utc(value)


PyObjectId = Annotated[ObjectId, BeforeValidator(to_object_id)]
MongoDateTime = Annotated[datetime, BeforeValidator(_coerce_stored_datetime)]


class BaseDocument(BaseModel):
    """users/tuits/bookmarks/likes/follows 도큐먼트의 공통 베이스.

    `_id` 는 id 필드로 읽고, 저장할 때는 다시 `_id` 로 내보낸다.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    created_at: MongoDateTime
    updated_at: MongoDateTime

    def to_mongo_record(self) -> dict[str, Any]:
        """insert / $setOnInsert 에 넣을 dict.

        id 가 None 이면 `_id` 를 빼서 Mongo 가 ObjectId 를 생성하게 한다.
        """

        return self.model_dump(by_alias=True, exclude_none=True)
