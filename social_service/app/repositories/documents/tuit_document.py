from __future__ import annotations

from common.mongo.types import BaseDocument, MongoDateTime, from_object_id

from ...models.tuit import Tuit


class TuitDocument(BaseDocument):
    """MongoDB tuits 컬렉션 도큐먼트 모델.

    posted_by 는 users 컬렉션 _id 의 문자열 표현이다.
    """

    tuit: str
    posted_by: str
    posted_on: MongoDateTime

    @classmethod
    def from_domain(cls, tuit: Tuit) -> "TuitDocument":
        data = tuit.model_dump(exclude={"id"})
        if tuit.id is not None:
            data["_id"] = tuit.id
        return cls.model_validate(data)

    def to_domain(self) -> Tuit:
        return Tuit(
            id=from_object_id(self.id),
            tuit=self.tuit,
            posted_by=self.posted_by,
            posted_on=self.posted_on,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
