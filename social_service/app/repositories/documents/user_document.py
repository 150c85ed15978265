from __future__ import annotations

from common.models.user import AccountType, Location, MaritalStatus, User
from common.mongo.types import BaseDocument, MongoDateTime, from_object_id


class UserDocument(BaseDocument):
    """MongoDB users 컬렉션 도큐먼트 모델."""

    username: str
    email: str = ""
    first_name: str | None = None
    last_name: str | None = None
    profile_photo: str | None = None
    header_image: str | None = None
    biography: str | None = None
    date_of_birth: MongoDateTime | None = None
    location: Location | None = None
    account_type: AccountType = AccountType.PERSONAL
    marital_status: MaritalStatus = MaritalStatus.SINGLE
    admin: bool = False
    joined: MongoDateTime

    @classmethod
    def from_domain(cls, user: User) -> "UserDocument":
        # 새 유저는 id 가 없으므로 _id 를 비워 두고 Mongo 가 생성하게 한다.
        data = user.model_dump(exclude={"id"}, mode="python")
        if user.id is not None:
            data["_id"] = user.id
        return cls.model_validate(data)

    def to_mongo_record(self) -> dict:
        record = super().to_mongo_record()
        # Enum 은 문자열 값으로 저장한다.
        record["account_type"] = self.account_type.value
        record["marital_status"] = self.marital_status.value
        return record

    def to_domain(self) -> User:
        return User(
            id=from_object_id(self.id),
            username=self.username,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            profile_photo=self.profile_photo,
            header_image=self.header_image,
            biography=self.biography,
            date_of_birth=self.date_of_birth,
            location=self.location,
            account_type=self.account_type,
            marital_status=self.marital_status,
            admin=self.admin,
            joined=self.joined,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
