from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class AccountType(str, Enum):
    PERSONAL = "PERSONAL"
    ACADEMIC = "ACADEMIC"
    PROFESSIONAL = "PROFESSIONAL"


class MaritalStatus(str, Enum):
    MARRIED = "MARRIED"
    SINGLE = "SINGLE"
    WIDOWED = "WIDOWED"


class Location(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class User(BaseModel):
    """유저 도메인 모델.

    - Mongo users 컬렉션과 1:1로 매핑되는 공용 모델이다.
    - 식별자는 Mongo ObjectId 의 문자열 표현(id)이며, username 은 유니크하다.
    - 인증 정보(비밀번호 등)는 Gateway 의 identity provider 가 관리하므로 여기에는 없다.
    """

    id: str | None = None
    username: str
    email: str = ""
    first_name: str | None = None
    last_name: str | None = None
    profile_photo: str | None = None
    header_image: str | None = None
    biography: str | None = None
    date_of_birth: datetime | None = None
    location: Location | None = None
    account_type: AccountType = AccountType.PERSONAL
    marital_status: MaritalStatus = MaritalStatus.SINGLE
    admin: bool = False
    joined: datetime
    created_at: datetime
    updated_at: datetime


class UserCreateInput(BaseModel):
    """유저 생성 입력 모델."""

    username: str = Field(min_length=1)
    email: str = ""
    first_name: str | None = None
    last_name: str | None = None
    profile_photo: str | None = None
    header_image: str | None = None
    biography: str | None = None
    date_of_birth: datetime | None = None
    location: Location | None = None
    account_type: AccountType = AccountType.PERSONAL
    marital_status: MaritalStatus = MaritalStatus.SINGLE
    admin: bool = False


class UserUpdateInput(BaseModel):
    """유저 프로필 부분 수정 입력 모델.

    - None 인 필드는 변경하지 않는다.
    - admin 플래그는 관리자만 바꿀 수 있으며, 그 판단은 UsersService 가 한다.
    """

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_photo: str | None = None
    header_image: str | None = None
    biography: str | None = None
    date_of_birth: datetime | None = None
    location: Location | None = None
    account_type: AccountType | None = None
    marital_status: MaritalStatus | None = None
    admin: bool | None = None

    def to_updates(self) -> dict[str, object]:
        updates = self.model_dump(exclude_none=True, mode="json")
        if self.date_of_birth is not None:
            # 생년월일은 문자열이 아니라 날짜 타입으로 저장한다.
            updates["date_of_birth"] = self.date_of_birth
        return updates
