from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from common.models.user import AccountType, Location, MaritalStatus, User
from common.types.datetime import UtcDateTime


class UserCreateRequest(BaseModel):
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


class UserUpdateRequest(BaseModel):
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


class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    first_name: str | None
    last_name: str | None
    profile_photo: str | None
    header_image: str | None
    biography: str | None
    date_of_birth: UtcDateTime | None
    location: Location | None
    account_type: AccountType
    marital_status: MaritalStatus
    admin: bool
    joined: UtcDateTime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id or "",
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            profile_photo=user.profile_photo,
            header_image=user.header_image,
            biography=user.biography,
            date_of_birth=user.date_of_birth,
            location=user.location,
            account_type=user.account_type,
            marital_status=user.marital_status,
            admin=user.admin,
            joined=user.joined,
        )
