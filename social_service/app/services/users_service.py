from __future__ import annotations

from fastapi import Depends
from pymongo.errors import DuplicateKeyError

from common.models.user import User, UserCreateInput, UserUpdateInput
from common.types.datetime import utc_now

from ..exceptions import BadRequest, Forbidden, NotFound
from ..models.requester import Requester
from ..repositories.factories import get_user_repository
from ..repositories.interfaces import UserRepositoryInterface


class UsersService:
    """유저 생성/조회/수정 비즈니스 로직.

    - 삭제는 연관 도큐먼트 정리가 필요하므로 CascadeService 가 담당한다.
    - Repository(UserRepositoryInterface)에만 의존하고, Mongo 세부 구현은 알지 않는다.
    """

    def __init__(self, user_repo: UserRepositoryInterface) -> None:
        self._user_repo = user_repo

    def list_users(
        self, requester: Requester, page: int, page_size: int
    ) -> tuple[list[User], int]:
        if not requester.is_admin:
            raise Forbidden("only an admin can list all users")
        return self._user_repo.list(page, page_size)

    def search_users(
        self,
        requester: Requester,
        username: str | None = None,
        email: str | None = None,
    ) -> list[User]:
        """username 우선, 없으면 email 로 유저를 찾는다. (관리자 전용)"""

        if not requester.is_admin:
            raise Forbidden("only an admin can search users")
        if username:
            return self._user_repo.find_by_username(username)
        if email:
            return self._user_repo.find_by_email(email)
        raise BadRequest("username or email query is required")

    def get_user(self, requester: Requester, user_id: str) -> User:
        user = self._user_repo.find_by_id(requester.resolve(user_id))
        if user is None:
            raise NotFound("user not found")
        return user

    def create_user(
        self, input_model: UserCreateInput, requester: Requester | None = None
    ) -> User:
        """새 유저를 만든다.

        가입 흐름에서는 요청자가 없으므로 requester 는 선택이다. 다만 관리자 계정은
        관리자만 만들 수 있다.
        """

        if input_model.admin and (requester is None or not requester.is_admin):
            raise Forbidden("only an admin can create an admin user")

        if self._user_repo.find_by_username(input_model.username):
            raise BadRequest("username already taken")

        now = utc_now()
        user = User(
            username=input_model.username,
            email=input_model.email,
            first_name=input_model.first_name,
            last_name=input_model.last_name,
            profile_photo=input_model.profile_photo,
            header_image=input_model.header_image,
            biography=input_model.biography,
            date_of_birth=input_model.date_of_birth,
            location=input_model.location,
            account_type=input_model.account_type,
            marital_status=input_model.marital_status,
            admin=input_model.admin,
            joined=now,
            created_at=now,
            updated_at=now,
        )
        try:
            return self._user_repo.insert(user)
        except DuplicateKeyError as exc:
            # find_by_username 과 insert 사이에 같은 username 이 먼저 생성된 경우
            raise BadRequest("username already taken") from exc

    def update_user(
        self, requester: Requester, user_id: str, input_model: UserUpdateInput
    ) -> User:
        user_id = requester.resolve(user_id)
        if not requester.can_act_for(user_id):
            raise Forbidden("only the user or an admin can update this user")
        if input_model.admin is not None and not requester.is_admin:
            raise Forbidden("only an admin can change the admin flag")

        updates = input_model.to_updates()
        if not updates:
            return self.get_user(requester, user_id)

        updated = self._user_repo.update_fields(user_id, updates)
        if updated is None:
            raise NotFound("user not found")
        return updated


def get_users_service(
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
) -> UsersService:
    """FastAPI DI용 UsersService 팩토리."""

    return UsersService(user_repo)
