from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from common.models.user import UserCreateInput, UserUpdateInput

from ..dependencies import get_optional_requester, get_requester
from ..schemas.cascade import UserDeleteResponse
from ..schemas.common import PaginatedResponse
from ..schemas.users import UserCreateRequest, UserResponse, UserUpdateRequest
from ...models.requester import Requester
from ...services.cascade_service import CascadeService, get_cascade_service
from ...services.users_service import UsersService, get_users_service


router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[UserResponse],
    summary="유저 목록 조회 (관리자)",
)
def list_users(
    page: int = Query(1, ge=1, description="조회할 페이지 (1부터 시작)"),
    page_size: int = Query(20, ge=1, le=100, description="페이지당 아이템 개수 (1~100)"),
    requester: Requester = Depends(get_requester),
    service: UsersService = Depends(get_users_service),
) -> PaginatedResponse[UserResponse]:
    users, total = service.list_users(requester, page, page_size)
    return PaginatedResponse(
        items=[UserResponse.from_domain(u) for u in users],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get(
    "/search",
    response_model=list[UserResponse],
    summary="username 또는 email 로 유저 검색 (관리자)",
)
def search_users(
    username: str | None = Query(None),
    email: str | None = Query(None),
    requester: Requester = Depends(get_requester),
    service: UsersService = Depends(get_users_service),
) -> list[UserResponse]:
    users = service.search_users(requester, username=username, email=email)
    return [UserResponse.from_domain(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse, summary="유저 조회")
def get_user(
    user_id: str,
    requester: Requester = Depends(get_requester),
    service: UsersService = Depends(get_users_service),
) -> UserResponse:
    return UserResponse.from_domain(service.get_user(requester, user_id))


@router.post("", response_model=UserResponse, status_code=201, summary="유저 생성")
def create_user(
    body: UserCreateRequest,
    requester: Requester | None = Depends(get_optional_requester),
    service: UsersService = Depends(get_users_service),
) -> UserResponse:
    user = service.create_user(UserCreateInput(**body.model_dump()), requester)
    return UserResponse.from_domain(user)


@router.put("/{user_id}", response_model=UserResponse, summary="유저 프로필 수정")
def update_user(
    user_id: str,
    body: UserUpdateRequest,
    requester: Requester = Depends(get_requester),
    service: UsersService = Depends(get_users_service),
) -> UserResponse:
    user = service.update_user(
        requester, user_id, UserUpdateInput(**body.model_dump(exclude_none=True))
    )
    return UserResponse.from_domain(user)


@router.delete(
    "/{user_id}",
    response_model=UserDeleteResponse,
    summary="유저 및 연관 데이터 cascade 삭제",
)
def delete_user(
    user_id: str,
    requester: Requester = Depends(get_requester),
    service: CascadeService = Depends(get_cascade_service),
) -> UserDeleteResponse:
    return UserDeleteResponse.from_domain(service.delete_user(requester, user_id))


@router.delete(
    "/username/{username}/delete",
    response_model=list[UserDeleteResponse],
    summary="username 이 일치하는 유저 cascade 삭제 (관리자)",
)
def delete_users_by_username(
    username: str,
    requester: Requester = Depends(get_requester),
    service: CascadeService = Depends(get_cascade_service),
) -> list[UserDeleteResponse]:
    results = service.delete_users_by_username(requester, username)
    return [UserDeleteResponse.from_domain(r) for r in results]
