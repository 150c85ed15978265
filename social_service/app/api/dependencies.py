"""FastAPI dependencies for injection."""

from __future__ import annotations

from fastapi import Depends, Request

from ..config import DEFAULT_REQUESTER_HEADER
from ..exceptions import Unauthorized
from ..models.requester import Requester
from ..repositories.factories import get_user_repository
from ..repositories.interfaces import UserRepositoryInterface


def _requester_header(request: Request) -> str:
    config = getattr(request.app.state, "config", None)
    return config.requester_header if config is not None else DEFAULT_REQUESTER_HEADER


def get_optional_requester(
    request: Request,
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
) -> Requester | None:
    """요청자 헤더가 없으면 None, 있으면 Requester 를 반환한다.

    헤더가 있는데 해당 유저가 없으면 Unauthorized 다. (대체 id 로 진행하지 않는다.)
    """

    user_id = request.headers.get(_requester_header(request), "").strip()
    if not user_id:
        return None

    user = user_repo.find_by_id(user_id)
    if user is None or user.id is None:
        raise Unauthorized("unknown requester")
    return Requester(user_id=user.id, is_admin=user.admin)


def get_requester(
    requester: Requester | None = Depends(get_optional_requester),
) -> Requester:
    """인증된 요청자가 반드시 필요한 엔드포인트용 의존성."""

    if requester is None:
        raise Unauthorized("requester header is required")
    return requester
