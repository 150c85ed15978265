from __future__ import annotations

from fastapi import APIRouter, Depends

from ..dependencies import get_requester
from ..schemas.common import MessageResponse
from ..schemas.relations import BookmarkResponse, BookmarkToggleResponse
from ..schemas.tuits import TuitResponse
from ...models.requester import Requester
from ...services.bookmarks_service import BookmarksService, get_bookmarks_service


router = APIRouter()


@router.get(
    "/{user_id}/bookmarks",
    response_model=list[TuitResponse],
    summary="유저가 북마크한 tuit 목록",
)
def list_bookmarks(
    user_id: str,
    requester: Requester = Depends(get_requester),
    service: BookmarksService = Depends(get_bookmarks_service),
) -> list[TuitResponse]:
    tuits = service.list_bookmarked_tuits(requester, user_id)
    return [TuitResponse.from_domain(t) for t in tuits]


@router.post(
    "/{user_id}/bookmarks/{tuit_id}",
    response_model=BookmarkResponse,
    summary="tuit 북마크",
)
def add_bookmark(
    user_id: str,
    tuit_id: str,
    requester: Requester = Depends(get_requester),
    service: BookmarksService = Depends(get_bookmarks_service),
) -> BookmarkResponse:
    return BookmarkResponse.from_domain(service.bookmark(requester, user_id, tuit_id))


@router.put(
    "/{user_id}/bookmarks/{tuit_id}",
    response_model=BookmarkToggleResponse,
    summary="tuit 북마크 토글",
)
def toggle_bookmark(
    user_id: str,
    tuit_id: str,
    requester: Requester = Depends(get_requester),
    service: BookmarksService = Depends(get_bookmarks_service),
) -> BookmarkToggleResponse:
    return BookmarkToggleResponse.from_domain(service.toggle(requester, user_id, tuit_id))


@router.delete(
    "/{user_id}/bookmarks/{tuit_id}",
    response_model=MessageResponse,
    summary="tuit 북마크 삭제",
)
def remove_bookmark(
    user_id: str,
    tuit_id: str,
    requester: Requester = Depends(get_requester),
    service: BookmarksService = Depends(get_bookmarks_service),
) -> MessageResponse:
    service.unbookmark(requester, user_id, tuit_id)
    return MessageResponse(message="bookmark_deleted")
