from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_requester
from ..schemas.cascade import TuitDeleteResponse
from ..schemas.common import PaginatedResponse
from ..schemas.tuits import TuitCreateRequest, TuitResponse, TuitUpdateRequest
from ...models.requester import Requester
from ...services.cascade_service import CascadeService, get_cascade_service
from ...services.tuits_service import TuitsService, get_tuits_service


router = APIRouter()


@router.get(
    "/tuits",
    response_model=PaginatedResponse[TuitResponse],
    summary="tuit 목록 조회",
)
def list_tuits(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    _: Requester = Depends(get_requester),
    service: TuitsService = Depends(get_tuits_service),
) -> PaginatedResponse[TuitResponse]:
    tuits, total = service.list_tuits(page, page_size)
    return PaginatedResponse(
        items=[TuitResponse.from_domain(t) for t in tuits],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/tuits/{tuit_id}", response_model=TuitResponse, summary="tuit 조회")
def get_tuit(
    tuit_id: str,
    _: Requester = Depends(get_requester),
    service: TuitsService = Depends(get_tuits_service),
) -> TuitResponse:
    return TuitResponse.from_domain(service.get_tuit(tuit_id))


@router.get(
    "/users/{user_id}/tuits",
    response_model=list[TuitResponse],
    summary="유저가 작성한 tuit 목록",
)
def list_tuits_by_user(
    user_id: str,
    requester: Requester = Depends(get_requester),
    service: TuitsService = Depends(get_tuits_service),
) -> list[TuitResponse]:
    return [TuitResponse.from_domain(t) for t in service.list_by_author(requester, user_id)]


@router.post(
    "/users/{user_id}/tuits",
    response_model=TuitResponse,
    status_code=201,
    summary="tuit 작성",
)
def create_tuit(
    user_id: str,
    body: TuitCreateRequest,
    requester: Requester = Depends(get_requester),
    service: TuitsService = Depends(get_tuits_service),
) -> TuitResponse:
    return TuitResponse.from_domain(service.create_tuit(requester, user_id, body.tuit))


@router.put("/tuits/{tuit_id}", response_model=TuitResponse, summary="tuit 수정")
def update_tuit(
    tuit_id: str,
    body: TuitUpdateRequest,
    requester: Requester = Depends(get_requester),
    service: TuitsService = Depends(get_tuits_service),
) -> TuitResponse:
    return TuitResponse.from_domain(service.update_tuit(requester, tuit_id, body.tuit))


@router.delete(
    "/tuits/{tuit_id}",
    response_model=TuitDeleteResponse,
    summary="tuit 및 북마크/좋아요 cascade 삭제",
)
def delete_tuit(
    tuit_id: str,
    requester: Requester = Depends(get_requester),
    service: CascadeService = Depends(get_cascade_service),
) -> TuitDeleteResponse:
    return TuitDeleteResponse.from_domain(service.delete_tuit(requester, tuit_id))


@router.delete(
    "/tuits/{user_id}/delete",
    response_model=TuitDeleteResponse,
    summary="유저가 작성한 모든 tuit cascade 삭제",
)
def delete_tuits_by_user(
    user_id: str,
    requester: Requester = Depends(get_requester),
    service: CascadeService = Depends(get_cascade_service),
) -> TuitDeleteResponse:
    return TuitDeleteResponse.from_domain(
        service.delete_tuits_by_author(requester, user_id)
    )
