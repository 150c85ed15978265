from __future__ import annotations

from fastapi import Depends

from common.types.datetime import utc_now

from ..exceptions import Forbidden, NotFound
from ..models.requester import Requester
from ..models.tuit import Tuit
from ..repositories.factories import get_tuit_repository, get_user_repository
from ..repositories.interfaces import TuitRepositoryInterface, UserRepositoryInterface


class TuitsService:
    """tuit 작성/조회/수정 비즈니스 로직. 삭제는 CascadeService 가 담당한다."""

    def __init__(
        self,
        tuit_repo: TuitRepositoryInterface,
        user_repo: UserRepositoryInterface,
    ) -> None:
        self._tuit_repo = tuit_repo
        self._user_repo = user_repo

    def list_tuits(self, page: int, page_size: int) -> tuple[list[Tuit], int]:
        return self._tuit_repo.list(page, page_size)

    def get_tuit(self, tuit_id: str) -> Tuit:
        tuit = self._tuit_repo.find_by_id(tuit_id)
        if tuit is None:
            raise NotFound("tuit not found")
        return tuit

    def list_by_author(self, requester: Requester, user_id: str) -> list[Tuit]:
        return self._tuit_repo.find_by_author(requester.resolve(user_id))

    def create_tuit(self, requester: Requester, user_id: str, text: str) -> Tuit:
        """user_id 를 작성자로 하는 tuit 을 만든다. 작성자는 존재해야 한다."""

        user_id = requester.resolve(user_id)
        if not requester.can_act_for(user_id):
            raise Forbidden("only the user or an admin can post as this user")
        author = self._user_repo.find_by_id(user_id)
        if author is None or author.id is None:
            raise NotFound("user not found")

        now = utc_now()
        tuit = Tuit(
            tuit=text,
            posted_by=author.id,
            posted_on=now,
            created_at=now,
            updated_at=now,
        )
        return self._tuit_repo.insert(tuit)

    def update_tuit(self, requester: Requester, tuit_id: str, text: str) -> Tuit:
        tuit = self.get_tuit(tuit_id)
        if not requester.can_act_for(tuit.posted_by):
            raise Forbidden("only the author or an admin can update this tuit")

        updated = self._tuit_repo.update_text(tuit.id or tuit_id, text)
        if updated is None:
            raise NotFound("tuit not found")
        return updated


def get_tuits_service(
    tuit_repo: TuitRepositoryInterface = Depends(get_tuit_repository),
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
) -> TuitsService:
    """FastAPI DI용 TuitsService 팩토리."""

    return TuitsService(tuit_repo=tuit_repo, user_repo=user_repo)
