from __future__ import annotations

from dataclasses import dataclass

from common.mongo.types import canonical_id


ME = "me"


@dataclass(frozen=True, slots=True)
class Requester:
    """요청을 보낸(인증된) 유저.

    세션 같은 암묵적 상태 대신 서비스 메서드에 명시적으로 전달된다.
    """

    user_id: str
    is_admin: bool = False

    def can_act_for(self, user_id: str) -> bool:
        """user_id 소유의 리소스를 변경할 수 있는지 (본인 또는 관리자)."""
        return self.is_admin or canonical_id(self.user_id) == canonical_id(user_id)

    def resolve(self, user_id: str) -> str:
        """경로 파라미터의 유저 id 를 저장 형태로 바꾼다. "me" 는 요청자 id 가 된다."""
        return canonical_id(self.user_id if user_id == ME else user_id)
