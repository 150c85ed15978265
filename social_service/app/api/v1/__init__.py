from fastapi import APIRouter

from .bookmarks import router as bookmarks_router
from .follows import router as follows_router
from .likes import router as likes_router
from .tuits import router as tuits_router
from .users import router as users_router

api_router = APIRouter()
# /users/{id}/... 하위 관계 라우터는 /users/{id} 보다 깊은 경로라 순서와 무관하게 매칭된다.
api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(bookmarks_router, prefix="/users", tags=["bookmarks"])
api_router.include_router(follows_router, prefix="/users", tags=["follows"])
api_router.include_router(
    tuits_router, tags=["tuits"]
)  # /tuits 와 /users/{id}/tuits 를 함께 정의하므로 prefix 없음
api_router.include_router(likes_router, tags=["likes"])
