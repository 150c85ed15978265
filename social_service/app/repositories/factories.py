from __future__ import annotations

from fastapi import Depends
from pymongo.database import Database

from common.mongo.client import get_database

from .bookmark_repository import BookmarkRepository
from .follow_repository import FollowRepository
from .interfaces import (
    BookmarkRepositoryInterface,
    FollowRepositoryInterface,
    LikeRepositoryInterface,
    TuitRepositoryInterface,
    UserRepositoryInterface,
)
from .like_repository import LikeRepository
from .tuit_repository import TuitRepository
from .user_repository import UserRepository


def get_user_repository(
    db: Database = Depends(get_database),
) -> UserRepositoryInterface:
    """FastAPI DI용 UserRepository 팩토리."""

    return UserRepository(db)


def get_tuit_repository(
    db: Database = Depends(get_database),
) -> TuitRepositoryInterface:
    """FastAPI DI용 TuitRepository 팩토리."""

    return TuitRepository(db)


def get_bookmark_repository(
    db: Database = Depends(get_database),
) -> BookmarkRepositoryInterface:
    """FastAPI DI용 BookmarkRepository 팩토리."""

    return BookmarkRepository(db)


def get_like_repository(
    db: Database = Depends(get_database),
) -> LikeRepositoryInterface:
    """FastAPI DI용 LikeRepository 팩토리."""

    return LikeRepository(db)


def get_follow_repository(
    db: Database = Depends(get_database),
) -> FollowRepositoryInterface:
    """FastAPI DI용 FollowRepository 팩토리."""

    return FollowRepository(db)
