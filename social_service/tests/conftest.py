from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import pytest
from fastapi.testclient import TestClient

from social_service.app.config import AppConfig
from social_service.app.main import create_app
from social_service.app.repositories.factories import (
    get_bookmark_repository,
    get_follow_repository,
    get_like_repository,
    get_tuit_repository,
    get_user_repository,
)
from social_service.app.services.bookmarks_service import BookmarksService
from social_service.app.services.cascade_service import CascadeService
from social_service.app.services.locks import KeyedLock
from social_service.tests.fakes import (
    FakeBookmarkRepository,
    FakeFollowRepository,
    FakeLikeRepository,
    FakeStore,
    FakeTuitRepository,
    FakeUserRepository,
)


@dataclass
class FakeRepositories:
    users: FakeUserRepository
    tuits: FakeTuitRepository
    bookmarks: FakeBookmarkRepository
    likes: FakeLikeRepository
    follows: FakeFollowRepository


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def repos(store: FakeStore) -> FakeRepositories:
    return FakeRepositories(
        users=FakeUserRepository(store),
        tuits=FakeTuitRepository(store),
        bookmarks=FakeBookmarkRepository(store),
        likes=FakeLikeRepository(store),
        follows=FakeFollowRepository(store),
    )


@pytest.fixture
def cascade_service(repos: FakeRepositories) -> CascadeService:
    return CascadeService(
        user_repo=repos.users,
        tuit_repo=repos.tuits,
        bookmark_repo=repos.bookmarks,
        like_repo=repos.likes,
        follow_repo=repos.follows,
        locks=KeyedLock(),
    )


@pytest.fixture
def bookmarks_service(repos: FakeRepositories) -> BookmarksService:
    return BookmarksService(
        bookmark_repo=repos.bookmarks,
        user_repo=repos.users,
        tuit_repo=repos.tuits,
        locks=KeyedLock(),
    )


@pytest.fixture
def client(repos: FakeRepositories) -> Iterator[TestClient]:
    """Mongo 대신 FakeStore 를 쓰도록 repository 팩토리를 교체한 TestClient."""

    app = create_app(AppConfig(port=0, requester_header="X-User-Id"))
    app.dependency_overrides[get_user_repository] = lambda: repos.users
    app.dependency_overrides[get_tuit_repository] = lambda: repos.tuits
    app.dependency_overrides[get_bookmark_repository] = lambda: repos.bookmarks
    app.dependency_overrides[get_like_repository] = lambda: repos.likes
    app.dependency_overrides[get_follow_repository] = lambda: repos.follows

    with TestClient(app) as test_client:
        yield test_client
