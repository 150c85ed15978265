from __future__ import annotations

import logging
import threading
from typing import Optional

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .config import get_mongo_db_name, get_mongo_timeout_ms, get_mongo_uri


logger = logging.getLogger(__name__)


_client: Optional[MongoClient] = None
_db: Optional[Database] = None
_lock = threading.Lock()


def _select_database(client: MongoClient) -> Database:
    # MONGO_DB_NAME 이 우선이고, 없으면 URI 경로의 DB 를 쓴다.
    db_name = get_mongo_db_name()
    if db_name:
        return client[db_name]
    try:
        return client.get_default_database()
    except Exception as exc:  # noqa: BLE001
        raise RuntimeError(
            "set MONGO_DB_NAME or include a database in MONGO_URI (mongodb://.../tuiter)",
        ) from exc


def _connect() -> tuple[MongoClient, Database]:
    timeout_ms = get_mongo_timeout_ms()
    client: MongoClient = MongoClient(
        get_mongo_uri(),
        serverSelectionTimeoutMS=timeout_ms,
        socketTimeoutMS=timeout_ms,
    )
    try:
        client.admin.command("ping")
        db = _select_database(client)
        ensure_indexes(db)
    except PyMongoError as exc:
        client.close()
        logger.error("MongoDB startup failed: %s", exc)
        raise RuntimeError(f"failed to connect to MongoDB: {exc}") from exc
    except RuntimeError:
        client.close()
        raise
    return client, db


def get_client() -> MongoClient:
    """프로세스 전역 MongoClient.

    첫 호출에서 연결 확인(ping)과 인덱스 생성까지 끝낸다. 여러 스레드가 동시에
    첫 요청을 처리해도 연결은 한 번만 만든다.
    """

    global _client, _db

    if _client is not None:
        return _client

    with _lock:
        if _client is None:
            _client, _db = _connect()
            logger.info("MongoDB connected (db=%s)", _db.name)
    return _client


def get_database() -> Database:
    """repository 팩토리가 주입받는 기본 Database."""

    if _db is None:
        get_client()
    assert _db is not None
    return _db


def close_client() -> None:
    global _client, _db

    with _lock:
        if _client is not None:
            _client.close()
        _client = None
        _db = None


def ensure_indexes(db: Database) -> None:
    """필수 인덱스를 생성한다.

    조인 컬렉션(bookmarks/likes/follows)은 (참조1, 참조2) 유니크 인덱스로
    "쌍마다 최대 1건" 을 DB 레벨에서 보장한다. cascade 삭제에서 쓰는 역방향
    조회용 단일 필드 인덱스도 함께 만든다. 중복 생성해도 MongoDB 가 처리하므로
    idempotent 하다.
    """

    users = db["users"]
    users.create_index([("username", ASCENDING)], name="uniq_username", unique=True)
    users.create_index([("email", ASCENDING)], name="idx_email")

    tuits = db["tuits"]
    tuits.create_index(
        [("posted_by", ASCENDING), ("posted_on", DESCENDING)],
        name="idx_posted_by_posted_on",
    )
    tuits.create_index(
        [("posted_on", DESCENDING), ("_id", DESCENDING)],
        name="idx_posted_on_id_desc",
    )

    bookmarks = db["bookmarks"]
    bookmarks.create_index(
        [("bookmarked_by", ASCENDING), ("bookmarked_tuit", ASCENDING)],
        name="uniq_bookmarked_by_tuit",
        unique=True,
    )
    bookmarks.create_index([("bookmarked_tuit", ASCENDING)], name="idx_bookmarked_tuit")

    likes = db["likes"]
    likes.create_index(
        [("liked_by", ASCENDING), ("tuit", ASCENDING)],
        name="uniq_liked_by_tuit",
        unique=True,
    )
    likes.create_index([("tuit", ASCENDING)], name="idx_tuit")

    follows = db["follows"]
    follows.create_index(
        [("user_following", ASCENDING), ("user_followed", ASCENDING)],
        name="uniq_following_followed",
        unique=True,
    )
    follows.create_index([("user_followed", ASCENDING)], name="idx_user_followed")
