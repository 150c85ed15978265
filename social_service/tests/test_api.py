from __future__ import annotations

from fastapi.testclient import TestClient

from social_service.tests.fakes import FakeStore


def _as(user) -> dict[str, str]:
    return {"X-User-Id": user.id}


def test_health(client: TestClient) -> None:
    res = client.get("/health")

    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_missing_requester_header_is_unauthorized(
    client: TestClient, store: FakeStore
) -> None:
    user = store.add_user("alice")

    res = client.delete(f"/api/v1/users/{user.id}")

    assert res.status_code == 401
    assert user.id in store.users


def test_unknown_requester_is_unauthorized(client: TestClient) -> None:
    res = client.get(
        "/api/v1/tuits", headers={"X-User-Id": "000000000000000000000000"}
    )

    assert res.status_code == 401


def test_create_user_then_fetch_self(client: TestClient, store: FakeStore) -> None:
    res = client.post("/api/v1/users", json={"username": "new", "email": "n@x.io"})
    assert res.status_code == 201
    created = res.json()

    me = client.get("/api/v1/users/me", headers={"X-User-Id": created["id"]})

    assert me.status_code == 200
    assert me.json()["username"] == "new"


def test_delete_user_cascade_over_http(client: TestClient, store: FakeStore) -> None:
    admin = store.add_user("admin", admin=True)
    a = store.add_user("alice")
    b = store.add_user("bob")
    c = store.add_user("carol")
    store.add_follow(a, b)
    post = store.add_tuit(a)
    store.add_bookmark(b, post)
    store.add_like(c, post)

    res = client.delete(f"/api/v1/users/{a.id}", headers=_as(admin))

    assert res.status_code == 200
    body = res.json()
    assert body["user"]["id"] == a.id
    assert body["deleted"] == {"follows": 1, "bookmarks": 1, "likes": 1, "tuits": 1}
    assert store.follows == [] and store.bookmarks == [] and store.likes == []
    assert store.tuits == {}


def test_delete_user_by_stranger_is_forbidden(
    client: TestClient, store: FakeStore
) -> None:
    target = store.add_user("target")
    stranger = store.add_user("stranger")

    res = client.delete(f"/api/v1/users/{target.id}", headers=_as(stranger))

    assert res.status_code == 403
    assert target.id in store.users


def test_delete_missing_user_is_not_found(client: TestClient, store: FakeStore) -> None:
    admin = store.add_user("admin", admin=True)

    res = client.delete("/api/v1/users/000000000000000000000000", headers=_as(admin))

    assert res.status_code == 404


def test_cascade_store_failure_is_service_unavailable(
    client: TestClient, store: FakeStore
) -> None:
    user = store.add_user("target")
    other = store.add_user("other")
    post = store.add_tuit(user)
    store.add_like(other, post)
    store.fail_on.add("like.delete_by_tuit")

    res = client.delete("/api/v1/users/me", headers=_as(user))

    assert res.status_code == 503
    assert "tuit_likes" in res.json()["detail"]
    assert post.id in store.tuits


def test_read_store_failure_is_service_unavailable(
    client: TestClient, store: FakeStore
) -> None:
    user = store.add_user("reader")
    store.fail_on.add("tuit.list")

    res = client.get("/api/v1/tuits", headers=_as(user))

    assert res.status_code == 503
    assert res.json() == {"detail": "store unavailable"}


def test_delete_single_tuit_over_http(client: TestClient, store: FakeStore) -> None:
    author = store.add_user("author")
    p1 = store.add_tuit(author)
    p2 = store.add_tuit(author)

    res = client.delete(f"/api/v1/tuits/{p1.id}", headers=_as(author))

    assert res.status_code == 200
    assert res.json()["tuit"]["id"] == p1.id
    assert set(store.tuits) == {p2.id}


def test_delete_all_tuits_by_author_over_http(
    client: TestClient, store: FakeStore
) -> None:
    author = store.add_user("author")
    store.add_tuit(author)
    store.add_tuit(author)

    res = client.delete("/api/v1/tuits/me/delete", headers=_as(author))

    assert res.status_code == 200
    assert res.json()["deleted"]["tuits"] == 2
    assert res.json()["tuit"] is None
    assert store.tuits == {}


def test_toggle_bookmark_over_http(client: TestClient, store: FakeStore) -> None:
    user = store.add_user("reader")
    post = store.add_tuit(user)
    url = f"/api/v1/users/me/bookmarks/{post.id}"

    first = client.put(url, headers=_as(user))
    second = client.put(url, headers=_as(user))

    assert first.json()["bookmarked"] is True
    assert second.json() == {"bookmarked": False, "bookmark": None}
    assert store.bookmarks == []


def test_follow_self_over_http_is_bad_request(
    client: TestClient, store: FakeStore
) -> None:
    user = store.add_user("alice")

    res = client.post(f"/api/v1/users/me/follows/{user.id}", headers=_as(user))

    assert res.status_code == 400


def test_like_then_unlike_over_http(client: TestClient, store: FakeStore) -> None:
    user = store.add_user("alice")
    post = store.add_tuit(user)

    liked = client.post(f"/api/v1/users/me/likes/{post.id}", headers=_as(user))
    likers = client.get(f"/api/v1/tuits/{post.id}/likes", headers=_as(user))
    unliked = client.delete(f"/api/v1/users/me/likes/{post.id}", headers=_as(user))

    assert liked.status_code == 200
    assert [u["id"] for u in likers.json()] == [user.id]
    assert unliked.json() == {"message": "like_deleted"}


def test_search_without_query_is_bad_request(
    client: TestClient, store: FakeStore
) -> None:
    admin = store.add_user("admin", admin=True)

    res = client.get("/api/v1/users/search", headers=_as(admin))

    assert res.status_code == 400
