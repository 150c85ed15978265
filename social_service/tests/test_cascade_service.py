from __future__ import annotations

import pytest

from common.models.user import User
from social_service.app.exceptions import Forbidden, NotFound, StoreUnavailable
from social_service.app.models.requester import Requester
from social_service.app.services.bookmarks_service import BookmarksService
from social_service.app.services.cascade_service import CascadeService
from social_service.app.services.follows_service import FollowsService
from social_service.app.services.likes_service import LikesService
from social_service.tests.fakes import FakeStore


MUTATING_CALLS = ("delete", "insert", "create", "update")


def _as_requester(user: User) -> Requester:
    assert user.id is not None
    return Requester(user_id=user.id, is_admin=user.admin)


def _mutations(store: FakeStore) -> list[str]:
    return [c for c in store.calls if any(m in c for m in MUTATING_CALLS)]


def _references(store: FakeStore, user_id: str) -> list[object]:
    """user_id 를 직접 또는 그 유저의 tuit 을 통해 참조하는 도큐먼트 목록."""

    authored = {t.id for t in store.tuits.values() if t.posted_by == user_id}
    refs: list[object] = []
    refs += [f for f in store.follows if user_id in (f.user_following, f.user_followed)]
    refs += [
        b
        for b in store.bookmarks
        if b.bookmarked_by == user_id or b.bookmarked_tuit in authored
    ]
    refs += [l for l in store.likes if l.liked_by == user_id or l.tuit in authored]
    refs += [t for t in store.tuits.values() if t.posted_by == user_id]
    return refs


# --- DeleteUserCascade ---------------------------------------------------------------


def test_delete_user_scenario_removes_follow_bookmark_like_and_tuit(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    admin = store.add_user("admin", admin=True)
    a = store.add_user("alice")
    b = store.add_user("bob")
    c = store.add_user("carol")
    store.add_follow(a, b)
    post = store.add_tuit(a, "alice's tuit")
    store.add_bookmark(b, post)
    store.add_like(c, post)

    result = cascade_service.delete_user(_as_requester(admin), a.id or "")

    assert result.user.id == a.id
    assert a.id not in store.users
    assert b.id in store.users and c.id in store.users
    assert store.follows == []
    assert store.bookmarks == []
    assert store.likes == []
    assert post.id not in store.tuits
    assert result.deleted.model_dump() == {
        "follows": 1,
        "bookmarks": 1,
        "likes": 1,
        "tuits": 1,
    }


def test_delete_user_leaves_no_reference_to_user_and_keeps_unrelated_records(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    u = store.add_user("target")
    x = store.add_user("x")
    y = store.add_user("y")
    u_post1 = store.add_tuit(u, "first")
    u_post2 = store.add_tuit(u, "second")
    x_post = store.add_tuit(x, "x post")

    store.add_follow(x, u)
    store.add_follow(u, y)
    store.add_follow(x, y)
    store.add_bookmark(u, x_post)
    store.add_bookmark(x, u_post1)
    store.add_bookmark(y, x_post)
    store.add_like(u, x_post)
    store.add_like(y, u_post2)
    store.add_like(x, x_post)

    cascade_service.delete_user(_as_requester(u), u.id or "")

    assert _references(store, u.id or "") == []
    assert u_post1.id not in store.tuits and u_post2.id not in store.tuits
    # u 와 무관한 관계는 남아 있어야 한다.
    assert [(f.user_following, f.user_followed) for f in store.follows] == [
        (x.id, y.id)
    ]
    assert [(bm.bookmarked_by, bm.bookmarked_tuit) for bm in store.bookmarks] == [
        (y.id, x_post.id)
    ]
    assert [(lk.liked_by, lk.tuit) for lk in store.likes] == [(x.id, x_post.id)]
    assert x_post.id in store.tuits


def test_delete_user_runs_steps_in_order(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    u = store.add_user("target")
    other = store.add_user("other")
    post = store.add_tuit(u)
    other_post = store.add_tuit(other)
    store.add_follow(other, u)
    store.add_follow(u, other)
    store.add_bookmark(u, other_post)
    store.add_like(other, post)
    store.add_like(u, other_post)

    cascade_service.delete_user(_as_requester(u), u.id or "")

    calls = store.calls
    order = [
        calls.index("follow.find_followers"),
        calls.index("follow.find_following"),
        calls.index("bookmark.find_all_by_user"),
        calls.index("tuit.find_by_author"),
        calls.index("bookmark.delete_by_tuit"),
        calls.index("like.delete_by_tuit"),
        calls.index("like.delete_by_user"),
        calls.index("tuit.delete_by_author"),
        calls.index("user.delete_by_id"),
    ]
    assert order == sorted(order)


def test_delete_user_by_non_owner_non_admin_is_forbidden_without_mutation(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    u = store.add_user("target")
    stranger = store.add_user("stranger")
    post = store.add_tuit(u)
    store.add_follow(stranger, u)
    store.add_like(stranger, post)
    before = store.snapshot()

    with pytest.raises(Forbidden):
        cascade_service.delete_user(_as_requester(stranger), u.id or "")

    assert store.snapshot() == before
    assert _mutations(store) == []


def test_delete_user_forbidden_even_when_target_does_not_exist(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    stranger = store.add_user("stranger")

    with pytest.raises(Forbidden):
        cascade_service.delete_user(_as_requester(stranger), "000000000000000000000000")


def test_delete_missing_user_is_not_found_and_store_is_unchanged(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    admin = store.add_user("admin", admin=True)
    other = store.add_user("other")
    store.add_tuit(other)
    store.add_follow(admin, other)
    before = store.snapshot()

    with pytest.raises(NotFound):
        cascade_service.delete_user(_as_requester(admin), "000000000000000000000000")

    assert store.snapshot() == before
    assert _mutations(store) == []


def test_delete_user_me_alias_deletes_requester(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    u = store.add_user("self")

    result = cascade_service.delete_user(_as_requester(u), "me")

    assert result.user.id == u.id
    assert store.users == {}


def test_fault_before_like_cleanup_keeps_committed_steps_and_leaves_tuits_and_likes(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    u = store.add_user("target")
    other = store.add_user("other")
    post = store.add_tuit(u)
    other_post = store.add_tuit(other)
    store.add_follow(other, u)
    store.add_follow(u, other)
    store.add_bookmark(u, other_post)
    store.add_like(other, post)
    store.add_like(u, other_post)
    store.fail_on.add("like.delete_by_tuit")

    with pytest.raises(StoreUnavailable):
        cascade_service.delete_user(_as_requester(u), u.id or "")

    # follow/bookmark 단계는 이미 반영되었고 롤백되지 않는다.
    assert store.follows == []
    assert [bm for bm in store.bookmarks if bm.bookmarked_by == u.id] == []
    # tuit/좋아요/유저는 아직 남아 있다.
    assert post.id in store.tuits
    assert len(store.likes) == 2
    assert u.id in store.users


def test_rerunning_a_failed_user_cascade_completes_cleanup(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    u = store.add_user("target")
    other = store.add_user("other")
    post = store.add_tuit(u)
    store.add_follow(other, u)
    store.add_like(other, post)
    store.fail_on.add("tuit.delete_by_author")

    with pytest.raises(StoreUnavailable):
        cascade_service.delete_user(_as_requester(u), u.id or "")

    store.fail_on.clear()
    cascade_service.delete_user(_as_requester(u), u.id or "")

    assert _references(store, u.id or "") == []
    assert u.id not in store.users


def test_delete_users_by_username_requires_admin(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    u = store.add_user("dup")

    with pytest.raises(Forbidden):
        cascade_service.delete_users_by_username(_as_requester(u), "dup")

    assert u.id in store.users


def test_delete_users_by_username_cascades_each_match(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    admin = store.add_user("admin", admin=True)
    u = store.add_user("dup")
    keep = store.add_user("keep")
    post = store.add_tuit(u)
    store.add_like(keep, post)

    results = cascade_service.delete_users_by_username(_as_requester(admin), "dup")

    assert [r.user.id for r in results] == [u.id]
    assert store.likes == []
    assert set(store.users) == {admin.id, keep.id}


# --- DeletePostCascade -----------------------------------------------------------------


def test_delete_tuit_only_removes_the_target_tuit_not_other_tuits_by_author(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    # 단건 삭제는 작성자 전체가 아니라 지정한 tuit 하나로 범위를 좁힌다.
    author = store.add_user("author")
    reader = store.add_user("reader")
    target = store.add_tuit(author, "delete me")
    kept = store.add_tuit(author, "keep me")
    reader_post = store.add_tuit(reader, "reader post")
    store.add_bookmark(reader, target)
    store.add_bookmark(reader, kept)
    store.add_bookmark(author, reader_post)
    store.add_like(reader, target)
    store.add_like(reader, kept)
    store.add_like(author, reader_post)

    result = cascade_service.delete_tuit(_as_requester(author), target.id or "")

    assert result.tuit is not None and result.tuit.id == target.id
    assert result.author_id == author.id
    assert target.id not in store.tuits
    assert kept.id in store.tuits
    assert {bm.bookmarked_tuit for bm in store.bookmarks} == {kept.id, reader_post.id}
    assert {lk.tuit for lk in store.likes} == {kept.id, reader_post.id}
    assert result.deleted.model_dump() == {
        "follows": 0,
        "bookmarks": 1,
        "likes": 1,
        "tuits": 1,
    }


def test_delete_tuit_by_admin_is_allowed(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    admin = store.add_user("admin", admin=True)
    author = store.add_user("author")
    post = store.add_tuit(author)

    cascade_service.delete_tuit(_as_requester(admin), post.id or "")

    assert store.tuits == {}


def test_delete_tuit_by_non_author_is_forbidden_without_mutation(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    author = store.add_user("author")
    stranger = store.add_user("stranger")
    post = store.add_tuit(author)
    store.add_bookmark(stranger, post)
    before = store.snapshot()

    with pytest.raises(Forbidden):
        cascade_service.delete_tuit(_as_requester(stranger), post.id or "")

    assert store.snapshot() == before
    assert _mutations(store) == []


def test_delete_missing_tuit_is_not_found(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    admin = store.add_user("admin", admin=True)

    with pytest.raises(NotFound):
        cascade_service.delete_tuit(_as_requester(admin), "000000000000000000000000")


def test_delete_tuit_with_unresolvable_author_is_not_found(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    admin = store.add_user("admin", admin=True)
    ghost = store.add_user("ghost")
    post = store.add_tuit(ghost)
    del store.users[ghost.id or ""]
    before = store.snapshot()

    with pytest.raises(NotFound):
        cascade_service.delete_tuit(_as_requester(admin), post.id or "")

    assert store.snapshot() == before


# --- DeleteAuthorPostsCascade --------------------------------------------------------------


def test_delete_tuits_by_author_removes_all_references_to_authors_tuits(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    author = store.add_user("author")
    reader = store.add_user("reader")
    p1 = store.add_tuit(author)
    p2 = store.add_tuit(author)
    reader_post = store.add_tuit(reader)
    store.add_bookmark(reader, p1)
    store.add_like(reader, p2)
    store.add_bookmark(author, reader_post)
    store.add_like(author, reader_post)

    result = cascade_service.delete_tuits_by_author(_as_requester(author), "me")

    authored = {p1.id, p2.id}
    assert not any(bm.bookmarked_tuit in authored for bm in store.bookmarks)
    assert not any(lk.tuit in authored for lk in store.likes)
    assert set(store.tuits) == {reader_post.id}
    # 작성자 본인의 다른 사람 tuit 에 대한 북마크/좋아요와 계정은 유지된다.
    assert [(bm.bookmarked_by, bm.bookmarked_tuit) for bm in store.bookmarks] == [
        (author.id, reader_post.id)
    ]
    assert [(lk.liked_by, lk.tuit) for lk in store.likes] == [
        (author.id, reader_post.id)
    ]
    assert author.id in store.users
    assert result.tuit is None
    assert result.deleted.tuits == 2


def test_delete_tuits_by_author_by_stranger_is_forbidden(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    author = store.add_user("author")
    stranger = store.add_user("stranger")
    store.add_tuit(author)
    before = store.snapshot()

    with pytest.raises(Forbidden):
        cascade_service.delete_tuits_by_author(_as_requester(stranger), author.id or "")

    assert store.snapshot() == before


# --- id canonicalization ---------------------------------------------------------------


def test_mixed_case_ids_are_stored_canonically_and_removed_by_user_cascade(
    store: FakeStore,
    repos,
    cascade_service: CascadeService,
    bookmarks_service: BookmarksService,
) -> None:
    alice = store.add_user("alice")
    bob = store.add_user("bob")
    post = store.add_tuit(alice)
    as_bob = Requester(user_id=bob.id or "")

    bookmarks_service.bookmark(as_bob, "me", (post.id or "").upper())
    LikesService(repos.likes, repos.users, repos.tuits).like(
        as_bob, "me", (post.id or "").upper()
    )
    FollowsService(repos.follows, repos.users).follow(
        as_bob, "me", (alice.id or "").upper()
    )

    assert [bm.bookmarked_tuit for bm in store.bookmarks] == [post.id]
    assert [lk.tuit for lk in store.likes] == [post.id]
    assert [f.user_followed for f in store.follows] == [alice.id]

    cascade_service.delete_user(_as_requester(alice), "me")

    assert _references(store, alice.id or "") == []
    assert store.bookmarks == [] and store.likes == [] and store.follows == []


def test_delete_tuit_accepts_mixed_case_id(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    author = store.add_user("author")
    reader = store.add_user("reader")
    post = store.add_tuit(author)
    store.add_bookmark(reader, post)

    result = cascade_service.delete_tuit(_as_requester(author), (post.id or "").upper())

    assert result.tuit is not None and result.tuit.id == post.id
    assert store.tuits == {} and store.bookmarks == []


def test_mixed_case_requester_id_owns_its_account(
    store: FakeStore, cascade_service: CascadeService
) -> None:
    user = store.add_user("self")

    cascade_service.delete_user(Requester(user_id=(user.id or "").upper()), user.id or "")

    assert store.users == {}
