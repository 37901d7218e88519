import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from matchmaker import repo
from matchmaker.errors import Internal, InvalidInput, NotFound
from matchmaker.models import Like, Match
from matchmaker.schemas import LikeRequest
from matchmaker.services.likes import create_match, list_matches, register_like


def _match_count(session_factory, a: int, b: int) -> int:
    low, high = repo.canonical_pair(a, b)
    with session_factory() as db:
        return db.execute(
            select(func.count()).select_from(Match).where(Match.user_low == low, Match.user_high == high)
        ).scalar_one()


def _like_count(session_factory) -> int:
    with session_factory() as db:
        return db.execute(select(func.count()).select_from(Like)).scalar_one()


def test_single_like_does_not_create_match(session_factory, ids):
    out = register_like(session_factory, LikeRequest(user_id=ids["Alice"], liked_user_id=ids["Bob"]))
    assert out.status == "like registered"
    assert out.match is None
    assert _match_count(session_factory, ids["Alice"], ids["Bob"]) == 0


def test_reciprocal_like_creates_one_match(session_factory, ids):
    alice, bob = ids["Alice"], ids["Bob"]
    register_like(session_factory, LikeRequest(user_id=alice, liked_user_id=bob))
    out = register_like(session_factory, LikeRequest(user_id=bob, liked_user_id=alice))
    assert out.status == "match found"
    assert out.match.user_id == bob
    assert out.match.matched_user_id == alice
    assert _match_count(session_factory, alice, bob) == 1


def test_repeat_likes_after_match_do_not_duplicate(session_factory, ids):
    alice, bob = ids["Alice"], ids["Bob"]
    register_like(session_factory, LikeRequest(user_id=alice, liked_user_id=bob))
    register_like(session_factory, LikeRequest(user_id=bob, liked_user_id=alice))
    again = register_like(session_factory, LikeRequest(user_id=alice, liked_user_id=bob))
    assert again.status == "match found"
    assert {again.match.user_id, again.match.matched_user_id} == {alice, bob}
    register_like(session_factory, LikeRequest(user_id=bob, liked_user_id=alice))
    assert _match_count(session_factory, alice, bob) == 1
    assert _like_count(session_factory) == 2


def test_self_like_is_rejected_before_storage(ids):
    def _no_storage():
        raise AssertionError("storage must not be touched")

    with pytest.raises(InvalidInput):
        register_like(_no_storage, LikeRequest(user_id=ids["Alice"], liked_user_id=ids["Alice"]))


def test_unknown_users_are_not_found(session_factory, ids):
    with pytest.raises(NotFound):
        register_like(session_factory, LikeRequest(user_id=ids["Alice"], liked_user_id=9999))
    with pytest.raises(NotFound):
        register_like(session_factory, LikeRequest(user_id=9999, liked_user_id=ids["Alice"]))
    assert _like_count(session_factory) == 0


def test_create_match_is_idempotent_under_race(session_factory, ids, monkeypatch):
    alice, bob = ids["Alice"], ids["Bob"]
    with session_factory() as db:
        first = create_match(db, alice, bob)

    # both requests passed the existence check before either inserted
    monkeypatch.setattr(repo, "get_match_for_pair", _none_once(repo.get_match_for_pair))
    with session_factory() as db:
        second = create_match(db, bob, alice)

    assert second.id == first.id
    assert _match_count(session_factory, alice, bob) == 1


def _none_once(fn):
    calls = {"n": 0}

    def _wrapped(*args, **kwargs):
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return fn(*args, **kwargs)

    return _wrapped


def test_concurrent_mutual_likes_yield_exactly_one_match(session_factory):
    with session_factory() as db:
        users = repo.create_users(
            db,
            [
                {"name": f"u{i}", "gender": "other", "latitude": 40.0, "longitude": -73.0, "diet_type": "vegan", "age": 30}
                for i in range(12)
            ],
        )
        user_ids = [u.id for u in users]

    pairs = list(zip(user_ids[0::2], user_ids[1::2]))
    for a, b in pairs:
        barrier = threading.Barrier(2)

        def _like(src: int, dst: int):
            barrier.wait()
            return register_like(session_factory, LikeRequest(user_id=src, liked_user_id=dst))

        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(lambda p: _like(*p), [(a, b), (b, a)]))

        assert any(r.status == "match found" for r in results)
        assert _match_count(session_factory, a, b) == 1


def test_list_matches_includes_both_directions_once(session_factory, ids):
    alice, bob, diana = ids["Alice"], ids["Bob"], ids["Diana"]
    register_like(session_factory, LikeRequest(user_id=alice, liked_user_id=bob))
    register_like(session_factory, LikeRequest(user_id=bob, liked_user_id=alice))
    register_like(session_factory, LikeRequest(user_id=diana, liked_user_id=alice))
    register_like(session_factory, LikeRequest(user_id=alice, liked_user_id=diana))

    alice_matches = list_matches(session_factory, alice)
    bob_matches = list_matches(session_factory, bob)
    assert len(alice_matches) == 2
    assert len(bob_matches) == 1
    assert {bob_matches[0].user_id, bob_matches[0].matched_user_id} == {alice, bob}
    assert list_matches(session_factory, ids["Ethan"]) == []


def test_storage_failure_surfaces_as_internal(session_factory, ids, monkeypatch):
    def _boom(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("db down"))

    monkeypatch.setattr(repo, "get_like", _boom)
    with pytest.raises(Internal) as exc:
        register_like(session_factory, LikeRequest(user_id=ids["Alice"], liked_user_id=ids["Bob"]))
    assert "db down" not in exc.value.detail


def test_out_of_range_ids_never_reach_storage(session_factory, ids):
    for bad in (0, -1, 2**31, 2**70):
        with pytest.raises(ValidationError):
            LikeRequest(user_id=ids["Alice"], liked_user_id=bad)
    assert list_matches(session_factory, 2**70) == []
    assert list_matches(session_factory, 0) == []
    assert _like_count(session_factory) == 0
