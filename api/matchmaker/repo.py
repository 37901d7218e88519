from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from .models import Like, Match, User
from .schemas import MAX_ID


def canonical_pair(user_a: int, user_b: int) -> tuple[int, int]:
    return (user_a, user_b) if user_a < user_b else (user_b, user_a)


def is_storable_id(user_id: int) -> bool:
    return 0 < user_id <= MAX_ID


def get_user(db: Session, user_id: int) -> User | None:
    if not is_storable_id(user_id):
        return None
    return db.get(User, user_id)


def count_users(db: Session) -> int:
    return int(db.execute(select(func.count()).select_from(User)).scalar_one())


def create_users(db: Session, rows: list[dict]) -> list[User]:
    users = [User(**row) for row in rows]
    db.add_all(users)
    db.commit()
    return users


def get_like(db: Session, user_id: int, liked_user_id: int) -> Like | None:
    return db.execute(
        select(Like).where(Like.user_id == user_id, Like.liked_user_id == liked_user_id)
    ).scalars().first()


def create_like(db: Session, user_id: int, liked_user_id: int) -> tuple[Like, bool]:
    """Insert a like if this direction is not stored yet. Returns (like, created)."""
    like = Like(user_id=user_id, liked_user_id=liked_user_id)
    db.add(like)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = get_like(db, user_id, liked_user_id)
        if existing is None:
            raise
        return existing, False
    return like, True


def get_match_for_pair(db: Session, user_a: int, user_b: int) -> Match | None:
    low, high = canonical_pair(user_a, user_b)
    return db.execute(
        select(Match).where(Match.user_low == low, Match.user_high == high)
    ).scalars().first()


def insert_match_if_absent(db: Session, user_id: int, matched_user_id: int) -> tuple[Match, bool]:
    """Insert a match unless the unordered pair already has one. Returns (match, created)."""
    existing = get_match_for_pair(db, user_id, matched_user_id)
    if existing is not None:
        return existing, False

    low, high = canonical_pair(user_id, matched_user_id)
    match = Match(user_id=user_id, matched_user_id=matched_user_id, user_low=low, user_high=high)
    db.add(match)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent request inserted the pair first
        db.rollback()
        existing = get_match_for_pair(db, user_id, matched_user_id)
        if existing is None:
            raise
        return existing, False
    return match, True


def list_matches_for_user(db: Session, user_id: int) -> list[Match]:
    if not is_storable_id(user_id):
        return []
    return list(
        db.execute(
            select(Match)
            .where(or_(Match.user_id == user_id, Match.matched_user_id == user_id))
            .order_by(Match.id)
        ).scalars()
    )


def find_users(db: Session, where: ColumnElement) -> list[User]:
    return list(db.execute(select(User).where(where).order_by(User.id)).scalars())
