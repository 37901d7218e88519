import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .. import repo
from ..errors import Internal, InvalidInput, NotFound
from ..models import Match
from ..schemas import LikeRequest, LikeResponse, MatchPair

logger = logging.getLogger(__name__)


def create_match(db: Session, user_id: int, liked_user_id: int) -> Match:
    match, created = repo.insert_match_if_absent(db, user_id, liked_user_id)
    if created:
        logger.info("[MATCH] created match_id=%s user_id=%s matched_user_id=%s", match.id, user_id, liked_user_id)
    else:
        logger.debug("[MATCH] pair already matched match_id=%s user_id=%s matched_user_id=%s", match.id, user_id, liked_user_id)
    return match


def register_like(session_factory: sessionmaker, like: LikeRequest) -> LikeResponse:
    """Store a like and record a match when the reciprocal like already exists.

    The like is committed before the reciprocal lookup, so of two opposite
    likes racing each other at least the later lookup observes the other.
    Match creation is idempotent on the unordered pair, so the racing case
    where both lookups succeed still leaves a single match row.
    """
    user_id, liked_user_id = like.user_id, like.liked_user_id
    if user_id == liked_user_id:
        raise InvalidInput("Users cannot like themselves")

    try:
        with session_factory() as db:
            for uid in (user_id, liked_user_id):
                if repo.get_user(db, uid) is None:
                    raise NotFound(f"User {uid} not found")

            _, created = repo.create_like(db, user_id, liked_user_id)
            if not created:
                logger.debug("[LIKE] repeat like ignored user_id=%s liked_user_id=%s", user_id, liked_user_id)

            if repo.get_like(db, liked_user_id, user_id) is None:
                logger.info("[LIKE] registered user_id=%s liked_user_id=%s", user_id, liked_user_id)
                return LikeResponse(status="like registered")

            match = create_match(db, user_id, liked_user_id)
    except SQLAlchemyError:
        logger.exception("[LIKE] storage failure user_id=%s liked_user_id=%s", user_id, liked_user_id)
        raise Internal("Error registering like")

    return LikeResponse(
        status="match found",
        match=MatchPair(user_id=match.user_id, matched_user_id=match.matched_user_id),
    )


def list_matches(session_factory: sessionmaker, user_id: int) -> list[Match]:
    try:
        with session_factory() as db:
            return repo.list_matches_for_user(db, user_id)
    except SQLAlchemyError:
        logger.exception("[MATCH] storage failure listing matches user_id=%s", user_id)
        raise Internal("Error retrieving matches")
