import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .. import repo
from ..errors import Internal, NotFound
from ..schemas import Preferences, RecommendationOut
from .geo import distance
from .predicates import build_candidate_filters

logger = logging.getLogger(__name__)


def recommend(session_factory: sessionmaker, user_id: int, preferences: Preferences) -> list[RecommendationOut]:
    """Candidates for ``user_id`` matching ``preferences``, nearest first.

    Attribute filters are pushed into the users query; distance is computed
    for each remaining candidate and the bound applied afterwards, so no
    geospatial support is needed from the database. Equal distances are
    ordered by user id.
    """
    filters = build_candidate_filters(preferences)

    try:
        with session_factory() as db:
            requester = repo.get_user(db, user_id)
            if requester is None:
                raise NotFound("User not found")
            candidates = repo.find_users(db, filters.where(exclude_user_id=requester.id))
    except SQLAlchemyError:
        logger.exception("[RECOMMEND] query failed user_id=%s", user_id)
        raise Internal("Error retrieving recommendations")

    out: list[RecommendationOut] = []
    for c in candidates:
        d = distance(requester.latitude, requester.longitude, c.latitude, c.longitude)
        if not filters.within_distance(d):
            continue
        out.append(
            RecommendationOut(
                id=c.id,
                name=c.name,
                gender=c.gender,
                latitude=c.latitude,
                longitude=c.longitude,
                diet_type=c.diet_type,
                age=c.age,
                distance=d,
            )
        )
    out.sort(key=lambda r: (r.distance, r.id))
    logger.info(
        "[RECOMMEND] user_id=%s scanned=%s returned=%s max_distance=%s",
        user_id,
        len(candidates),
        len(out),
        filters.max_distance,
    )
    return out
