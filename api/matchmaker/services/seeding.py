import logging
from typing import Any

from sqlalchemy import delete
from sqlalchemy.orm import Session

from .. import repo
from ..models import Like, Match, User
from ..schemas import UserIn

logger = logging.getLogger(__name__)

DEMO_USERS: list[dict[str, Any]] = [
    {"name": "Alice", "gender": "female", "latitude": 40.7128, "longitude": -74.0060, "diet_type": "vegan", "age": 25},
    {"name": "Bob", "gender": "male", "latitude": 40.73061, "longitude": -73.935242, "diet_type": "vegan", "age": 30},
    {"name": "Charlie", "gender": "other", "latitude": 41.033986, "longitude": -73.762909, "diet_type": "vegan", "age": 22},
    {"name": "Diana", "gender": "female", "latitude": 40.8501, "longitude": -73.8662, "diet_type": "vegan", "age": 28},
    {"name": "Ethan", "gender": "male", "latitude": 35.6895, "longitude": 139.6917, "diet_type": "omnivore", "age": 35},
]


def reset_data(db: Session) -> None:
    for model in (Match, Like, User):
        db.execute(delete(model))
    db.commit()


def seed_demo_users(db: Session, reset: bool = False) -> dict[str, Any]:
    if reset:
        reset_data(db)
        logger.warning("[SEED] existing users, likes and matches deleted")

    existing = repo.count_users(db)
    if existing:
        logger.info("[SEED] users already exist (%s), skipping seed", existing)
        return {"seeded": 0, "skipped": True, "total_users": existing}

    rows = [UserIn(**u).model_dump() for u in DEMO_USERS]
    users = repo.create_users(db, rows)
    logger.info("[SEED] seeded %s demo users", len(users))
    return {"seeded": len(users), "skipped": False, "total_users": len(users)}
