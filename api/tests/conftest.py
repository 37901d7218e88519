import pytest

from matchmaker import repo
from matchmaker.models import User
from matchmaker.database import build_engine, build_session_factory, create_schema
from matchmaker.services.seeding import seed_demo_users


@pytest.fixture
def session_factory(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'matchmaker.db'}")
    create_schema(engine)
    factory = build_session_factory(engine)
    with factory() as db:
        seed_demo_users(db)
    yield factory
    engine.dispose()


@pytest.fixture
def ids(session_factory) -> dict[str, int]:
    with session_factory() as db:
        return {u.name: u.id for u in repo.find_users(db, User.id > 0)}
