import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError

from .config import DATABASE_URL, DB_WAIT_ATTEMPTS, DB_WAIT_DELAY_SECONDS, LOG_LEVEL, SEED_DEMO_USERS
from .database import build_engine, build_session_factory, create_schema
from .errors import MatchmakerError
from .routes import include_modular_routers
from .services.seeding import seed_demo_users

logger = logging.getLogger(__name__)


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")


def wait_for_db(engine: Engine, max_attempts: int = DB_WAIT_ATTEMPTS, delay_seconds: float = DB_WAIT_DELAY_SECONDS) -> None:
    last_err: Exception | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return
        except OperationalError as exc:
            last_err = exc
            logger.warning("[DB] not reachable (attempt %s/%s), retrying in %ss", attempt, max_attempts, delay_seconds)
            time.sleep(delay_seconds)
    if last_err:
        raise last_err


def _format_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def create_app(database_url: str | None = None, *, seed_on_startup: bool = SEED_DEMO_USERS) -> FastAPI:
    engine = build_engine(database_url or DATABASE_URL)

    app = FastAPI(title="Matchmaker API")
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    include_modular_routers(app)

    @app.exception_handler(MatchmakerError)
    async def _matchmaker_error(_: Request, exc: MatchmakerError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def _validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": _format_validation_error(exc)})

    @app.on_event("startup")
    def on_startup() -> None:
        wait_for_db(app.state.engine)
        create_schema(app.state.engine)
        if seed_on_startup:
            with app.state.session_factory() as db:
                seed_demo_users(db)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
