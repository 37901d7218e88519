import uvicorn

from .config import API_HOST, API_PORT, LOG_LEVEL
from .main import configure_logging


def main() -> None:
    configure_logging()
    uvicorn.run("matchmaker.main:create_app", factory=True, host=API_HOST, port=API_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
