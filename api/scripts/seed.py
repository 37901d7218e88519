import argparse
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from matchmaker.config import DATABASE_URL
from matchmaker.database import build_engine, build_session_factory, create_schema
from matchmaker.main import configure_logging
from matchmaker.services.seeding import seed_demo_users


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo Matchmaker users")
    parser.add_argument("--database-url", type=str, default=DATABASE_URL)
    parser.add_argument("--reset", action="store_true", help="delete existing users, likes and matches first")
    args = parser.parse_args()

    configure_logging()
    engine = build_engine(args.database_url)
    create_schema(engine)
    with build_session_factory(engine)() as db:
        summary = seed_demo_users(db, reset=args.reset)

    print("Seed completed")
    for k, v in summary.items():
        print(f"- {k}: {v}")


if __name__ == "__main__":
    main()
