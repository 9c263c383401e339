import logging
import pathlib
import sys

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "backend"))

from sqlalchemy import text

from autospa.config import settings
from autospa.database import engine
from autospa.seed import seed_database


def main():
    logging.basicConfig(level=logging.INFO)
    print(f"Using DB: {settings.resolved_database_url}")

    with engine.connect() as conn:
        print("DB OK:", conn.execute(text("SELECT 1")).scalar())

    seed_database(engine)
    print("All tables and defaults ensured.")


if __name__ == "__main__":
    main()
