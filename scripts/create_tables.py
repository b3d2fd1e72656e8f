"""Create the SQL tables and optionally load the JSON draw file into them.

Reads DATABASE_URL from .env / environment.

Usage:
  python scripts/create_tables.py
  python scripts/create_tables.py --import-json data/lotto.json
"""

from __future__ import annotations

import argparse
import pathlib
import sys
from collections.abc import Sequence

from dotenv import load_dotenv
from sqlalchemy import text
from sqlalchemy.orm import sessionmaker

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from lottori.models.base import Base  # noqa: E402
from lottori.config import resolve_database_url  # noqa: E402
from lottori.db import create_app_engine  # noqa: E402
from lottori.repositories.lotto_result_repository import LottoResultRepository  # noqa: E402

# Import models so they register with Base.metadata
from lottori import models  # noqa: F401,E402


def main(argv: Sequence[str] | None = None) -> int:
    """Create all ORM tables in the target database."""

    parser = argparse.ArgumentParser(description="Create tables for the SQL backend")
    parser.add_argument("--import-json", dest="json_path", type=str, default=None)
    args = parser.parse_args(argv)

    load_dotenv()
    env_local = PROJECT_ROOT / ".env.local"
    if env_local.exists():
        load_dotenv(dotenv_path=env_local, override=True)

    engine = create_app_engine(resolve_database_url())
    Base.metadata.create_all(bind=engine)

    # create_all() does not add indexes to existing tables.
    if engine.dialect.name == "postgresql":
        ddl = [
            "CREATE INDEX IF NOT EXISTS ix_lotto_results_draw_date ON lotto_results (draw_date)",
        ]
        with engine.begin() as conn:
            for stmt in ddl:
                conn.execute(text(stmt))

    print("Tables created (or already exist).")

    if args.json_path:
        repo = LottoResultRepository(args.json_path)
        dataset = repo.load_from_file()
        session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
        with session_factory.begin() as session:
            imported = repo.replace_all(session, dataset.draws)
        print(f"Imported {imported} draws from {args.json_path}.")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
