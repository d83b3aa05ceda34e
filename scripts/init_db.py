"""Create the schema and insert example rows into an empty store.

Usage:
  python scripts/init_db.py            # schema + seed
  python scripts/init_db.py --no-seed  # schema only

NOTE: With RESEARCH_DB_PATH=":memory:" this only exercises the code path;
the data is gone when the script exits.
"""

import argparse
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from research_portfolio.config import load_config
from research_portfolio.db import Database, init_db
from research_portfolio.repositories import build_repositories
from research_portfolio.seed import seed_initial_data


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--no-seed", action="store_true", help="create tables only")
    args = ap.parse_args()

    cfg = load_config()
    db = Database(cfg.DB_DSN)
    try:
        init_db(db)
        seeded = False
        if not args.no_seed:
            seeded = seed_initial_data(build_repositories(db))
    finally:
        db.close()

    print(f"DB initialized: {db.describe()} (seeded={seeded})")


if __name__ == "__main__":
    main()
