from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from dotenv import load_dotenv

from geo_attendance.config import get_settings_module
from geo_attendance.database.bootstrap import DEMO_PASSWORD, apply_seed_sql, ensure_demo_employees


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo office locations and employees.")
    parser.add_argument("--password", default=DEMO_PASSWORD, help="password given to every demo employee")
    args = parser.parse_args()

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    seed_path = REPO_ROOT / "database" / "seed.sql"
    apply_seed_sql(db_config, seed_path=seed_path)
    ensure_demo_employees(db_config, password=args.password)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
