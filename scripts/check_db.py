"""Check database connectivity and print what the API will see."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from dotenv import load_dotenv
from mysql.connector import Error as MySQLError

from geo_attendance.config import get_settings_module
from geo_attendance.database.bootstrap import list_tables


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    try:
        tables = list_tables(db_config)
    except MySQLError as e:
        print(f"FAILED: cannot reach {db_config.get('host')}:{db_config.get('port', 3306)} -> {e}")
        return 1

    print(f"OK: {db_config.get('database')} has {len(tables)} tables")
    for name in tables:
        print(f"   - {name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
