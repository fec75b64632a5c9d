from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.attendance_engine.attendance_engine.database.bootstrap import apply_schema, list_tables
from src.attendance_engine.attendance_engine.database.connection import DBConfig
from src.attendance_engine.attendance_engine.main import SCHEMA_PATH, load_settings


def main() -> None:
    settings = load_settings()
    config = DBConfig.from_dict(settings.DB_CONFIG)

    apply_schema(config, schema_path=SCHEMA_PATH)
    tables = list_tables(config)
    print(f"OK: Applied schema.sql -> {config.user}@{config.host}:{config.port}/{config.database} (tables={len(tables)})")


if __name__ == "__main__":
    main()
