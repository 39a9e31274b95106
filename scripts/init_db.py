#!/usr/bin/env python3
"""Initialize the database by applying all pending schema migrations."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from dotenv import load_dotenv
load_dotenv()

from todo_service.config import configure_logging, get_settings
from todo_service.db.database import Database
from todo_service.errors import MigrationError


def main():
    parser = argparse.ArgumentParser(description="Initialize the database")
    parser.add_argument("--db-url", type=str, help="Override DATABASE_URL")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    db = Database(args.db_url) if args.db_url else Database.from_settings(settings)
    try:
        version = db.init()
    except MigrationError as e:
        print(f"Migration failed: {e}", file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"Database at {db.url.render_as_string(hide_password=True)} is at schema version {version}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
