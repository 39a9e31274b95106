"""Apply the versioned migrations in :mod:`todo_service.db.schema`."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from sqlalchemy import text

from todo_service.db.database import Database
from todo_service.db.schema import MIGRATIONS, SCHEMA_MIGRATIONS_DDL, Migration
from todo_service.errors import MigrationError, StorageError

logger = logging.getLogger(__name__)


def applied_versions(db: Database) -> set[int]:
    rows = db.fetchall("SELECT version FROM schema_migrations")
    return {r["version"] for r in rows}


def schema_version(db: Database) -> int:
    row = db.fetchone("SELECT MAX(version) AS version FROM schema_migrations")
    if not row or row["version"] is None:
        return 0
    return int(row["version"])


def run_migrations(db: Database, migrations: Optional[Sequence[Migration]] = None) -> int:
    """Apply every migration not yet recorded, in version order.

    Each migration runs in its own transaction together with its
    ``schema_migrations`` row, so a failure leaves earlier versions applied
    and nothing of the failing one. Returns the resulting schema version.
    """
    if migrations is None:
        migrations = MIGRATIONS

    try:
        db.execute(SCHEMA_MIGRATIONS_DDL)
        done = applied_versions(db)
    except StorageError as e:
        raise MigrationError(f"Cannot read migration state: {e}", original=e) from e

    for migration in sorted(migrations, key=lambda m: m.version):
        if migration.version in done:
            continue
        try:
            statements = migration.for_dialect(db.dialect)
        except KeyError as e:
            raise MigrationError(str(e.args[0])) from e

        try:
            with db.transaction() as conn:
                for stmt in statements:
                    conn.execute(text(stmt))
                conn.execute(
                    text(
                        "INSERT INTO schema_migrations (version, description) "
                        "VALUES (:version, :description)"
                    ),
                    {"version": migration.version, "description": migration.description},
                )
        except StorageError as e:
            logger.error(f"Migration {migration.version} ({migration.description}) failed: {e}")
            raise MigrationError(
                f"Migration {migration.version} failed: {e}", original=e.original
            ) from e
        logger.info(f"Applied migration {migration.version}: {migration.description}")

    return schema_version(db)
