"""Versioned schema migrations, one DDL script per supported dialect."""

from __future__ import annotations

from dataclasses import dataclass, field


SCHEMA_MIGRATIONS_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version     INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    applied_at  TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""

# Random (version 4) UUID rendered as canonical lowercase text.
_SQLITE_UUID4 = """(lower(
        hex(randomblob(4)) || '-' ||
        hex(randomblob(2)) || '-4' ||
        substr(hex(randomblob(2)), 2) || '-' ||
        substr('89ab', 1 + (abs(random()) % 4), 1) ||
        substr(hex(randomblob(2)), 2) || '-' ||
        hex(randomblob(6))
    ))"""


@dataclass(frozen=True)
class Migration:
    version: int
    description: str
    statements: dict[str, tuple[str, ...]] = field(default_factory=dict)

    def for_dialect(self, dialect: str) -> tuple[str, ...]:
        try:
            return self.statements[dialect]
        except KeyError:
            raise KeyError(
                f"Migration {self.version} has no script for dialect {dialect!r}"
            ) from None


MIGRATIONS: tuple[Migration, ...] = (
    Migration(
        version=1,
        description="create todo table",
        statements={
            "sqlite": (
                f"""
                CREATE TABLE IF NOT EXISTS todo (
                    id      TEXT PRIMARY KEY NOT NULL DEFAULT {_SQLITE_UUID4},
                    content TEXT NOT NULL
                )
                """,
            ),
            "postgresql": (
                """
                CREATE TABLE IF NOT EXISTS todo (
                    id      UUID PRIMARY KEY DEFAULT gen_random_uuid(),
                    content TEXT NOT NULL
                )
                """,
            ),
        },
    ),
)
