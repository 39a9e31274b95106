"""Database layer — pooled SQLAlchemy engine, migrations and repositories."""

from todo_service.db.database import Database
from todo_service.db.migrate import run_migrations, schema_version
from todo_service.db.schema import MIGRATIONS
from todo_service.db.todo_repo import TodoRepository

__all__ = ["Database", "run_migrations", "schema_version", "MIGRATIONS", "TodoRepository"]
