"""Repository for the ``todo`` table — one statement per operation."""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import text

from todo_service.db.database import Database
from todo_service.models.todo import Todo


class TodoRepository:
    """Single-Responsibility repository for todo persistence.

    Every method raises :class:`~todo_service.errors.StorageError` when the
    store cannot be reached or rejects the statement.
    """

    def __init__(self, db: Database):
        self._db = db

    # -- Create ----------------------------------------------------------------

    def create(self, content: str) -> Todo:
        with self._db.transaction() as conn:
            new_id = conn.execute(
                text("INSERT INTO todo (content) VALUES (:content) RETURNING id"),
                {"content": content},
            ).scalar_one()
            row = conn.execute(
                text("SELECT id, content FROM todo WHERE id = :id"),
                {"id": new_id},
            ).mappings().one()
        return Todo.from_row(row)

    # -- Read ------------------------------------------------------------------

    def get_by_id(self, todo_id: uuid.UUID | str) -> Optional[Todo]:
        row = self._db.fetchone(
            "SELECT id, content FROM todo WHERE id = :id", {"id": str(todo_id)}
        )
        return Todo.from_row(row) if row else None

    def list_all(self) -> list[Todo]:
        rows = self._db.fetchall("SELECT id, content FROM todo")
        return [Todo.from_row(r) for r in rows]

    # -- Update ----------------------------------------------------------------

    def update(self, todo_id: uuid.UUID | str, content: str) -> bool:
        """Set the content of one todo. Returns False if no row matched."""
        affected = self._db.execute(
            "UPDATE todo SET content = :content WHERE id = :id",
            {"content": content, "id": str(todo_id)},
        )
        return affected > 0

    # -- Delete ----------------------------------------------------------------

    def delete(self, todo_id: uuid.UUID | str) -> bool:
        affected = self._db.execute(
            "DELETE FROM todo WHERE id = :id", {"id": str(todo_id)}
        )
        return affected > 0

    def delete_all(self) -> None:
        self._db.execute("DELETE FROM todo")
