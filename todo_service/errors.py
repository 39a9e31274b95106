"""Error taxonomy shared by the data layer and the HTTP layer."""

from __future__ import annotations

from typing import Any


class TodoServiceError(Exception):
    """Base class for all errors raised by todo-service."""


class StorageError(TodoServiceError):
    """Failure talking to or querying the relational store."""

    def __init__(self, message: str, original: Any = None):
        super().__init__(message)
        self.original = original


class MigrationError(StorageError):
    """A schema migration could not be applied."""


class TodoNotFoundError(TodoServiceError):
    def __init__(self, todo_id: Any):
        super().__init__(f"Todo {todo_id} not found")
        self.todo_id = str(todo_id)
