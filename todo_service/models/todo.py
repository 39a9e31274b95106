"""Todo domain model and the request payloads that produce or mutate it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import BaseModel


@dataclass
class Todo:
    """A persisted todo row. ``id`` is assigned by the store and never changes."""

    id: str
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "content": self.content}

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Todo":
        # PostgreSQL drivers hand back uuid.UUID, SQLite hands back text
        return cls(id=str(row["id"]), content=row["content"])


class CreateTodoRequest(BaseModel):
    content: str


class UpdateTodoRequest(BaseModel):
    content: str
