"""Domain models for todo-service."""

from todo_service.models.todo import Todo, CreateTodoRequest, UpdateTodoRequest

__all__ = ["Todo", "CreateTodoRequest", "UpdateTodoRequest"]
