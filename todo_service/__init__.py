"""todo-service: CRUD over a single ``todo`` table, served with FastAPI."""

__version__ = "1.0.0"
