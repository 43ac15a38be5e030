"""
Todo Repository for Tracklist

CRUD over the ``todos`` table. Every method issues exactly one statement.
"""

from dataclasses import dataclass
from typing import Optional

from loguru import logger
from sqlalchemy import select, insert, update, delete, not_

from .database import Database, Row
from .models import TodoModel


@dataclass
class StoredTodo:
    """Data class for todo transfer."""

    id: int
    text: str
    completed: bool = False

    @classmethod
    def from_row(cls, row: Row) -> "StoredTodo":
        """Create from a result row."""
        return cls(
            id=row["id"],
            text=row["text"],
            completed=bool(row["completed"]),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
        }


class TodoRepository:
    """
    Repository for todo CRUD operations.

    Usage:
        repo = TodoRepository(Database("sqlite:///./tracklist.db"))
        todo = repo.create("Learn the system")
        repo.toggle(todo.id)
    """

    def __init__(self, database: Database):
        self.database = database

    def list_all(self) -> list[StoredTodo]:
        """List all todos ordered by id."""
        rows = self.database.execute(
            select(TodoModel.__table__).order_by(TodoModel.id.asc())
        )
        return [StoredTodo.from_row(r) for r in rows]

    def get(self, todo_id: int) -> Optional[StoredTodo]:
        """
        Get todo by ID.

        Returns:
            StoredTodo or None
        """
        rows = self.database.execute(
            select(TodoModel.__table__).where(TodoModel.id == todo_id)
        )
        return StoredTodo.from_row(rows[0]) if rows else None

    def create(self, text: str, completed: bool = False) -> StoredTodo:
        """
        Insert a todo. The store assigns the id.

        Args:
            text: Todo text (already validated)
            completed: Initial completion state

        Returns:
            Created StoredTodo
        """
        rows = self.database.execute(
            insert(TodoModel.__table__)
            .values(text=text, completed=completed)
            .returning(*TodoModel.__table__.c)
        )
        todo = StoredTodo.from_row(rows[0])
        logger.debug(f"Inserted todo {todo.id}")
        return todo

    def update(
        self,
        todo_id: int,
        toggle: bool = False,
        **updates,
    ) -> Optional[StoredTodo]:
        """
        Update only the supplied fields.

        Args:
            todo_id: Todo ID
            toggle: Invert ``completed`` in the same statement
            **updates: Column values to set (``text``, ``completed``)

        Returns:
            Updated StoredTodo or None if no row matched
        """
        values = {k: v for k, v in updates.items() if k in ("text", "completed")}
        if toggle:
            values["completed"] = not_(TodoModel.completed)
        if not values:
            raise ValueError("No fields to update")

        rows = self.database.execute(
            update(TodoModel.__table__)
            .where(TodoModel.id == todo_id)
            .values(**values)
            .returning(*TodoModel.__table__.c)
        )
        return StoredTodo.from_row(rows[0]) if rows else None

    def toggle(self, todo_id: int) -> Optional[StoredTodo]:
        """Invert ``completed`` atomically and return the resulting row."""
        return self.update(todo_id, toggle=True)

    def delete(self, todo_id: int) -> Optional[StoredTodo]:
        """
        Delete a todo.

        Returns:
            The row as it was before deletion, or None
        """
        rows = self.database.execute(
            delete(TodoModel.__table__)
            .where(TodoModel.id == todo_id)
            .returning(*TodoModel.__table__.c)
        )
        return StoredTodo.from_row(rows[0]) if rows else None
