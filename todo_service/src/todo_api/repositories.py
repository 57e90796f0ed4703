from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from threading import RLock
from typing import Iterable, List, Optional

from .models import TodoEntity
from .schemas import Todo, TodoList, TodoUpdate
from .settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_SEED_TODOS: List[Todo] = [
    Todo(id=1, task="Learn Golang", completed=False),
    Todo(id=2, task="Build a REST API", completed=False),
]


class RepositoryError(Exception):
    """Raised by storage backends when the underlying store fails."""


class DuplicateTodoError(RepositoryError):
    """Raised on create when a todo with the same id already exists."""

    def __init__(self, todo_id: int) -> None:
        super().__init__(f"todo {todo_id} already exists")
        self.todo_id = todo_id


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    name: str = "abstract"

    @abstractmethod
    def list(self) -> List[TodoEntity]:
        """Return all todos in storage order."""

    @abstractmethod
    def create(self, todo: Todo) -> TodoEntity:
        """Insert a new todo. Raise DuplicateTodoError if the id is taken."""

    @abstractmethod
    def update(self, todo_id: int, data: TodoUpdate) -> Optional[TodoEntity]:
        """Replace task/completed of an existing todo. Return it, or None if not found."""

    @abstractmethod
    def delete(self, todo_id: int) -> bool:
        """Delete a todo by id. Return True if a row was removed."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored todos."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing.
    """

    name = "memory"

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[int, TodoEntity] = {}

    def list(self) -> List[TodoEntity]:
        with self._lock:
            return [t.copy() for t in self._items.values()]

    def create(self, todo: Todo) -> TodoEntity:
        entity: TodoEntity = {"id": todo.id, "task": todo.task, "completed": todo.completed}
        with self._lock:
            if todo.id in self._items:
                raise DuplicateTodoError(todo.id)
            self._items[todo.id] = entity
        return entity.copy()

    def update(self, todo_id: int, data: TodoUpdate) -> Optional[TodoEntity]:
        with self._lock:
            existing = self._items.get(todo_id)
            if existing is None:
                return None
            updated = existing.copy()
            updated["task"] = data.task
            updated["completed"] = data.completed
            self._items[todo_id] = updated
            return updated.copy()

    def delete(self, todo_id: int) -> bool:
        with self._lock:
            return self._items.pop(todo_id, None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._items)


# PUBLIC_INTERFACE
def build_repository(settings: Settings) -> Repository:
    """
    Factory to return the configured repository based on settings.
    - sqlite: SQLiteRepository at settings.sqlite_db_path
    - memory: InMemoryRepository
    """
    if settings.persistence_backend == "memory":
        return InMemoryRepository()
    from .db import SQLiteRepository

    return SQLiteRepository(settings.sqlite_db_path)


# PUBLIC_INTERFACE
def load_seed_todos(path: Optional[str]) -> List[Todo]:
    """
    Return the todos to seed an empty table with: the contents of the JSON
    file at `path` (an array of todo objects), or the built-in defaults.
    """
    if not path:
        return list(DEFAULT_SEED_TODOS)
    with open(path, "r", encoding="utf-8") as f:
        return TodoList.validate_python(json.load(f))


# PUBLIC_INTERFACE
def seed_if_empty(repo: Repository, todos: Iterable[Todo]) -> int:
    """
    Insert `todos` when the repository holds no rows. Rows that fail to
    insert are logged and skipped. Returns the number of rows inserted.
    """
    if repo.count() > 0:
        logger.info("Tasks already exist in the database, skipping initialization")
        return 0

    inserted = 0
    for todo in todos:
        try:
            repo.create(todo)
        except RepositoryError as e:
            logger.error("Error inserting seed task %s: %s", todo.id, e)
            continue
        logger.info("Inserted seed task: %s", todo.task)
        inserted += 1
    return inserted
