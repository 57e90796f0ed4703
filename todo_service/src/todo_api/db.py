from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator, List, Optional

from .models import TodoEntity
from .repositories import DuplicateTodoError, Repository, RepositoryError
from .schemas import Todo, TodoUpdate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    task: str = "task"
    completed: str = "completed"


_COLS = _Cols()


class SQLiteRepository(Repository):
    """
    SQLite repository over a single `todos` table.

    A connection is opened per operation, so one instance can be shared by
    the request threads. Driver errors surface as RepositoryError.
    """

    name = "sqlite"

    def __init__(self, db_path: str) -> None:
        try:
            os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        except OSError as e:
            raise RepositoryError(f"cannot create database directory for {db_path}: {e}") from e
        self._db_path = db_path
        self._init_db()
        logger.info("Connected to database at %s", db_path)

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        try:
            conn = sqlite3.connect(self._db_path)
        except sqlite3.Error as e:
            raise RepositoryError(f"cannot open database {self._db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except (sqlite3.Error, UnicodeEncodeError) as e:
            conn.rollback()
            raise RepositoryError(str(e)) from e
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} INTEGER PRIMARY KEY,
                    {_COLS.task} TEXT NOT NULL,
                    {_COLS.completed} BOOLEAN NOT NULL DEFAULT FALSE
                )
                """
            )

    def _row_to_entity(self, row: sqlite3.Row) -> TodoEntity:
        return {
            "id": int(row[_COLS.id]),
            "task": str(row[_COLS.task]),
            "completed": bool(row[_COLS.completed]),
        }

    def list(self) -> List[TodoEntity]:
        with self._conn() as conn:
            rows = conn.execute(
                f"SELECT {_COLS.id}, {_COLS.task}, {_COLS.completed} FROM {_COLS.table}"
            ).fetchall()
            return [self._row_to_entity(r) for r in rows]

    def create(self, todo: Todo) -> TodoEntity:
        with self._conn() as conn:
            cur = conn.execute(
                f"""
                INSERT INTO {_COLS.table} ({_COLS.id}, {_COLS.task}, {_COLS.completed})
                VALUES (?, ?, ?)
                ON CONFLICT({_COLS.id}) DO NOTHING
                """,
                (todo.id, todo.task, todo.completed),
            )
            inserted = cur.rowcount
        if inserted == 0:
            raise DuplicateTodoError(todo.id)
        return {"id": todo.id, "task": todo.task, "completed": todo.completed}

    def update(self, todo_id: int, data: TodoUpdate) -> Optional[TodoEntity]:
        with self._conn() as conn:
            cur = conn.execute(
                f"UPDATE {_COLS.table} SET {_COLS.task} = ?, {_COLS.completed} = ? WHERE {_COLS.id} = ?",
                (data.task, data.completed, todo_id),
            )
            if cur.rowcount == 0:
                return None
        return {"id": todo_id, "task": data.task, "completed": data.completed}

    def delete(self, todo_id: int) -> bool:
        with self._conn() as conn:
            cur = conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,))
            return cur.rowcount > 0

    def count(self) -> int:
        with self._conn() as conn:
            row = conn.execute(f"SELECT COUNT(*) AS cnt FROM {_COLS.table}").fetchone()
            return int(row["cnt"]) if row else 0
