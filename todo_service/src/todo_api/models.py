from __future__ import annotations

from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A lightweight domain model representing a Todo row as returned by the
    storage backends.

    Fields:
    - id: Client-supplied integer identifier (primary key)
    - task: Task text
    - completed: Boolean completion flag
    """

    id: int
    task: str
    completed: bool
