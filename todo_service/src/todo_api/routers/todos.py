from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Request, status

from ..repositories import DuplicateTodoError, Repository, RepositoryError
from ..schemas import ID_MAX, ID_MIN, Message, Todo, TodoUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/toDos",
    tags=["todos"],
)


def get_repository(request: Request) -> Repository:
    """
    Dependency returning the repository the application was built with.
    """
    return request.app.state.repository


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[Todo],
    summary="List Todos",
    description="Return every todo in storage order.",
    responses={
        200: {"description": "List retrieved successfully"},
        500: {"model": Message, "description": "Storage error"},
    },
)
def list_todos(repo: Repository = Depends(get_repository)) -> List[Todo]:
    logger.info("Received request to get all tasks")
    try:
        items = repo.list()
    except RepositoryError as e:
        logger.exception("Error querying tasks: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error retrieving tasks"
        ) from e
    return [Todo(**it) for it in items]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=Todo,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a todo with a client-supplied id and return it.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"model": Message, "description": "Invalid todo payload"},
        409: {"model": Message, "description": "A todo with this id already exists"},
        500: {"model": Message, "description": "Storage error"},
    },
)
def create_todo(payload: Todo, repo: Repository = Depends(get_repository)) -> Todo:
    logger.info("Received a new task creation request")
    try:
        created = repo.create(payload)
    except DuplicateTodoError as e:
        logger.warning("Task with the same ID already exists: %s", e.todo_id)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Task with this ID already exists"
        ) from e
    except RepositoryError as e:
        logger.exception("Error inserting new task: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error creating task"
        ) from e
    logger.info("Added new task: %s", created)
    return Todo(**created)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoUpdate,
    summary="Update Todo",
    description="Replace task and completed of an existing todo. The id never changes.",
    responses={
        200: {"description": "Todo updated"},
        400: {"model": Message, "description": "Invalid id or payload"},
        404: {"model": Message, "description": "Todo not found"},
        500: {"model": Message, "description": "Storage error"},
    },
)
def update_todo(
    payload: TodoUpdate,
    todo_id: int = Path(..., ge=ID_MIN, le=ID_MAX, description="Todo identifier"),
    repo: Repository = Depends(get_repository),
) -> TodoUpdate:
    logger.info("Received a new task update request")
    try:
        updated = repo.update(todo_id, payload)
    except RepositoryError as e:
        logger.exception("Error updating task %s: %s", todo_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error updating task"
        ) from e
    if updated is None:
        logger.info("Task with ID %s not found", todo_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    logger.info("Updated task with ID: %s", todo_id)
    return payload


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=Message,
    summary="Delete Todo",
    description="Delete a todo by id. Succeeds whether or not the todo existed.",
    responses={
        200: {"description": "Todo deleted"},
        400: {"model": Message, "description": "Invalid id"},
        500: {"model": Message, "description": "Storage error"},
    },
)
def delete_todo(
    todo_id: int = Path(..., ge=ID_MIN, le=ID_MAX, description="Todo identifier"),
    repo: Repository = Depends(get_repository),
) -> Message:
    logger.info("Received a new task deletion request")
    try:
        removed = repo.delete(todo_id)
    except RepositoryError as e:
        logger.exception("Error deleting task %s: %s", todo_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting task"
        ) from e
    if removed:
        logger.info("Deleted task with ID: %s", todo_id)
    else:
        logger.info("Delete for ID %s matched no task", todo_id)
    return Message(message="toDo deleted")
