"""
Todo API Routes

List, get, create, partially update and delete todos. Each handler runs
exactly one repository call.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, status
from loguru import logger

from tracklist.api.schemas import (
    TodoCreate,
    TodoUpdate,
    TodoResponse,
    ErrorResponse,
    MAX_RECORD_ID,
)
from tracklist.api.dependencies import get_todo_repository, resolve_delete_id
from tracklist.api.middleware.error_handler import (
    ClientFault,
    NotFoundError,
    persistence_guard,
)


router = APIRouter(prefix="/todos", tags=["todos"])


@router.get(
    "",
    response_model=Union[TodoResponse, list[TodoResponse]],
    responses={
        400: {"model": ErrorResponse, "description": "Malformed id"},
        404: {"model": ErrorResponse, "description": "Todo not found"},
    },
)
def read_todos(
    todo_id: Optional[int] = Query(
        None, alias="id", ge=1, le=MAX_RECORD_ID, description="Fetch a single todo"
    ),
    repo=Depends(get_todo_repository),
):
    """
    List all todos ordered by id, or fetch one with ``?id=``.

    An empty table yields ``[]``.
    """
    if todo_id is None:
        with persistence_guard("list todos"):
            return repo.list_all()

    logger.info(f"Fetching todo: {todo_id}")
    with persistence_guard("fetch todo"):
        todo = repo.get(todo_id)
    if todo is None:
        raise NotFoundError("Todo", todo_id)
    return todo


@router.post(
    "",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Invalid todo data"}},
)
def create_todo(
    todo: TodoCreate,
    repo=Depends(get_todo_repository),
):
    """Create a todo. The stored text is trimmed; ``completed`` starts false."""
    logger.info(f"Creating todo: {todo.text!r}")
    with persistence_guard("create todo"):
        return repo.create(text=todo.text)


@router.patch(
    "",
    response_model=TodoResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing id or nothing to update"},
        404: {"model": ErrorResponse, "description": "Todo not found"},
    },
)
def update_todo(
    todo: TodoUpdate,
    repo=Depends(get_todo_repository),
):
    """
    Update a todo.

    Supports partial updates - only provided fields are modified.
    ``{"toggle": true}`` inverts ``completed`` in the store itself, so the
    response carries the value the server actually wrote.
    """
    changes = todo.changes()
    if not changes:
        raise ClientFault("No fields to update", detail="Supply text, completed or toggle")

    toggle = changes.pop("toggle", False)
    logger.info(f"Updating todo {todo.id}: {sorted(changes) + (['toggle'] if toggle else [])}")

    with persistence_guard("update todo"):
        updated = repo.update(todo.id, toggle=toggle, **changes)
    if updated is None:
        raise NotFoundError("Todo", todo.id)
    return updated


@router.delete(
    "",
    response_model=TodoResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing id"},
        404: {"model": ErrorResponse, "description": "Todo not found"},
    },
)
def delete_todo(
    todo_id: int = Depends(resolve_delete_id),
    repo=Depends(get_todo_repository),
):
    """Delete a todo and return it as it was before deletion."""
    logger.info(f"Deleting todo: {todo_id}")

    with persistence_guard("delete todo"):
        deleted = repo.delete(todo_id)
    if deleted is None:
        raise NotFoundError("Todo", todo_id)
    return deleted
