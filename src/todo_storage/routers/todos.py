from __future__ import annotations

from typing import List

from fastapi import APIRouter, Body, Depends, Request, status
from pydantic import BaseModel, Field

from ..models import Todo
from ..storage import LoadStatus, TodoStorage

router = APIRouter(
    prefix="/api/v1/todos",
    tags=["todos"],
)


class TodoCollection(BaseModel):
    """
    Envelope for the stored collection.
    """
    items: List[Todo] = Field(..., description="Todos that survived normalization, in stored order")
    total: int = Field(..., description="Number of items returned")
    rejected: int = Field(..., description="Number of stored entries dropped as malformed")
    status: LoadStatus = Field(..., description="How the stored value was read")


class SaveResult(BaseModel):
    saved: bool = Field(..., description="Whether the store accepted the write")
    count: int = Field(..., description="Number of todos written")


def _get_storage(request: Request) -> TodoStorage:
    """
    Dependency returning the application's TodoStorage.
    """
    return request.app.state.storage


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=TodoCollection,
    summary="List Todos",
    description="Load the stored collection, dropping entries that fail validation.",
    responses={200: {"description": "Collection loaded (possibly empty)"}},
)
def list_todos(storage: TodoStorage = Depends(_get_storage)) -> TodoCollection:
    outcome = storage.load()
    return TodoCollection(
        items=outcome.todos,
        total=len(outcome.todos),
        rejected=outcome.rejected,
        status=outcome.status,
    )


# PUBLIC_INTERFACE
@router.put(
    "/",
    response_model=SaveResult,
    status_code=status.HTTP_200_OK,
    summary="Replace Todos",
    description=(
        "Replace the stored collection with the given todos (full overwrite). "
        "A failed write leaves the previous value in place and reports saved=false."
    ),
    responses={
        200: {"description": "Write attempted"},
        422: {"description": "Validation error"},
    },
)
def replace_todos(
    todos: List[Todo] = Body(..., description="Complete todo collection"),
    storage: TodoStorage = Depends(_get_storage),
) -> SaveResult:
    """
    Full replacement of the stored collection.
    """
    outcome = storage.save(todos)
    return SaveResult(saved=outcome.ok, count=outcome.count)
