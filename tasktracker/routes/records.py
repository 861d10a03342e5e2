"""json-server style record routes."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request, status

from tasktracker.errors import RecordConflictError, RecordNotFoundError
from tasktracker.repositories.memory import InMemoryStore
from tasktracker.routes.dependencies import get_store, require_collection
from tasktracker.schemas.error import ErrorResponse

router = APIRouter(tags=["Records"])

_NOT_FOUND = {404: {"model": ErrorResponse}}
_CONFLICT = {**_NOT_FOUND, 409: {"model": ErrorResponse}}


@router.get("/{collection}", responses=_NOT_FOUND)
async def list_records(
    request: Request,
    collection: Annotated[str, Depends(require_collection)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> list[dict[str, Any]]:
    return store.list_records(collection, dict(request.query_params))


@router.post("/{collection}", status_code=status.HTTP_201_CREATED, responses=_CONFLICT)
async def create_record(
    collection: Annotated[str, Depends(require_collection)],
    body: Annotated[dict[str, Any], Body()],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> dict[str, Any]:
    record_id = body.get("id")
    if record_id and store.get_record(collection, str(record_id)) is not None:
        raise RecordConflictError("Resource already exists")
    return store.create_record(collection, body)


@router.get("/{collection}/{record_id}", responses=_NOT_FOUND)
async def get_record(
    collection: Annotated[str, Depends(require_collection)],
    record_id: str,
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> dict[str, Any]:
    record = store.get_record(collection, record_id)
    if record is None:
        raise RecordNotFoundError("Resource not found")
    return record


@router.patch("/{collection}/{record_id}", responses=_NOT_FOUND)
async def update_record(
    collection: Annotated[str, Depends(require_collection)],
    record_id: str,
    patch: Annotated[dict[str, Any], Body()],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> dict[str, Any]:
    record = store.update_record(collection, record_id, patch)
    if record is None:
        raise RecordNotFoundError("Resource not found")
    return record


@router.delete("/{collection}/{record_id}", responses=_NOT_FOUND)
async def delete_record(
    collection: Annotated[str, Depends(require_collection)],
    record_id: str,
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> dict[str, Any]:
    if not store.delete_record(collection, record_id):
        raise RecordNotFoundError("Resource not found")
    return {}
