"""
Anime API Routes

CRUD for the anime watch list. ``status`` is validated against the
plan_to_watch / watching / completed enumeration before it reaches the store.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, status
from loguru import logger

from tracklist.api.schemas import (
    AnimeCreate,
    AnimeUpdate,
    AnimeResponse,
    ErrorResponse,
    MAX_RECORD_ID,
)
from tracklist.api.dependencies import get_anime_repository, resolve_delete_id
from tracklist.api.middleware.error_handler import (
    ClientFault,
    NotFoundError,
    persistence_guard,
)


router = APIRouter(prefix="/anime", tags=["anime"])


@router.get(
    "",
    response_model=Union[AnimeResponse, list[AnimeResponse]],
    responses={
        400: {"model": ErrorResponse, "description": "Malformed id"},
        404: {"model": ErrorResponse, "description": "Anime not found"},
    },
)
def read_anime(
    anime_id: Optional[int] = Query(
        None, alias="id", ge=1, le=MAX_RECORD_ID, description="Fetch a single entry"
    ),
    repo=Depends(get_anime_repository),
):
    """List the watch list ordered by id, or fetch one entry with ``?id=``."""
    if anime_id is None:
        with persistence_guard("list anime"):
            return repo.list_all()

    logger.info(f"Fetching anime: {anime_id}")
    with persistence_guard("fetch anime"):
        entry = repo.get(anime_id)
    if entry is None:
        raise NotFoundError("Anime", anime_id)
    return entry


@router.post(
    "",
    response_model=AnimeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Invalid anime data"}},
)
def create_anime(
    anime: AnimeCreate,
    repo=Depends(get_anime_repository),
):
    """Add an entry to the watch list."""
    logger.info(f"Creating anime: {anime.title!r} ({anime.status.value})")
    with persistence_guard("create anime"):
        return repo.create(
            title=anime.title,
            status=anime.status.value,
            score=anime.score,
        )


@router.patch(
    "",
    response_model=AnimeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing id or nothing to update"},
        404: {"model": ErrorResponse, "description": "Anime not found"},
    },
)
def update_anime(
    anime: AnimeUpdate,
    repo=Depends(get_anime_repository),
):
    """Partially update an entry; absent fields keep their stored values."""
    changes = anime.changes()
    if not changes:
        raise ClientFault("No fields to update", detail="Supply title, status or score")

    logger.info(f"Updating anime {anime.id}: {sorted(changes)}")
    with persistence_guard("update anime"):
        updated = repo.update(anime.id, **changes)
    if updated is None:
        raise NotFoundError("Anime", anime.id)
    return updated


@router.delete(
    "",
    response_model=AnimeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing id"},
        404: {"model": ErrorResponse, "description": "Anime not found"},
    },
)
def delete_anime(
    anime_id: int = Depends(resolve_delete_id),
    repo=Depends(get_anime_repository),
):
    logger.info(f"Deleting anime: {anime_id}")

    with persistence_guard("delete anime"):
        deleted = repo.delete(anime_id)
    if deleted is None:
        raise NotFoundError("Anime", anime_id)
    return deleted
