"""
Book API Routes

Read-only lookups: list, get by id, and case-insensitive title search.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, Query
from loguru import logger

from tracklist.api.schemas import BookResponse, ErrorResponse, MAX_RECORD_ID
from tracklist.api.dependencies import get_book_repository
from tracklist.api.middleware.error_handler import NotFoundError, persistence_guard


router = APIRouter(prefix="/books", tags=["books"])


@router.get(
    "",
    response_model=Union[BookResponse, list[BookResponse]],
    responses={
        400: {"model": ErrorResponse, "description": "Malformed id"},
        404: {"model": ErrorResponse, "description": "Book not found"},
    },
)
def read_books(
    book_id: Optional[int] = Query(
        None, alias="id", ge=1, le=MAX_RECORD_ID, description="Fetch a single book"
    ),
    title: Optional[str] = Query(None, max_length=200, description="Title substring to search for"),
    repo=Depends(get_book_repository),
):
    """
    List books ordered by id.

    - ``?id=`` returns one book or 404
    - ``?title=`` returns the matching books (possibly ``[]``)
    """
    if book_id is not None:
        logger.info(f"Fetching book: {book_id}")
        with persistence_guard("fetch book"):
            book = repo.get(book_id)
        if book is None:
            raise NotFoundError("Book", book_id)
        return book

    if title and title.strip():
        logger.info(f"Searching books: '{title.strip()}'")
        with persistence_guard("search books"):
            return repo.search(title.strip())

    with persistence_guard("list books"):
        return repo.list_all()
