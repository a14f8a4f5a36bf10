"""
Books Router

CRUD endpoints for books:

    POST   /books        -> 201, empty body, Location header
    GET    /books        -> 200, list of books
    GET    /books/{id}   -> 200, book | 404
    PUT    /books/{id}   -> 200, empty body
    DELETE /books/{id}   -> 200, empty body

Error mapping:
- invalid id, malformed or invalid body, empty update -> 400
- BookNotFoundError -> 404
- SQLAlchemyError -> 500, logged with the handler name first
"""

from fastapi import APIRouter, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError

from crud_app.dependencies import AppLogger, BookId, BooksServiceDep
from crud_app.exceptions import BookNotFoundError, EmptyUpdateError
from crud_app.schemas import Book, BookCreate, BookUpdate
from crud_app.utils import store_failure

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        400: {"description": "Invalid ID or request body"},
        500: {"description": "Database error"},
    },
)


# =============================================================================
# CRUD Endpoints
# =============================================================================
@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    summary="Create a new book",
    description="Create a book. The id is assigned by the server and returned in the Location header.",
)
def create_book(
    book_data: BookCreate,
    service: BooksServiceDep,
    logger: AppLogger,
) -> Response:
    """
    Create a new book.

    publish_date defaults to the current time when omitted.
    """
    try:
        book_id = service.create(book_data)
    except SQLAlchemyError as exc:
        raise store_failure(logger, "create_book", "inserting book", exc) from exc

    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"{router.prefix}/{book_id}"},
    )


@router.get(
    "",
    response_model=list[Book],
    summary="List all books",
    description="Get every book, ordered by id.",
)
def get_all_books(
    service: BooksServiceDep,
    logger: AppLogger,
) -> list[Book]:
    """List all books."""
    try:
        return service.get_all()
    except SQLAlchemyError as exc:
        raise store_failure(logger, "get_all_books", "reading books", exc) from exc


@router.get(
    "/{book_id}",
    response_model=Book,
    summary="Get a book by ID",
    description="Retrieve a single book.",
    responses={404: {"description": "Book not found"}},
)
def get_book_by_id(
    book_id: BookId,
    service: BooksServiceDep,
    logger: AppLogger,
) -> Book:
    """
    Get a single book by its ID.

    Raises:
        HTTPException: 404 if book not found
    """
    try:
        return service.get_by_id(book_id)
    except BookNotFoundError as exc:
        logger.info(str(exc), extra={"handler": "get_book_by_id", "problem": "not found"})
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except SQLAlchemyError as exc:
        raise store_failure(logger, "get_book_by_id", "reading book", exc) from exc


@router.put(
    "/{book_id}",
    response_class=Response,
    summary="Update a book",
    description="Apply a partial update. Only fields present in the body are changed.",
)
def update_book(
    book_id: BookId,
    book_data: BookUpdate,
    service: BooksServiceDep,
    logger: AppLogger,
) -> Response:
    """
    Update an existing book.

    PUT with PATCH semantics: absent or null fields keep their stored value.
    An id that does not exist is not an error.

    Raises:
        HTTPException: 400 if the body sets no field
    """
    try:
        service.update(book_id, book_data)
    except EmptyUpdateError as exc:
        logger.warning(str(exc), extra={"handler": "update_book", "problem": "empty update"})
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except SQLAlchemyError as exc:
        raise store_failure(logger, "update_book", "updating book", exc) from exc

    return Response(status_code=status.HTTP_200_OK)


@router.delete(
    "/{book_id}",
    response_class=Response,
    summary="Delete a book",
    description="Delete a book. Deleting an id that does not exist also succeeds.",
)
def delete_book(
    book_id: BookId,
    service: BooksServiceDep,
    logger: AppLogger,
) -> Response:
    """Delete a book."""
    try:
        service.delete(book_id)
    except SQLAlchemyError as exc:
        raise store_failure(logger, "delete_book", "deleting book", exc) from exc

    return Response(status_code=status.HTTP_200_OK)
