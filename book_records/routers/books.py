"""
Books Router

The five record endpoints. Each one maps to a single BookStore call, which
in turn issues a single SQL statement.

    GET    /books              list every book
    POST   /books/create       create a book (id generated by the service)
    GET    /books/get/{id}     fetch one book
    PUT    /books/update/{id}  overwrite a book's fields
    DELETE /books/delete/{id}  delete a book

The id is everything after the route prefix, so an empty id reaches the
handler and is rejected with 400. A wrong verb on any of these paths is a
405 from FastAPI's routing. BookNotFoundError and StoreError are turned
into 404 and 500 by the exception handlers registered in main.py.
"""

from fastapi import APIRouter, HTTPException, status

from book_records.dependencies import BookStoreDep
from book_records.schemas import BookPayload, BookResponse, MessageResponse

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
        500: {"description": "Record store failure"},
    },
)


# =============================================================================
# Helper Functions
# =============================================================================
def require_book_id(book_id: str) -> str:
    """
    Reject an empty id taken from the path.

    Raises:
        HTTPException: 400 if the id is empty
    """
    if not book_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Book ID is required",
        )
    return book_id


# =============================================================================
# CRUD Endpoints
# =============================================================================

@router.get(
    "",
    response_model=list[BookResponse],
    summary="List all books",
    description="Get every book in the store's natural order.",
)
def list_books(store: BookStoreDep) -> list[BookResponse]:
    """
    List all books.

    Always a JSON array; an empty table gives [].
    """
    return [BookResponse.model_validate(book) for book in store.list_books()]


@router.post(
    "/create",
    response_model=BookResponse,
    summary="Create a new book",
    description="Store a new book under a generated id. Any id in the body is ignored.",
)
def create_book(book_data: BookPayload, store: BookStoreDep) -> BookResponse:
    """
    Create a new book.

    Args:
        book_data: Book fields decoded from the JSON body
        store: Record store for this request

    Returns:
        The stored book including its generated id
    """
    book = store.create_book(book_data)
    return BookResponse.model_validate(book)


@router.get(
    "/get/{book_id:path}",
    response_model=BookResponse,
    summary="Get a book by ID",
    description="Retrieve a single book.",
)
def get_book(book_id: str, store: BookStoreDep) -> BookResponse:
    """
    Get a single book by its ID.

    Raises:
        HTTPException: 400 if the id is empty
    """
    book = store.get_book(require_book_id(book_id))
    return BookResponse.model_validate(book)


@router.put(
    "/update/{book_id:path}",
    response_model=MessageResponse,
    summary="Update a book",
    description="Overwrite every field of an existing book except its id.",
)
def update_book(
    book_id: str,
    book_data: BookPayload,
    store: BookStoreDep,
) -> MessageResponse:
    """
    Update an existing book.

    PUT semantics: fields missing from the body are stored as "".
    Updating an id that does not exist is a 404, not a no-op.
    """
    store.update_book(require_book_id(book_id), book_data)
    return MessageResponse(message="Book updated successfully")


@router.delete(
    "/delete/{book_id:path}",
    response_model=MessageResponse,
    summary="Delete a book",
    description="Permanently delete a book from the store.",
)
def delete_book(book_id: str, store: BookStoreDep) -> MessageResponse:
    """
    Delete a book.

    Raises:
        HTTPException: 400 if the id is empty
    """
    store.delete_book(require_book_id(book_id))
    return MessageResponse(message="Book deleted successfully")
