"""/library - catalogue, circulation, fines and reservations"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from university_erp.api.dependencies import (
    PageParams,
    get_current_user,
    get_library_service,
    get_page_params,
    require_roles,
)
from university_erp.api.v1.schemas.common import ApiResponse, Page, ok, paged
from university_erp.api.v1.schemas.library import (
    BookCreate,
    BookSchema,
    BookUpdate,
    BorrowingSchema,
    BorrowRequest,
    RenewRequest,
    ReservationCreate,
    ReservationSchema,
    ReturnRequest,
)
from university_erp.services.library import LibraryService

router = APIRouter(prefix="/library", dependencies=[Depends(get_current_user)])

librarians = require_roles("librarian")


# Catalogue

@router.get("/books", response_model=ApiResponse[Page[BookSchema]])
def list_books(
    category: Optional[str] = None,
    available_only: bool = Query(False, alias="availableOnly"),
    search: Optional[str] = None,
    params: PageParams = Depends(get_page_params),
    service: LibraryService = Depends(get_library_service),
):
    items, total = service.list_books(
        params.offset, params.limit, category=category, available_only=available_only, search=search
    )
    return paged(items, total, params.page, params.limit)


@router.post(
    "/books",
    response_model=ApiResponse[BookSchema],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(librarians)],
)
def add_book(body: BookCreate, service: LibraryService = Depends(get_library_service)):
    return ok(service.add_book(body), "Book added successfully")


@router.get("/books/{book_id}", response_model=ApiResponse[BookSchema])
def get_book(book_id: uuid.UUID, service: LibraryService = Depends(get_library_service)):
    return ok(service.get_book(book_id))


@router.put("/books/{book_id}", response_model=ApiResponse[BookSchema], dependencies=[Depends(librarians)])
def update_book(book_id: uuid.UUID, body: BookUpdate, service: LibraryService = Depends(get_library_service)):
    return ok(service.update_book(book_id, body), "Book updated successfully")


# Circulation

@router.get("/borrowings", response_model=ApiResponse[Page[BorrowingSchema]])
def list_borrowings(
    user_id: Optional[uuid.UUID] = Query(None, alias="userId"),
    book_id: Optional[uuid.UUID] = Query(None, alias="bookId"),
    borrowing_status: Optional[str] = Query(None, alias="status"),
    params: PageParams = Depends(get_page_params),
    service: LibraryService = Depends(get_library_service),
):
    items, total = service.list_borrowings(
        params.offset, params.limit, user_id=user_id, book_id=book_id, status=borrowing_status
    )
    return paged(items, total, params.page, params.limit)


@router.post(
    "/borrowings",
    response_model=ApiResponse[BorrowingSchema],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(librarians)],
)
def borrow_book(body: BorrowRequest, service: LibraryService = Depends(get_library_service)):
    """
    Lend a book.

    Rejected when no copy is available, when the borrower already holds the
    maximum number of active loans, or when they have an overdue loan.
    """
    return ok(service.borrow(body), "Book borrowed successfully")


@router.get("/borrowings/{borrowing_id}", response_model=ApiResponse[BorrowingSchema])
def get_borrowing(borrowing_id: uuid.UUID, service: LibraryService = Depends(get_library_service)):
    return ok(service.get_borrowing(borrowing_id))


@router.post("/borrowings/{borrowing_id}/return", response_model=ApiResponse[BorrowingSchema], dependencies=[Depends(librarians)])
def return_book(
    borrowing_id: uuid.UUID,
    body: Optional[ReturnRequest] = None,
    service: LibraryService = Depends(get_library_service),
):
    """Return a book; late returns are fined per started day overdue"""
    body = body or ReturnRequest()
    return ok(service.return_book(borrowing_id, body.return_date, body.remarks), "Book returned successfully")


@router.post("/borrowings/{borrowing_id}/renew", response_model=ApiResponse[BorrowingSchema])
def renew_borrowing(
    borrowing_id: uuid.UUID,
    body: Optional[RenewRequest] = None,
    service: LibraryService = Depends(get_library_service),
):
    new_due_date = body.new_due_date if body else None
    return ok(service.renew(borrowing_id, new_due_date), "Book renewed successfully")


@router.post("/borrowings/{borrowing_id}/pay-fine", response_model=ApiResponse[BorrowingSchema], dependencies=[Depends(librarians)])
def pay_fine(borrowing_id: uuid.UUID, service: LibraryService = Depends(get_library_service)):
    return ok(service.pay_fine(borrowing_id), "Fine paid")


# Reservations

@router.get("/reservations", response_model=ApiResponse[Page[ReservationSchema]])
def list_reservations(
    book_id: Optional[uuid.UUID] = Query(None, alias="bookId"),
    user_id: Optional[uuid.UUID] = Query(None, alias="userId"),
    reservation_status: Optional[str] = Query(None, alias="status"),
    params: PageParams = Depends(get_page_params),
    service: LibraryService = Depends(get_library_service),
):
    items, total = service.list_reservations(
        params.offset, params.limit, book_id=book_id, user_id=user_id, status=reservation_status
    )
    return paged(items, total, params.page, params.limit)


@router.post("/reservations", response_model=ApiResponse[ReservationSchema], status_code=status.HTTP_201_CREATED)
def reserve_book(body: ReservationCreate, service: LibraryService = Depends(get_library_service)):
    return ok(service.reserve(body), "Book reserved successfully")


@router.post("/reservations/{reservation_id}/cancel", response_model=ApiResponse[ReservationSchema])
def cancel_reservation(reservation_id: uuid.UUID, service: LibraryService = Depends(get_library_service)):
    return ok(service.cancel_reservation(reservation_id), "Reservation cancelled")
