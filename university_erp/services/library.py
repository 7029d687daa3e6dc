"""Library catalogue, circulation and reservations"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from university_erp.config import settings
from university_erp.domain.exceptions import ConflictError, ValidationError
from university_erp.domain.library import calculate_fine, ensure_can_borrow, ensure_can_return, next_due_date
from university_erp.infrastructure.database.models import Book, BookBorrowing, BookReservation
from university_erp.infrastructure.database.repositories.library import (
    BookRepository,
    BorrowingRepository,
    ReservationRepository,
)
from university_erp.infrastructure.observability.metrics import record_borrowing_action
from university_erp.services.base import BaseService
from university_erp.utils.date_utils import as_aware, utcnow

logger = logging.getLogger(__name__)


class LibraryService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.books = BookRepository(db)
        self.borrowings = BorrowingRepository(db)
        self.reservations = ReservationRepository(db)

    # Catalogue

    def list_books(self, offset: int, limit: int, **filters) -> Tuple[List[Book], int]:
        return self.books.list(offset, limit, **filters)

    def get_book(self, book_id) -> Book:
        return self.require(self.books.get(book_id), "Book")

    def add_book(self, data) -> Book:
        if data.isbn and self.books.exists(isbn=data.isbn):
            raise ConflictError("Book with this ISBN already exists")
        fields = data.model_dump()
        if fields["available_copies"] is None:
            fields["available_copies"] = fields["total_copies"]
        with self.transaction(ConflictError("Book with this ISBN already exists")):
            book = self.books.create(**fields)
        return book

    def update_book(self, book_id, data) -> Book:
        book = self.get_book(book_id)
        with self.transaction():
            self.books.update(book, **data.model_dump(exclude_unset=True))
        return book

    # Circulation

    def list_borrowings(self, offset: int, limit: int, **filters) -> Tuple[List[BookBorrowing], int]:
        return self.borrowings.list(offset, limit, **filters)

    def get_borrowing(self, borrowing_id) -> BookBorrowing:
        return self.require(self.borrowings.get(borrowing_id), "Borrowing")

    def borrow(self, data) -> BookBorrowing:
        """
        Lend a copy of a book.

        The copy is taken with a conditional UPDATE so concurrent loans can
        never drive the available count below zero.
        """
        self.get_book(data.book_id)
        borrowed_date = as_aware(data.borrowed_date) if data.borrowed_date else utcnow()
        due_date = as_aware(data.due_date)
        if due_date < borrowed_date:
            raise ValidationError("Due date must be after the borrowed date")

        ensure_can_borrow(
            active_count=self.borrowings.count_active(data.user_id),
            has_overdue=self.borrowings.has_overdue(data.user_id, utcnow()),
            max_active=settings.library_max_active_borrowings,
        )

        with self.transaction():
            if not self.books.take_copy(data.book_id):
                raise ValidationError("No copies of this book are available")
            borrowing = self.borrowings.create(
                book_id=data.book_id,
                user_id=data.user_id,
                user_type=data.user_type,
                borrowed_date=borrowed_date,
                due_date=due_date,
                status="borrowed",
                fine_amount=0,
                fine_paid=True,
                renewed_count=0,
                remarks=data.remarks,
            )
            reservation = self.reservations.find_pending(data.book_id, data.user_id)
            if reservation is not None:
                self.reservations.update(reservation, status="fulfilled")

        record_borrowing_action("borrow")
        logger.info("Book borrowed", extra={"borrowing_id": str(borrowing.id), "book_id": str(data.book_id)})
        return borrowing

    def return_book(self, borrowing_id, return_date: Optional[datetime] = None, remarks: Optional[str] = None) -> BookBorrowing:
        borrowing = self.get_borrowing(borrowing_id)
        ensure_can_return(borrowing.status, borrowing.return_date)

        returned_at = as_aware(return_date) if return_date else utcnow()
        assessment = calculate_fine(as_aware(borrowing.due_date), returned_at, settings.library_fine_per_day)

        with self.transaction():
            self.borrowings.update(
                borrowing,
                return_date=returned_at,
                status=assessment.status,
                fine_amount=assessment.fine_amount,
                fine_paid=assessment.fine_paid,
                remarks=remarks if remarks is not None else borrowing.remarks,
            )
            self.books.release_copy(borrowing.book_id)

        record_borrowing_action("return", assessment.fine_amount)
        logger.info(
            "Book returned",
            extra={
                "borrowing_id": str(borrowing.id),
                "days_overdue": assessment.days_overdue,
                "fine_amount": assessment.fine_amount,
            },
        )
        return borrowing

    def renew(self, borrowing_id, new_due_date: Optional[datetime] = None) -> BookBorrowing:
        """Extend a loan; a rejected renewal leaves the borrowing untouched"""
        borrowing = self.get_borrowing(borrowing_id)
        due = next_due_date(
            status=borrowing.status,
            renewed_count=borrowing.renewed_count,
            current_due=as_aware(borrowing.due_date),
            has_pending_reservation=self.reservations.has_pending(borrowing.book_id),
            requested_due=as_aware(new_due_date) if new_due_date else None,
            max_renewals=settings.library_max_renewals,
            renewal_days=settings.library_renewal_days,
        )

        with self.transaction():
            # Another renewal may have landed since the checks above
            if not self.borrowings.extend(borrowing.id, due, settings.library_max_renewals):
                raise ValidationError("Maximum renewal limit reached")
        self.db.refresh(borrowing)

        record_borrowing_action("renew")
        logger.info("Borrowing renewed", extra={"borrowing_id": str(borrowing.id), "renewed_count": borrowing.renewed_count})
        return borrowing

    def pay_fine(self, borrowing_id) -> BookBorrowing:
        borrowing = self.get_borrowing(borrowing_id)
        if borrowing.fine_amount <= 0 or borrowing.fine_paid:
            raise ValidationError("No outstanding fine for this borrowing")
        with self.transaction():
            self.borrowings.update(borrowing, fine_paid=True)
        return borrowing

    # Reservations

    def list_reservations(self, offset: int, limit: int, **filters) -> Tuple[List[BookReservation], int]:
        return self.reservations.list(offset, limit, **filters)

    def reserve(self, data) -> BookReservation:
        self.get_book(data.book_id)
        if self.reservations.find_pending(data.book_id, data.user_id):
            raise ConflictError("A pending reservation for this book already exists")
        with self.transaction():
            reservation = self.reservations.create(
                book_id=data.book_id,
                user_id=data.user_id,
                user_type=data.user_type,
                reservation_date=utcnow(),
                expiry_date=as_aware(data.expiry_date) if data.expiry_date else None,
                status="pending",
            )
        return reservation

    def cancel_reservation(self, reservation_id) -> BookReservation:
        reservation = self.require(self.reservations.get(reservation_id), "Reservation")
        if reservation.status != "pending":
            raise ValidationError("Only pending reservations can be cancelled")
        with self.transaction():
            self.reservations.update(reservation, status="cancelled")
        return reservation
