"""Data access for books, borrowings and reservations"""

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import and_, or_, update

from university_erp.infrastructure.database.models import Book, BookBorrowing, BookReservation
from university_erp.infrastructure.database.repositories.base import BaseRepository, paginate, search_filter

ACTIVE_BORROWING_STATUSES = ("borrowed", "overdue")


def overdue_clause(now: datetime):
    """Unreturned loans that are marked overdue or are past their due date"""
    return and_(
        BookBorrowing.return_date.is_(None),
        or_(
            BookBorrowing.status == "overdue",
            and_(BookBorrowing.status == "borrowed", BookBorrowing.due_date < now),
        ),
    )


class BookRepository(BaseRepository[Book]):
    model = Book

    def list(
        self,
        offset: int,
        limit: int,
        category: Optional[str] = None,
        available_only: bool = False,
        search: Optional[str] = None,
    ) -> Tuple[List[Book], int]:
        query = self.db.query(Book)
        if category:
            query = query.filter(Book.category == category)
        if available_only:
            query = query.filter(Book.available_copies > 0)
        if search:
            query = query.filter(search_filter(search, Book.title, Book.author, Book.isbn))
        return paginate(query.order_by(Book.title), offset, limit)

    def take_copy(self, book_id) -> bool:
        """Atomically reserve one copy; False when none is available"""
        self.db.flush()
        result = self.db.execute(
            update(Book)
            .where(Book.id == book_id, Book.available_copies > 0)
            .values(available_copies=Book.available_copies - 1)
        )
        return result.rowcount == 1

    def release_copy(self, book_id) -> bool:
        """Atomically put one copy back, never above the total"""
        self.db.flush()
        result = self.db.execute(
            update(Book)
            .where(Book.id == book_id, Book.available_copies < Book.total_copies)
            .values(available_copies=Book.available_copies + 1)
        )
        return result.rowcount == 1


class BorrowingRepository(BaseRepository[BookBorrowing]):
    model = BookBorrowing

    def count_active(self, user_id) -> int:
        """Books the user still holds"""
        return (
            self.db.query(BookBorrowing)
            .filter(
                BookBorrowing.user_id == user_id,
                BookBorrowing.status.in_(ACTIVE_BORROWING_STATUSES),
                BookBorrowing.return_date.is_(None),
            )
            .count()
        )

    def has_overdue(self, user_id, now: datetime) -> bool:
        return (
            self.db.query(BookBorrowing.id)
            .filter(BookBorrowing.user_id == user_id, overdue_clause(now))
            .first()
            is not None
        )

    def extend(self, borrowing_id, due_date: datetime, max_renewals: int) -> bool:
        """Atomically renew an open loan; False when the renewal limit was reached"""
        self.db.flush()
        result = self.db.execute(
            update(BookBorrowing)
            .where(
                BookBorrowing.id == borrowing_id,
                BookBorrowing.status == "borrowed",
                BookBorrowing.renewed_count < max_renewals,
            )
            .values(due_date=due_date, renewed_count=BookBorrowing.renewed_count + 1)
        )
        return result.rowcount == 1

    def list(
        self,
        offset: int,
        limit: int,
        user_id=None,
        book_id=None,
        status: Optional[str] = None,
    ) -> Tuple[List[BookBorrowing], int]:
        query = self.db.query(BookBorrowing)
        if user_id:
            query = query.filter(BookBorrowing.user_id == user_id)
        if book_id:
            query = query.filter(BookBorrowing.book_id == book_id)
        if status:
            query = query.filter(BookBorrowing.status == status)
        return paginate(query.order_by(BookBorrowing.borrowed_date.desc()), offset, limit)


class ReservationRepository(BaseRepository[BookReservation]):
    model = BookReservation

    def has_pending(self, book_id) -> bool:
        return self.exists(book_id=book_id, status="pending")

    def find_pending(self, book_id, user_id) -> Optional[BookReservation]:
        return (
            self.db.query(BookReservation)
            .filter(
                BookReservation.book_id == book_id,
                BookReservation.user_id == user_id,
                BookReservation.status == "pending",
            )
            .first()
        )

    def list(self, offset: int, limit: int, book_id=None, user_id=None, status: Optional[str] = None) -> Tuple[List[BookReservation], int]:
        query = self.db.query(BookReservation)
        if book_id:
            query = query.filter(BookReservation.book_id == book_id)
        if user_id:
            query = query.filter(BookReservation.user_id == user_id)
        if status:
            query = query.filter(BookReservation.status == status)
        return paginate(query.order_by(BookReservation.reservation_date), offset, limit)
