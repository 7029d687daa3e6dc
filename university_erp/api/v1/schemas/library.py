"""Schemas for the library catalogue and circulation"""

import uuid
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, model_validator

from university_erp.api.v1.schemas.common import CamelModel

UserType = Literal["student", "faculty", "staff"]


class BookCreate(CamelModel):
    isbn: Optional[str] = Field(None, max_length=20)
    title: str = Field(..., min_length=1, max_length=300)
    author: str = Field(..., min_length=1, max_length=200)
    publisher: Optional[str] = None
    publication_year: Optional[int] = Field(None, ge=1000, le=2100)
    category: Optional[str] = None
    language: Optional[str] = None
    total_copies: int = Field(1, ge=1)
    available_copies: Optional[int] = Field(None, ge=0)
    location: Optional[str] = None

    @model_validator(mode="after")
    def copies_within_total(self):
        if self.available_copies is not None and self.available_copies > self.total_copies:
            raise ValueError("Available copies cannot exceed total copies")
        return self


class BookUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    author: Optional[str] = Field(None, min_length=1, max_length=200)
    publisher: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None


class BookSchema(CamelModel):
    id: uuid.UUID
    isbn: Optional[str] = None
    title: str
    author: str
    publisher: Optional[str] = None
    publication_year: Optional[int] = None
    category: Optional[str] = None
    language: Optional[str] = None
    total_copies: int
    available_copies: int
    location: Optional[str] = None


class BorrowRequest(CamelModel):
    book_id: uuid.UUID
    user_id: uuid.UUID
    user_type: UserType = "student"
    borrowed_date: Optional[datetime] = None
    due_date: datetime
    remarks: Optional[str] = None


class ReturnRequest(CamelModel):
    return_date: Optional[datetime] = None
    remarks: Optional[str] = None


class RenewRequest(CamelModel):
    new_due_date: Optional[datetime] = None


class BorrowingSchema(CamelModel):
    id: uuid.UUID
    book_id: uuid.UUID
    user_id: uuid.UUID
    user_type: str
    borrowed_date: datetime
    due_date: datetime
    return_date: Optional[datetime] = None
    status: str
    fine_amount: int
    fine_paid: bool
    renewed_count: int
    remarks: Optional[str] = None


class ReservationCreate(CamelModel):
    book_id: uuid.UUID
    user_id: uuid.UUID
    user_type: UserType = "student"
    expiry_date: Optional[datetime] = None


class ReservationSchema(CamelModel):
    id: uuid.UUID
    book_id: uuid.UUID
    user_id: uuid.UUID
    user_type: str
    reservation_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    status: str
