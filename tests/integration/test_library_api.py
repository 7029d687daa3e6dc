"""Integration tests for the library catalogue, circulation and reservations"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from university_erp.infrastructure.database.models import Book, BookBorrowing
from university_erp.infrastructure.database.repositories.library import BorrowingRepository


@pytest.fixture
def librarian_headers(headers_for):
    return headers_for("librarian")


@pytest.fixture
def book(client: TestClient, librarian_headers):
    response = client.post(
        "/api/v1/library/books",
        json={"isbn": "9780262033848", "title": "Introduction to Algorithms", "author": "Cormen", "totalCopies": 2},
        headers=librarian_headers,
    )
    assert response.status_code == 201
    return response.json()["data"]


def borrow(client, headers, book, user_id=None, days=14):
    now = datetime.now(timezone.utc)
    return client.post(
        "/api/v1/library/borrowings",
        json={
            "bookId": book["id"],
            "userId": user_id or str(uuid.uuid4()),
            "borrowedDate": now.isoformat(),
            "dueDate": (now + timedelta(days=days)).isoformat(),
        },
        headers=headers,
    )


def test_available_copies_default_to_total(book):
    """Test a new book is fully available"""
    assert book["availableCopies"] == 2


def test_borrow_takes_a_copy(client: TestClient, librarian_headers, book):
    """Test borrowing decrements available copies"""
    response = borrow(client, librarian_headers, book)
    assert response.status_code == 201
    assert response.json()["data"]["status"] == "borrowed"

    current = client.get(f"/api/v1/library/books/{book['id']}", headers=librarian_headers).json()["data"]
    assert current["availableCopies"] == 1


def test_no_copies_left(client: TestClient, librarian_headers, book, db):
    """Test copies never go below zero"""
    borrow(client, librarian_headers, book)
    borrow(client, librarian_headers, book)
    response = borrow(client, librarian_headers, book)

    assert response.status_code == 400
    assert db.get(Book, uuid.UUID(book["id"])).available_copies == 0


def test_on_time_return_has_no_fine(client: TestClient, librarian_headers, book):
    """Test returning before the due date"""
    borrowing = borrow(client, librarian_headers, book).json()["data"]
    response = client.post(f"/api/v1/library/borrowings/{borrowing['id']}/return", headers=librarian_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "returned"
    assert data["fineAmount"] == 0
    assert data["finePaid"] is True

    current = client.get(f"/api/v1/library/books/{book['id']}", headers=librarian_headers).json()["data"]
    assert current["availableCopies"] == 2


def test_late_return_is_fined(client: TestClient, librarian_headers, book):
    """Test 3 days late costs 30"""
    borrowing = borrow(client, librarian_headers, book).json()["data"]
    due = datetime.fromisoformat(borrowing["dueDate"])
    if due.tzinfo is None:
        due = due.replace(tzinfo=timezone.utc)

    response = client.post(
        f"/api/v1/library/borrowings/{borrowing['id']}/return",
        json={"returnDate": (due + timedelta(days=3)).isoformat()},
        headers=librarian_headers,
    )
    data = response.json()["data"]
    assert data["status"] == "overdue"
    assert data["fineAmount"] == 30
    assert data["finePaid"] is False

    paid = client.post(f"/api/v1/library/borrowings/{borrowing['id']}/pay-fine", headers=librarian_headers)
    assert paid.json()["data"]["finePaid"] is True


def test_return_twice(client: TestClient, librarian_headers, book):
    """Test a book cannot be returned twice"""
    borrowing = borrow(client, librarian_headers, book).json()["data"]
    url = f"/api/v1/library/borrowings/{borrowing['id']}/return"
    client.post(url, headers=librarian_headers)

    response = client.post(url, headers=librarian_headers)
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Book already returned"


def test_third_renewal_fails_without_changes(client: TestClient, librarian_headers, student_headers, book):
    """Test two renewals are allowed and the third leaves the borrowing untouched"""
    borrowing = borrow(client, librarian_headers, book).json()["data"]
    url = f"/api/v1/library/borrowings/{borrowing['id']}/renew"

    assert client.post(url, headers=student_headers).json()["data"]["renewedCount"] == 1
    second = client.post(url, headers=student_headers).json()["data"]
    assert second["renewedCount"] == 2

    response = client.post(url, headers=student_headers)
    assert response.status_code == 400
    assert "Maximum renewal limit reached" in response.json()["error"]["message"]

    current = client.get(f"/api/v1/library/borrowings/{borrowing['id']}", headers=student_headers).json()["data"]
    assert current["renewedCount"] == 2
    assert current["dueDate"] == second["dueDate"]


def test_reservation_blocks_renewal(client: TestClient, librarian_headers, student_headers, book):
    """Test a pending reservation by someone else prevents renewal"""
    borrowing = borrow(client, librarian_headers, book).json()["data"]
    reservation = client.post(
        "/api/v1/library/reservations",
        json={"bookId": book["id"], "userId": str(uuid.uuid4())},
        headers=student_headers,
    )
    assert reservation.status_code == 201

    response = client.post(f"/api/v1/library/borrowings/{borrowing['id']}/renew", headers=student_headers)
    assert response.status_code == 400


def test_borrowing_quota(client: TestClient, librarian_headers):
    """Test a borrower can hold at most five books"""
    user_id = str(uuid.uuid4())
    for index in range(5):
        book = client.post(
            "/api/v1/library/books",
            json={"title": f"Book {index}", "author": "Author", "totalCopies": 1},
            headers=librarian_headers,
        ).json()["data"]
        assert borrow(client, librarian_headers, book, user_id=user_id).status_code == 201

    extra = client.post(
        "/api/v1/library/books", json={"title": "One more", "author": "Author"}, headers=librarian_headers
    ).json()["data"]
    response = borrow(client, librarian_headers, extra, user_id=user_id)
    assert response.status_code == 400



def add_books(client, headers, count):
    return [
        client.post(
            "/api/v1/library/books",
            json={"title": f"Book {index}", "author": "Author", "totalCopies": 1},
            headers=headers,
        ).json()["data"]
        for index in range(count)
    ]


def test_late_returns_free_the_quota(client: TestClient, librarian_headers):
    """Test books returned late no longer count as held"""
    user_id = str(uuid.uuid4())
    *held, extra = add_books(client, librarian_headers, 6)
    for book in held:
        borrowing = borrow(client, librarian_headers, book, user_id=user_id).json()["data"]
        due = datetime.fromisoformat(borrowing["dueDate"]).replace(tzinfo=timezone.utc)
        returned = client.post(
            f"/api/v1/library/borrowings/{borrowing['id']}/return",
            json={"returnDate": (due + timedelta(days=2)).isoformat()},
            headers=librarian_headers,
        )
        assert returned.json()["data"]["status"] == "overdue"

    response = borrow(client, librarian_headers, extra, user_id=user_id)
    assert response.status_code == 201


def test_past_due_loan_blocks_borrowing(client: TestClient, librarian_headers):
    """Test a loan past its due date stops new borrowing until returned"""
    user_id = str(uuid.uuid4())
    late, wanted = add_books(client, librarian_headers, 2)
    now = datetime.now(timezone.utc)
    overdue = client.post(
        "/api/v1/library/borrowings",
        json={
            "bookId": late["id"],
            "userId": user_id,
            "borrowedDate": (now - timedelta(days=30)).isoformat(),
            "dueDate": (now - timedelta(days=16)).isoformat(),
        },
        headers=librarian_headers,
    ).json()["data"]

    response = borrow(client, librarian_headers, wanted, user_id=user_id)
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Cannot borrow while an overdue book is outstanding"

    client.post(f"/api/v1/library/borrowings/{overdue['id']}/return", headers=librarian_headers)
    assert borrow(client, librarian_headers, wanted, user_id=user_id).status_code == 201


def test_extend_respects_renewal_limit(db, client: TestClient, librarian_headers, book):
    """Test the conditional renewal update refuses loans at the limit"""
    now = datetime.now(timezone.utc)
    borrowing = BookBorrowing(
        book_id=uuid.UUID(book["id"]),
        user_id=uuid.uuid4(),
        borrowed_date=now,
        due_date=now + timedelta(days=14),
        renewed_count=2,
    )
    db.add(borrowing)
    db.commit()

    repository = BorrowingRepository(db)
    assert repository.extend(borrowing.id, now + timedelta(days=28), max_renewals=2) is False
    assert repository.extend(borrowing.id, now + timedelta(days=28), max_renewals=3) is True
    db.commit()
    db.refresh(borrowing)
    assert borrowing.renewed_count == 3


def test_borrow_fulfils_own_reservation(client: TestClient, librarian_headers, student_headers, book):
    """Test borrowing a reserved book marks the borrower's reservation fulfilled"""
    user_id = str(uuid.uuid4())
    reservation = client.post(
        "/api/v1/library/reservations", json={"bookId": book["id"], "userId": user_id}, headers=student_headers
    ).json()["data"]

    borrow(client, librarian_headers, book, user_id=user_id)

    reservations = client.get(
        f"/api/v1/library/reservations?userId={user_id}", headers=student_headers
    ).json()["data"]["items"]
    assert reservations[0]["id"] == reservation["id"]
    assert reservations[0]["status"] == "fulfilled"


def test_catalogue_requires_librarian(client: TestClient, student_headers):
    """Test students cannot add books"""
    response = client.post(
        "/api/v1/library/books", json={"title": "X", "author": "Y"}, headers=student_headers
    )
    assert response.status_code == 403
