"""Tests for the borrow and return workflow."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from models import db
from models.book import Book
from models.borrow import Borrow


@pytest.fixture()
def book_id(app) -> int:
    with app.app_context():
        book = Book(
            title="Dune",
            author="Frank Herbert",
            description="Desert planet.",
            price=Decimal("5.00"),
            quantity=1,
        )
        db.session.add(book)
        db.session.commit()
        return book.id


def _borrow(client, book_id: int, headers, email: str = "reader@example.com"):
    return client.post(
        f"/api/v1/borrow/record-borrow-book/{book_id}", json={"email": email}, headers=headers
    )


def _return(client, book_id: int, headers, email: str = "reader@example.com"):
    return client.put(
        f"/api/v1/borrow/return-borrowed-book/{book_id}", json={"email": email}, headers=headers
    )


def test_record_borrow_takes_a_copy(app, client, admin_headers, reader, book_id):
    response = _borrow(client, book_id, admin_headers)

    assert response.status_code == 201
    borrow = response.get_json()["borrow"]
    assert borrow["status"] == "open"
    assert borrow["user_id"] == reader
    assert borrow["price"] == 5.0

    with app.app_context():
        book = db.session.get(Book, book_id)
        assert book.quantity == 0
        assert book.availability is False
        record = db.session.get(Borrow, borrow["id"])
        assert record.due_date - record.borrow_date == timedelta(days=7)


def test_borrow_unavailable_book(client, admin_headers, reader, book_id):
    assert _borrow(client, book_id, admin_headers).status_code == 201

    response = _borrow(client, book_id, admin_headers)

    assert response.status_code == 400
    assert response.get_json()["detail"] == "Book not available."


def test_borrow_same_book_twice(app, client, admin_headers, reader, book_id):
    with app.app_context():
        db.session.get(Book, book_id).quantity = 5
        db.session.commit()

    assert _borrow(client, book_id, admin_headers).status_code == 201
    response = _borrow(client, book_id, admin_headers)

    assert response.status_code == 400
    assert response.get_json()["detail"] == "Book already borrowed."


def test_borrow_unknown_user_or_book(client, admin_headers, reader, book_id):
    assert _borrow(client, book_id, admin_headers, email="ghost@example.com").status_code == 404
    assert _borrow(client, 9999, admin_headers).status_code == 404


def test_reader_cannot_record_borrow(client, reader_headers, book_id):
    assert _borrow(client, book_id, reader_headers).status_code == 403


def test_return_on_time_has_no_fine(app, client, admin_headers, reader, book_id):
    _borrow(client, book_id, admin_headers)

    response = _return(client, book_id, admin_headers)

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["total_charges"] == 5.0
    assert payload["borrow"]["fine"] == 0.0
    assert payload["borrow"]["status"] == "returned"
    with app.app_context():
        book = db.session.get(Book, book_id)
        assert book.quantity == 1
        assert book.availability is True


def test_late_return_charges_fine(app, client, admin_headers, reader, book_id):
    borrow_id = _borrow(client, book_id, admin_headers).get_json()["borrow"]["id"]
    with app.app_context():
        record = db.session.get(Borrow, borrow_id)
        record.due_date = datetime.utcnow() - timedelta(hours=10, minutes=30)
        db.session.commit()

    payload = _return(client, book_id, admin_headers).get_json()

    assert payload["borrow"]["fine"] == pytest.approx(1.0)
    assert payload["total_charges"] == pytest.approx(6.0)
    assert "$6.00" in payload["message"]


def test_return_without_open_borrow(client, admin_headers, reader, book_id):
    response = _return(client, book_id, admin_headers)

    assert response.status_code == 400


def test_borrow_listings(app, client, admin_headers, reader, reader_headers, book_id):
    _borrow(client, book_id, admin_headers)

    mine = client.get("/api/v1/borrow/my-borrowed-books", headers=reader_headers)
    assert mine.status_code == 200
    records = mine.get_json()["borrowed_books"]
    assert len(records) == 1
    assert records[0]["book_title"] == "Dune"

    forbidden = client.get("/api/v1/borrow/borrowed-books-by-users", headers=reader_headers)
    assert forbidden.status_code == 403

    everything = client.get("/api/v1/borrow/borrowed-books-by-users", headers=admin_headers)
    assert everything.status_code == 200
    assert everything.get_json()["borrowed_books"][0]["user_email"] == "reader@example.com"
