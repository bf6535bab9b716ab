"""Tests for the book catalog routes."""

from __future__ import annotations

from decimal import Decimal

import pytest

from models import db
from models.book import Book
from models.borrow import Borrow

ADD_URL = "/api/v1/book/admin/add"

BOOK = {
    "title": "Clean Code",
    "author": "Robert C. Martin",
    "description": "A handbook of agile software craftsmanship.",
    "price": "12.50",
    "quantity": 3,
}


def test_admin_can_add_book(app, client, admin_headers):
    response = client.post(ADD_URL, json=BOOK, headers=admin_headers)

    assert response.status_code == 201
    book = response.get_json()["book"]
    assert book["title"] == "Clean Code"
    assert book["price"] == 12.5
    assert book["quantity"] == 3
    assert book["availability"] is True

    with app.app_context():
        assert Book.query.count() == 1


def test_reader_cannot_add_book(client, reader_headers):
    response = client.post(ADD_URL, json=BOOK, headers=reader_headers)

    assert response.status_code == 403
    assert "(user)" in response.get_json()["detail"]


def test_add_book_requires_token(client):
    response = client.post(ADD_URL, json=BOOK)

    assert response.status_code == 401


@pytest.mark.parametrize(
    "overrides, fragment",
    [
        ({"title": ""}, "Please fill all fields."),
        ({"price": "cheap"}, "price must be numeric"),
        ({"price": "-1"}, "non-negative"),
        ({"quantity": "two"}, "quantity must be an integer"),
        ({"quantity": -4}, "must not be negative"),
    ],
)
def test_add_book_validation(client, admin_headers, overrides, fragment):
    response = client.post(ADD_URL, json={**BOOK, **overrides}, headers=admin_headers)

    assert response.status_code == 400
    assert fragment in response.get_json()["detail"]


def test_list_books_for_signed_in_user(app, client, reader_headers):
    with app.app_context():
        db.session.add(Book(title="A", author="X", description="d", price=Decimal("1.00"), quantity=1))
        db.session.add(Book(title="B", author="Y", description="d", price=Decimal("2.00"), quantity=0, availability=False))
        db.session.commit()

    response = client.get("/api/v1/book/all", headers=reader_headers)

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["count"] == 2
    assert {book["title"] for book in payload["books"]} == {"A", "B"}


def test_admin_can_delete_book(app, client, admin_headers):
    book_id = client.post(ADD_URL, json=BOOK, headers=admin_headers).get_json()["book"]["id"]

    response = client.delete(f"/api/v1/book/delete/{book_id}", headers=admin_headers)
    assert response.status_code == 200

    missing = client.delete(f"/api/v1/book/delete/{book_id}", headers=admin_headers)
    assert missing.status_code == 404

    with app.app_context():
        assert db.session.get(Book, book_id) is None


@pytest.mark.parametrize(
    "overrides, availability",
    [
        ({"quantity": 0}, False),
        ({"price": 0, "quantity": 1}, True),
    ],
)
def test_add_book_accepts_zero_values(client, admin_headers, overrides, availability):
    response = client.post(ADD_URL, json={**BOOK, **overrides}, headers=admin_headers)

    assert response.status_code == 201
    book = response.get_json()["book"]
    assert book["quantity"] == overrides["quantity"]
    assert book["availability"] is availability


def test_add_book_rejects_null_field(client, admin_headers):
    response = client.post(ADD_URL, json={**BOOK, "price": None}, headers=admin_headers)

    assert response.status_code == 400
    assert response.get_json()["detail"] == "Please fill all fields."


def test_book_on_loan_cannot_be_deleted(app, client, admin_headers, reader):
    book_id = client.post(ADD_URL, json=BOOK, headers=admin_headers).get_json()["book"]["id"]
    borrow_url = f"/api/v1/borrow/record-borrow-book/{book_id}"
    assert client.post(
        borrow_url, json={"email": "reader@example.com"}, headers=admin_headers
    ).status_code == 201

    response = client.delete(f"/api/v1/book/delete/{book_id}", headers=admin_headers)

    assert response.status_code == 400
    assert "on loan" in response.get_json()["detail"]
    with app.app_context():
        assert db.session.get(Book, book_id) is not None
        assert Borrow.query.count() == 1

    returned = client.put(
        f"/api/v1/borrow/return-borrowed-book/{book_id}",
        json={"email": "reader@example.com"},
        headers=admin_headers,
    )
    assert returned.status_code == 200

    deleted = client.delete(f"/api/v1/book/delete/{book_id}", headers=admin_headers)
    assert deleted.status_code == 200
