"""Book catalog blueprint."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from http import HTTPStatus

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from werkzeug.exceptions import BadRequest, NotFound

from models import db
from models.book import Book
from models.borrow import Borrow
from utils.auth import require_user, roles_required
from utils.request_validation import parse_json_request

books_bp = Blueprint("books", __name__)

BOOK_FIELDS = ("title", "author", "description", "price", "quantity")


def _validate_book_payload(data: dict):
    errors = []

    price = None
    try:
        price = Decimal(str(data.get("price")))
    except (InvalidOperation, TypeError):
        errors.append("price must be numeric")
    else:
        if not price.is_finite() or price < 0:
            errors.append("price must be a non-negative number")

    quantity = None
    raw_quantity = data.get("quantity")
    if isinstance(raw_quantity, bool):
        errors.append("quantity must be an integer")
    else:
        try:
            quantity = int(str(raw_quantity))
        except (TypeError, ValueError):
            errors.append("quantity must be an integer")
        else:
            if quantity < 0:
                errors.append("quantity must not be negative")

    return errors, price, quantity


def _get_book_or_404(book_id: int) -> Book:
    book = db.session.get(Book, book_id)
    if book is None:
        raise NotFound("Book not found.")
    return book


@books_bp.route("/admin/add", methods=["POST"])
@roles_required("admin")
def add_book():
    """Add a book to the catalog. Admins only."""

    data = parse_json_request(
        request, required_keys=BOOK_FIELDS, message="Please fill all fields."
    )
    errors, price, quantity = _validate_book_payload(data)
    if errors:
        raise BadRequest("; ".join(errors))

    book = Book(
        title=str(data["title"]).strip(),
        author=str(data["author"]).strip(),
        description=str(data["description"]).strip(),
        price=price,
        quantity=quantity,
        availability=quantity > 0,
    )
    db.session.add(book)
    db.session.commit()

    return jsonify({"message": "Book added.", "book": book.to_dict()}), HTTPStatus.CREATED


@books_bp.route("/all", methods=["GET"])
@jwt_required()
def list_books():
    require_user()
    books = Book.query.order_by(Book.created_at.desc(), Book.id.desc()).all()
    return jsonify({"books": [book.to_dict() for book in books], "count": len(books)})


@books_bp.route("/delete/<int:book_id>", methods=["DELETE"])
@roles_required("admin")
def delete_book(book_id: int):
    """Remove a book and its returned loan history. Admins only."""

    book = _get_book_or_404(book_id)
    if Borrow.open_filter(book.borrows).first() is not None:
        raise BadRequest("Book has copies on loan and cannot be deleted.")

    db.session.delete(book)
    db.session.commit()
    return jsonify({"message": "Book deleted successfully."})
