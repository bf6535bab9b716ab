"""Borrow/return blueprint."""

from __future__ import annotations

from datetime import datetime, timedelta
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required
from werkzeug.exceptions import BadRequest, NotFound

from models import db
from models.book import Book
from models.borrow import Borrow
from models.user import User
from utils.auth import require_user, roles_required
from utils.fines import calculate_fine
from utils.request_validation import normalize_email, parse_json_request

borrows_bp = Blueprint("borrows", __name__)


def _get_book_or_404(book_id: int) -> Book:
    book = db.session.get(Book, book_id)
    if book is None:
        raise NotFound("Book not found.")
    return book


def _get_borrower_or_404() -> User:
    payload = parse_json_request(
        request, required_keys=("email",), message="Email is required."
    )
    email = normalize_email(payload["email"])
    user = User.query.filter_by(email=email, account_verified=True).first()
    if user is None:
        raise NotFound("User not found.")
    return user


def _open_borrow(user: User, book: Book) -> Borrow | None:
    return Borrow.open_filter(
        Borrow.query.filter_by(user_id=user.id, book_id=book.id)
    ).first()


@borrows_bp.route("/record-borrow-book/<int:book_id>", methods=["POST"])
@roles_required("admin")
def record_borrow(book_id: int):
    """Lend a copy of a book to a verified user."""

    book = _get_book_or_404(book_id)
    user = _get_borrower_or_404()

    if book.quantity <= 0:
        raise BadRequest("Book not available.")

    if _open_borrow(user, book) is not None:
        raise BadRequest("Book already borrowed.")

    now = datetime.utcnow()
    book.take_copy()
    borrow = Borrow(
        user_id=user.id,
        book_id=book.id,
        price=book.price,
        borrow_date=now,
        due_date=now + timedelta(days=current_app.config["BORROW_PERIOD_DAYS"]),
    )
    db.session.add(borrow)
    db.session.commit()

    return (
        jsonify({"message": "Borrowed book recorded successfully.", "borrow": borrow.to_dict()}),
        HTTPStatus.CREATED,
    )


@borrows_bp.route("/return-borrowed-book/<int:book_id>", methods=["PUT"])
@roles_required("admin")
def return_borrowed_book(book_id: int):
    """Close the user's open loan of a book and settle the fine."""

    book = _get_book_or_404(book_id)
    user = _get_borrower_or_404()

    borrow = _open_borrow(user, book)
    if borrow is None:
        raise BadRequest("You have not borrowed this book.")

    now = datetime.utcnow()
    borrow.return_date = now
    borrow.fine = calculate_fine(
        borrow.due_date, now=now, fine_per_hour=current_app.config["FINE_PER_HOUR"]
    )
    book.put_back_copy()
    db.session.commit()

    total = borrow.price + borrow.fine
    return jsonify(
        {
            "message": (
                "The book has been returned successfully. The total charges, "
                f"including a fine, are ${total:.2f}."
            ),
            "total_charges": float(total),
            "borrow": borrow.to_dict(),
        }
    )


@borrows_bp.route("/my-borrowed-books", methods=["GET"])
@jwt_required()
def my_borrowed_books():
    user = require_user()
    borrows = (
        Borrow.query.filter_by(user_id=user.id)
        .order_by(Borrow.borrow_date.desc(), Borrow.id.desc())
        .all()
    )
    return jsonify({"borrowed_books": [borrow.to_dict() for borrow in borrows]})


@borrows_bp.route("/borrowed-books-by-users", methods=["GET"])
@roles_required("admin")
def borrowed_books_by_users():
    """Every loan on record. Admins only."""

    borrows = Borrow.query.order_by(Borrow.borrow_date.desc(), Borrow.id.desc()).all()
    return jsonify({"borrowed_books": [borrow.to_dict() for borrow in borrows]})
