"""Borrow record model."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import and_

from . import db


def _as_float(value):
    return float(value) if isinstance(value, Decimal) else value


class Borrow(db.Model):
    """Tracks a single loan of a book copy to a user.

    A record moves from open to notified (reminder sent) to returned and
    never back: ``notified`` is only ever set, ``return_date`` is set once.
    """

    __tablename__ = "borrows"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    book_id = db.Column(
        db.Integer,
        db.ForeignKey("books.id"),
        nullable=False,
        index=True,
    )
    price = db.Column(db.Numeric(10, 2), nullable=False)
    borrow_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    due_date = db.Column(db.DateTime, nullable=False)
    return_date = db.Column(db.DateTime, nullable=True)
    fine = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    notified = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    user = db.relationship("User", back_populates="borrows")
    book = db.relationship("Book", back_populates="borrows")

    @property
    def is_returned(self) -> bool:
        return self.return_date is not None

    @property
    def status(self) -> str:
        if self.is_returned:
            return "returned"
        if self.notified:
            return "notified"
        return "open"

    @staticmethod
    def open_filter(query):
        """Restrict a query to loans that have not been returned."""

        return query.filter(Borrow.return_date.is_(None))

    @staticmethod
    def overdue_filter(query, cutoff: datetime):
        """Open, not yet notified loans that fell due before ``cutoff``."""

        return query.filter(
            and_(
                Borrow.due_date < cutoff,
                Borrow.return_date.is_(None),
                Borrow.notified.is_(False),
            )
        )

    def to_dict(self) -> dict:
        """Serialize the borrow record."""

        return {
            "id": self.id,
            "user_id": self.user_id,
            "book_id": self.book_id,
            "book_title": self.book.title if self.book else None,
            "user_email": self.user.email if self.user else None,
            "price": _as_float(self.price),
            "fine": _as_float(self.fine),
            "borrow_date": self.borrow_date.isoformat() if self.borrow_date else None,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "return_date": self.return_date.isoformat() if self.return_date else None,
            "notified": self.notified,
            "status": self.status,
        }

    def __repr__(self) -> str:
        return (
            f"<Borrow id={self.id} user_id={self.user_id} "
            f"book_id={self.book_id} status={self.status}>"
        )
