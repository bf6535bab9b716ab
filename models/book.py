"""Book model definition."""

from datetime import datetime
from decimal import Decimal

from . import db


class Book(db.Model):
    """A catalog entry with the number of copies on the shelf."""

    __tablename__ = "books"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    author = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=0)
    availability = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    borrows = db.relationship(
        "Borrow",
        back_populates="book",
        cascade="all, delete-orphan",
        lazy="dynamic",
    )

    def take_copy(self) -> None:
        """Remove one copy from the shelf."""

        if self.quantity <= 0:
            raise ValueError("No copies of this book are available.")
        self.quantity -= 1
        self.availability = self.quantity > 0

    def put_back_copy(self) -> None:
        self.quantity += 1
        self.availability = True

    def to_dict(self) -> dict:
        """Serialize the book to a dictionary."""

        price = float(self.price) if isinstance(self.price, Decimal) else self.price
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "description": self.description,
            "price": price,
            "quantity": self.quantity,
            "availability": self.availability,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<Book id={self.id} title={self.title!r} quantity={self.quantity}>"
