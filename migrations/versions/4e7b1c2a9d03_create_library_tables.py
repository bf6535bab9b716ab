"""Create users, books and borrows tables."""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "4e7b1c2a9d03"
down_revision = None
branch_labels = None
depends_on = None


USER_ROLE_ENUM = "user_role"


def upgrade() -> None:
    """Create the library schema."""

    user_role = sa.Enum("user", "admin", name=USER_ROLE_ENUM)
    user_role.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", user_role, nullable=False, server_default=sa.text("'user'")),
        sa.Column("account_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("verification_code", sa.Integer(), nullable=True),
        sa.Column("verification_code_expire", sa.DateTime(), nullable=True),
        sa.Column("reset_password_token", sa.String(length=64), nullable=True),
        sa.Column("reset_password_expire", sa.DateTime(), nullable=True),
        sa.Column("avatar_path", sa.String(length=512), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"])
    op.create_index("ix_users_reset_password_token", "users", ["reset_password_token"])

    op.create_table(
        "books",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("author", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("availability", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "borrows",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("book_id", sa.Integer(), sa.ForeignKey("books.id", ondelete="CASCADE"), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("borrow_date", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("due_date", sa.DateTime(), nullable=False),
        sa.Column("return_date", sa.DateTime(), nullable=True),
        sa.Column("fine", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("notified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_borrows_user_id", "borrows", ["user_id"])
    op.create_index("ix_borrows_book_id", "borrows", ["book_id"])
    op.create_index(
        "ix_borrows_overdue_scan", "borrows", ["notified", "return_date", "due_date"]
    )


def downgrade() -> None:
    """Drop the library schema."""

    op.drop_index("ix_borrows_overdue_scan", table_name="borrows")
    op.drop_index("ix_borrows_book_id", table_name="borrows")
    op.drop_index("ix_borrows_user_id", table_name="borrows")
    op.drop_table("borrows")
    op.drop_table("books")
    op.drop_index("ix_users_reset_password_token", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    sa.Enum(name=USER_ROLE_ENUM).drop(op.get_bind(), checkfirst=True)
