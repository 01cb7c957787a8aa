"""Create books table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `books` table backing the books resource.
How:   Plain portable column types; the 24-hex identifier is generated by
       the application, so there is no server-side default.

Rollback: downgrade() drops the table entirely (destructive, all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the books table. Column docs live in bookshelf/models/book.py."""
    op.create_table(
        "books",

        # ObjectId-style identifier generated by the application
        sa.Column(
            "id",
            sa.String(24),
            nullable=False,
            comment="ObjectId-style identifier (24 hex chars)",
        ),

        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("author", sa.String(255), nullable=False),
        sa.Column("genre", sa.String(100), nullable=False),

        sa.Column(
            "publication_date",
            sa.Date(),
            nullable=False,
            comment="Publication date (no time component)",
        ),

        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Drop the books table (destructive)."""
    op.drop_table("books")
