"""create pr_reviews

Revision ID: 4f1c2a9b7e3d
Revises:
Create Date: 2026-10-19 10:12:03.118402

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "4f1c2a9b7e3d"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "pr_reviews",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("pr_number", sa.Integer(), nullable=False),
        sa.Column("review_result", sa.String(), nullable=False),
        sa.Column("files_changed", postgresql.JSONB(), nullable=True),
        sa.Column(
            "reviewed_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_pr_reviews_pr_number"), "pr_reviews", ["pr_number"], unique=False
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_pr_reviews_pr_number"), table_name="pr_reviews")
    op.drop_table("pr_reviews")
