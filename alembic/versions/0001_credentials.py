"""Create credentials table keyed by username."""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

revision = "0001_credentials"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create credentials table storing one serialized record per username."""

    op.create_table(
        "credentials",
        sa.Column("id", sa.Text(), primary_key=True, nullable=False),
        sa.Column("pass_hashed", sa.Text(), nullable=False),
    )


def downgrade() -> None:
    """Drop credentials table."""

    op.drop_table("credentials")
