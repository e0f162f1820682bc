"""SQLAlchemy metadata definitions for account tables."""

from __future__ import annotations

import sqlalchemy as sa

metadata = sa.MetaData()

credentials = sa.Table(
    "credentials",
    metadata,
    sa.Column("id", sa.Text(), primary_key=True, nullable=False),
    sa.Column("pass_hashed", sa.Text(), nullable=False),
)
