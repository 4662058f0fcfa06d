"""create session_levels

Revision ID: base_0001
Revises:
Create Date: 2026-10-18 10:12:41.503118

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "base_0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "session_levels",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("session_id", sa.String(length=64), nullable=False),
        sa.Column("storage_key", sa.String(length=64), nullable=False),
        sa.Column("value", sa.String(length=16), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint(
            "session_id", "storage_key", name="uq_session_levels_session_id"
        ),
    )
    op.create_index("ix_session_levels_session_id", "session_levels", ["session_id"])


def downgrade() -> None:
    op.drop_index("ix_session_levels_session_id", table_name="session_levels")
    op.drop_table("session_levels")
