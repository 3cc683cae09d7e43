"""Add rabbit pacer columns to users.

Step: 4
Create Date: 2025-03-15

"""
from alembic.operations import Operations
import sqlalchemy as sa


def upgrade(op: Operations) -> None:
    op.add_column(
        "users",
        sa.Column("is_rabbit", sa.Boolean(), nullable=False, server_default=sa.text("0")),
    )
    op.add_column(
        "users",
        sa.Column("rabbit_target", sa.Integer(), nullable=False, server_default=sa.text("0")),
    )
