"""Create settings table and seed default challenge dates (today .. one month later).

Step: 3
Create Date: 2025-03-08

"""
from datetime import date

from alembic.operations import Operations
import sqlalchemy as sa
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.engine import Connection

from pushups.services.dates import add_one_month

settings_table = sa.table(
    "settings",
    sa.column("key", sa.Text()),
    sa.column("value", sa.Text()),
)


def upgrade(op: Operations) -> None:
    op.create_table(
        "settings",
        sa.Column("key", sa.Text(), nullable=False),
        sa.Column("value", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("key"),
    )


def seed(connection: Connection, today: date) -> None:
    defaults = {
        "challenge_start": today.isoformat(),
        "challenge_end": add_one_month(today).isoformat(),
    }
    for key, value in defaults.items():
        connection.execute(
            insert(settings_table)
            .values(key=key, value=value)
            .on_conflict_do_nothing(index_elements=["key"])
        )
