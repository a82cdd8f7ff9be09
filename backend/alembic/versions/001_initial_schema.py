"""Initial schema — player_skins and skins.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "player_skins",
        sa.Column("player_name", sa.String(64), primary_key=True),
        sa.Column("skin_name", sa.Text, nullable=False),
    )

    op.create_table(
        "skins",
        sa.Column("skin_name", sa.String(255), primary_key=True),
        sa.Column("value", sa.Text, nullable=False),
        sa.Column("signature", sa.Text, nullable=False),
        sa.Column("timestamp", sa.BigInteger, nullable=True),
    )
    op.create_index("ix_skins_timestamp", "skins", ["timestamp"])


def downgrade() -> None:
    op.drop_index("ix_skins_timestamp", table_name="skins")
    op.drop_table("skins")
    op.drop_table("player_skins")
