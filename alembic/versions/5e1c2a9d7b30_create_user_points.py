"""Create user_points table

Revision ID: 5e1c2a9d7b30
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "5e1c2a9d7b30"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "user_points",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column("key", sa.String(255), nullable=False, unique=True),
        sa.Column("points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_user", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            "last_modified",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )


def downgrade() -> None:
    op.drop_table("user_points")
