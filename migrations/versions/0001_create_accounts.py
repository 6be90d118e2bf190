"""create accounts table

Revision ID: 0001
Revises:
Create Date: 2026-10-16 00:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("account_number", sa.String(length=32), nullable=False),
        sa.Column("owner_name", sa.String(length=255), nullable=False),
        sa.Column("balance", sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_accounts_account_number"),
        "accounts",
        ["account_number"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_accounts_account_number"), table_name="accounts")
    op.drop_table("accounts")
