"""
Account model.

The only entity in the ledger. The balance is stored on the row
and changed in place by deposits, withdrawals and transfers.

Concurrent writers are detected through the ``version`` column:
SQLAlchemy adds ``WHERE version = <loaded>`` to every UPDATE and
bumps it, so a write based on a stale read matches zero rows.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Integer, Numeric, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from banking_ledger.models.base import Base


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    account_number: Mapped[str] = mapped_column(
        String(32), unique=True, nullable=False, index=True
    )
    owner_name: Mapped[str] = mapped_column(String(255), nullable=False)
    balance: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=Decimal("0.00")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Account {self.account_number} balance={self.balance}>"
