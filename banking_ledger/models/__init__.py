"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from banking_ledger.models.base import Base
from banking_ledger.models.account import Account

__all__ = ["Base", "Account"]
