"""Business logic services."""

from banking_ledger.services.account_number import (
    AccountNumberGenerator,
    DateRandomAccountNumberGenerator,
)
from banking_ledger.services.account_store import AccountStore, SqlAlchemyAccountStore
from banking_ledger.services.account_service import AccountService

__all__ = [
    "AccountNumberGenerator",
    "DateRandomAccountNumberGenerator",
    "AccountStore",
    "SqlAlchemyAccountStore",
    "AccountService",
]
