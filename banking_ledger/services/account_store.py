"""
Account store: durable storage of account rows.

The ledger core only talks to storage through the AccountStore
protocol. SqlAlchemyAccountStore is the production implementation;
it owns the commit so that every core call that writes leaves the
database in a committed state.
"""

import logging
import uuid
from typing import Callable, Protocol, TypeVar

from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from banking_ledger.exceptions import (
    ConcurrencyConflictError,
    DuplicateAccountNumberError,
)
from banking_ledger.models.account import Account

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AccountStore(Protocol):
    def insert(self, account: Account) -> Account: ...
    def find_by_id(self, account_id: uuid.UUID) -> Account | None: ...
    def find_by_account_number(self, account_number: str) -> Account | None: ...
    def list_all(self) -> list[Account]: ...
    def update_with_version_check(self, account: Account) -> Account: ...
    def run_in_transaction(self, work: Callable[[], T]) -> T: ...
    def ping(self) -> bool: ...


class SqlAlchemyAccountStore:
    """
    AccountStore backed by a SQLAlchemy session.

    The session should be created with autoflush=False; changes to
    loaded accounts only reach the database through
    update_with_version_check() or run_in_transaction().
    """

    def __init__(self, db: Session):
        self.db = db

    def insert(self, account: Account) -> Account:
        """
        Persist a new account and commit.

        Raises DuplicateAccountNumberError if the account number
        is already taken.
        """
        self.db.add(account)
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(
                "Duplicate account number %s rejected", account.account_number
            )
            raise DuplicateAccountNumberError(account.account_number) from e
        self.db.commit()
        return account

    # Reads use populate_existing so an account already held by the
    # session is overwritten with the committed row, never reused as is.
    def find_by_id(self, account_id: uuid.UUID) -> Account | None:
        return self.db.get(Account, account_id, populate_existing=True)

    def find_by_account_number(self, account_number: str) -> Account | None:
        return self.db.execute(
            select(Account)
            .where(Account.account_number == account_number)
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def list_all(self) -> list[Account]:
        accounts = self.db.execute(
            select(Account).execution_options(populate_existing=True)
        ).scalars().all()
        return list(accounts)

    def update_with_version_check(self, account: Account) -> Account:
        """
        Write a single modified account and commit.

        The UPDATE only matches if the row still carries the version
        the account was loaded with. Otherwise nothing is written and
        ConcurrencyConflictError is raised.
        """
        return self.run_in_transaction(lambda: account)

    def run_in_transaction(self, work: Callable[[], T]) -> T:
        """
        Run work() and commit everything it changed as one unit.

        Any failure rolls the whole unit back and propagates. A
        version mismatch on any row surfaces as
        ConcurrencyConflictError.
        """
        try:
            result = work()
            self.db.flush()
            self.db.commit()
        except StaleDataError as e:
            self.db.rollback()
            raise ConcurrencyConflictError(
                "Account was modified concurrently, try again"
            ) from e
        except Exception:
            self.db.rollback()
            raise
        return result

    def ping(self) -> bool:
        """True if the database answers a trivial query."""
        try:
            self.db.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Database ping failed")
            self.db.rollback()
            return False
        return True
