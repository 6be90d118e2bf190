"""
Typed failures raised by the ledger core.

Callers catch by type, not by message. Every failure still carries a
human-readable message for the API layer to pass through.

    LedgerError
    +-- InvalidArgumentError
    +-- AccountNotFoundError
    +-- InsufficientFundsError
    +-- ConcurrencyConflictError
    +-- DuplicateAccountNumberError

Storage errors that are none of the above are not wrapped; they
propagate as raised by SQLAlchemy.
"""

from decimal import Decimal


class LedgerError(Exception):
    """Base class for every ledger failure."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(LedgerError, ValueError):
    """Malformed or out-of-range input (negative amounts, self-transfer)."""


class AccountNotFoundError(LedgerError, LookupError):
    """
    The referenced account number does not exist.

    ``role`` tells which party was missing: ``account`` for single
    account operations, ``sender`` or ``receiver`` for transfers.
    """

    def __init__(self, account_number: str, role: str = "account"):
        super().__init__(f"{role.capitalize()} account {account_number} not found")
        self.account_number = account_number
        self.role = role


class InsufficientFundsError(LedgerError):
    """A withdrawal or transfer would drive the balance negative."""

    def __init__(self, account_number: str, balance: Decimal, requested: Decimal):
        super().__init__(
            f"Insufficient funds in account {account_number}: "
            f"available={balance}, requested={requested}"
        )
        self.account_number = account_number
        self.balance = balance
        self.requested = requested


class ConcurrencyConflictError(LedgerError):
    """
    A row changed between read and write.

    Nothing was persisted. Retrying the whole operation is always safe.
    """


class DuplicateAccountNumberError(LedgerError):
    """The store already holds an account with this account number."""

    def __init__(self, account_number: str):
        super().__init__(f"Account number {account_number} already exists")
        self.account_number = account_number
