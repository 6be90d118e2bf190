"""
Account service: the ledger core.

This service is the only authority on whether a balance change
is legal. It enforces:
1. Balances never go negative
2. A transfer debits and credits as one atomic unit
3. A write based on a stale read is rejected, never merged

Validation always happens before any write, so a failed call
leaves every stored balance untouched. Nothing is retried here;
on ConcurrencyConflictError the caller re-invokes the operation.
"""

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP

from banking_ledger.exceptions import (
    AccountNotFoundError,
    ConcurrencyConflictError,
    InsufficientFundsError,
    InvalidArgumentError,
)
from banking_ledger.models.account import Account
from banking_ledger.services.account_number import AccountNumberGenerator
from banking_ledger.services.account_store import AccountStore

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def to_money(value: Decimal | str | int) -> Decimal:
    """Quantize a value to the two-decimal balance scale."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def require_cents(amount: Decimal) -> None:
    """Reject amounts finer than one cent; balances hold exact cents."""
    if Decimal(str(amount)) != to_money(amount):
        raise InvalidArgumentError("Amount cannot have more than two decimal places")


class AccountService:
    """
    All account lifecycle and balance operations.

    The store and the account number generator are passed in,
    so tests can substitute either one.
    """

    def __init__(self, store: AccountStore, generator: AccountNumberGenerator):
        self.store = store
        self.generator = generator

    def create_account(self, owner_name: str, initial_balance: Decimal) -> Account:
        """
        Open a new account with a generated account number.

        Raises InvalidArgumentError if the initial balance is negative.
        The owner name is stored as given.
        """
        if initial_balance < 0:
            raise InvalidArgumentError("Initial balance cannot be negative")

        account = Account(
            id=uuid.uuid4(),
            account_number=self.generator.generate(),
            owner_name=owner_name,
            balance=to_money(initial_balance),
            created_at=datetime.now(timezone.utc),
        )
        self.store.insert(account)
        logger.info("Opened account %s", account.account_number)
        return account

    def get_account(self, account_number: str) -> Account | None:
        """Return the account, or None if the number is unknown."""
        return self.store.find_by_account_number(account_number)

    def list_accounts(self) -> list[Account]:
        return self.store.list_all()

    def deposit(self, account_number: str, amount: Decimal) -> None:
        """
        Add funds to an account.

        A zero amount is accepted and changes nothing.
        """
        if amount < 0:
            raise InvalidArgumentError("Amount cannot be negative")
        require_cents(amount)

        account = self._require(account_number)
        account.balance = to_money(account.balance + amount)
        self.store.update_with_version_check(account)
        logger.debug("Deposited %s into %s", amount, account_number)

    def withdraw(self, account_number: str, amount: Decimal) -> None:
        """Remove funds from an account. Zero is rejected."""
        if amount <= 0:
            raise InvalidArgumentError("Amount cannot be negative or zero")
        require_cents(amount)

        account = self._require(account_number)
        if account.balance < amount:
            raise InsufficientFundsError(account_number, account.balance, amount)

        account.balance = to_money(account.balance - amount)
        self.store.update_with_version_check(account)
        logger.debug("Withdrew %s from %s", amount, account_number)

    def transfer(
        self,
        from_account_number: str,
        to_account_number: str,
        amount: Decimal,
    ) -> None:
        """
        Move funds between two accounts atomically.

        Checks run in a fixed order and the first violation wins:
        amount, self-transfer, sender exists, receiver exists,
        sender balance. The lookups, the check and both writes share
        one store transaction.
        """
        if amount <= 0:
            raise InvalidArgumentError("Amount cannot be negative or zero")
        require_cents(amount)
        if from_account_number == to_account_number:
            raise InvalidArgumentError("Source and destination must differ")

        def apply_transfer() -> None:
            source = self._require(from_account_number, role="sender")
            destination = self._require(to_account_number, role="receiver")

            if source.balance < amount:
                raise InsufficientFundsError(
                    from_account_number, source.balance, amount
                )

            source.balance = to_money(source.balance - amount)
            destination.balance = to_money(destination.balance + amount)

        try:
            self.store.run_in_transaction(apply_transfer)
        except ConcurrencyConflictError as e:
            logger.warning(
                "Transfer %s -> %s hit a concurrent update",
                from_account_number,
                to_account_number,
            )
            raise ConcurrencyConflictError(
                "Concurrency conflict while transferring funds. Try again later."
            ) from e

        logger.info(
            "Transferred %s from %s to %s",
            amount,
            from_account_number,
            to_account_number,
        )

    def _require(self, account_number: str, role: str = "account") -> Account:
        account = self.store.find_by_account_number(account_number)
        if account is None:
            raise AccountNotFoundError(account_number, role=role)
        return account
