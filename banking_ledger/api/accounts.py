"""
Account API endpoints.

The API layer is thin: it maps the ledger's typed failures to
HTTP status codes and delegates all business logic to the
AccountService. Storage errors are not caught here and surface
as 500.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from banking_ledger.exceptions import (
    AccountNotFoundError,
    ConcurrencyConflictError,
    DuplicateAccountNumberError,
    InsufficientFundsError,
    InvalidArgumentError,
)
from banking_ledger.models.base import get_db
from banking_ledger.services.account_number import DateRandomAccountNumberGenerator
from banking_ledger.services.account_service import AccountService
from banking_ledger.services.account_store import SqlAlchemyAccountStore
from banking_ledger.schemas.account import (
    AccountCreate,
    AccountResponse,
    AmountRequest,
    TransferRequest,
    TransferResponse,
)

router = APIRouter(prefix="/api/accounts", tags=["Accounts"])


def get_account_number_generator() -> DateRandomAccountNumberGenerator:
    return DateRandomAccountNumberGenerator()


def get_account_service(
    db: Session = Depends(get_db),
    generator: DateRandomAccountNumberGenerator = Depends(get_account_number_generator),
) -> AccountService:
    """Build the ledger core around this request's session."""
    return AccountService(SqlAlchemyAccountStore(db), generator)


def _load(service: AccountService, account_number: str):
    account = service.get_account(account_number)
    if account is None:
        raise HTTPException(
            status_code=404, detail=f"Account {account_number} not found"
        )
    return account


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreate,
    service: AccountService = Depends(get_account_service),
):
    """Open a new account with a generated account number."""
    try:
        return service.create_account(request.owner_name, request.initial_balance)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except DuplicateAccountNumberError as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.get("", response_model=list[AccountResponse])
def list_accounts(service: AccountService = Depends(get_account_service)):
    """List all accounts."""
    return service.list_accounts()


@router.post("/transfer", response_model=TransferResponse)
def transfer(
    request: TransferRequest,
    service: AccountService = Depends(get_account_service),
):
    """
    Move funds between two accounts.

    Either both balances change or neither does. A 409 means
    another request touched one of the accounts concurrently;
    the client may retry.
    """
    try:
        service.transfer(
            request.from_account_number,
            request.to_account_number,
            request.amount,
        )
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except (InvalidArgumentError, InsufficientFundsError) as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ConcurrencyConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)

    return TransferResponse(
        source=AccountResponse.model_validate(
            _load(service, request.from_account_number)
        ),
        destination=AccountResponse.model_validate(
            _load(service, request.to_account_number)
        ),
    )


@router.get("/{account_number}", response_model=AccountResponse)
def get_account(
    account_number: str,
    service: AccountService = Depends(get_account_service),
):
    """Get account details."""
    return _load(service, account_number)


@router.post("/{account_number}/deposit", response_model=AccountResponse)
def deposit(
    account_number: str,
    request: AmountRequest,
    service: AccountService = Depends(get_account_service),
):
    """Deposit money into an account."""
    try:
        service.deposit(account_number, request.amount)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ConcurrencyConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)
    return _load(service, account_number)


@router.post("/{account_number}/withdraw", response_model=AccountResponse)
def withdraw(
    account_number: str,
    request: AmountRequest,
    service: AccountService = Depends(get_account_service),
):
    """Withdraw money from an account."""
    try:
        service.withdraw(account_number, request.amount)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except (InvalidArgumentError, InsufficientFundsError) as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ConcurrencyConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)
    return _load(service, account_number)
