"""
Pydantic schemas for account operations.

These define the API contract. Responses never expose the
internal id or the version counter.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


# --- Request Schemas ---

class AccountCreate(BaseModel):
    """Request to open a new account."""
    owner_name: str = Field(max_length=255)
    initial_balance: Decimal = Field(default=Decimal("0"), decimal_places=2)


class AmountRequest(BaseModel):
    """Body of a deposit or withdrawal."""
    amount: Decimal = Field(decimal_places=2)


class TransferRequest(BaseModel):
    from_account_number: str = Field(min_length=1, max_length=32)
    to_account_number: str = Field(min_length=1, max_length=32)
    amount: Decimal = Field(decimal_places=2)


# --- Response Schemas ---

class AccountResponse(BaseModel):
    account_number: str
    owner_name: str
    balance: Decimal
    created_at: datetime

    model_config = {"from_attributes": True}


class TransferResponse(BaseModel):
    """Both accounts as they stand after the transfer."""
    source: AccountResponse
    destination: AccountResponse
