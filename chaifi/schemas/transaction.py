"""
Transaction Pydantic schemas for API requests/responses
"""
from datetime import date as Date, datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import AliasChoices, Field, model_validator

from chaifi.config import DEFAULT_BILLER_NAME
from chaifi.core.money import format_cents, to_cents
from chaifi.database.models.transaction import PaymentMethod
from chaifi.schemas.base import CamelModel


# === Line Item Schemas ===

class LineItem(CamelModel):
    """One line of a sale; id is the menu item id"""
    id: str = Field(..., min_length=1, validation_alias=AliasChoices("id", "itemId"))
    name: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    quantity: int = Field(..., ge=1)


class SplitPayment(CamelModel):
    """Part Google Pay, part cash"""
    gpay_amount: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    cash_amount: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)

    def as_document(self) -> dict:
        """Stored form, 2-decimal strings under the client's keys"""
        return {
            "gpayAmount": format_cents(to_cents(self.gpay_amount)),
            "cashAmount": format_cents(to_cents(self.cash_amount)),
        }


# === Transaction Schemas ===

class TransactionCreate(CamelModel):
    """Schema for ringing up a sale"""
    date: Date = Field(..., description="Business day of the sale")
    items: List[LineItem] = Field(..., min_length=1)
    total_amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    payment_method: PaymentMethod
    split_payment: Optional[SplitPayment] = None
    biller_name: str = Field(DEFAULT_BILLER_NAME, min_length=1, max_length=100)
    creditor: Optional[str] = Field(None, max_length=255)
    extras: Optional[dict[str, Any]] = None

    @model_validator(mode="after")
    def split_only_for_split(self) -> "TransactionCreate":
        """Drop a split payload sent with a single payment method"""
        if self.payment_method != PaymentMethod.SPLIT:
            self.split_payment = None
        return self


class TransactionResponse(CamelModel):
    """Response schema for a recorded sale"""
    id: str
    date: str
    created_at: datetime
    items: List[dict[str, Any]]
    total_amount: str
    payment_method: PaymentMethod
    split_payment: Optional[dict[str, Any]] = None
    biller_name: str
    creditor: Optional[str] = None
    extras: Optional[dict[str, Any]] = None


class DeleteResponse(CamelModel):
    """Number of transactions removed by a bulk delete"""
    deleted_count: int
