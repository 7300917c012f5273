from datetime import date as Date
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field

MAX_QR_SIZE = 4096


class PaymentOption(str, Enum):
    PAYMENT_ORDER = "PAYMENT_ORDER"
    STANDING_ORDER = "STANDING_ORDER"
    DIRECT_DEBIT = "DIRECT_DEBIT"


class Periodicity(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    HALF_YEARLY = "HALF_YEARLY"
    YEARLY = "YEARLY"


class DirectDebitScheme(str, Enum):
    SEPA = "SEPA"
    OTHER = "OTHER"


class DirectDebitType(str, Enum):
    ONE_OFF = "ONE_OFF"
    RECURRENT = "RECURRENT"


class BankAccount(BaseModel):
    model_config = ConfigDict(frozen=True)

    iban: str = Field(description="IBAN of the bank account")
    swift: Optional[str] = Field(None, description="SWIFT/BIC code")


class StandingOrder(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: int = Field(ge=1, le=31, description="Day of the month")
    month: List[Annotated[int, Field(ge=1, le=12)]] = Field(min_length=1, description="Months when payment should be executed (1-12)")
    periodicity: Periodicity
    last_date: Date = Field(description="Last execution date")


class DirectDebit(BaseModel):
    model_config = ConfigDict(frozen=True)

    scheme: DirectDebitScheme
    debit_type: DirectDebitType
    mandate_id: Optional[str] = None
    creditor_id: Optional[str] = None
    max_amount: Optional[float] = None
    valid_till_date: Optional[Date] = None


class PaymentRequest(BaseModel):
    """A single payment instruction as sent by the caller.

    Length limits and account rules are not declared here; they are checked
    in order by :func:`paybysquare.validation.validate_payment_request` so each
    violation maps to its own error.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "amount": 100.50,
                "iban": "SK9611000000002918599669",
                "currency": "EUR",
                "beneficiary_name": "John Doe",
                "variable_symbol": "1234567890",
                "note": "Payment for invoice",
            }
        },
    )

    amount: float = Field(description="Payment amount (must be greater than 0)")
    iban: Optional[str] = Field(None, description="IBAN of the beneficiary account")
    bank_accounts: Optional[List[BankAccount]] = Field(None, description="Alternative: list of bank accounts")
    currency: str = "EUR"
    swift: Optional[str] = Field(None, description="SWIFT/BIC code")
    date: Optional[Date] = Field(None, description="Payment date")
    payment_due_date: Optional[Date] = None
    invoice_id: Optional[str] = Field(None, description="Invoice ID (max 10 characters)")
    beneficiary_name: Optional[str] = Field(None, description="Beneficiary name (max 70 characters)")
    beneficiary_address_1: Optional[str] = Field(None, description="Beneficiary address line 1 (max 70 characters)")
    beneficiary_address_2: Optional[str] = Field(None, description="Beneficiary address line 2 (max 70 characters)")
    variable_symbol: Optional[str] = Field(None, description="Variable symbol (max 10 characters)")
    constant_symbol: Optional[str] = Field(None, description="Constant symbol (max 4 characters)")
    specific_symbol: Optional[str] = Field(None, description="Specific symbol (max 10 characters)")
    originators_reference_information: Optional[str] = Field(
        None, description="SEPA reference information (max 35 characters)"
    )
    note: Optional[str] = Field(None, description="Note for the beneficiary (max 140 characters)")
    payment_options: Optional[List[PaymentOption]] = None
    standing_order: Optional[StandingOrder] = None
    direct_debit: Optional[DirectDebit] = None


class QrOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    with_frame: bool = True
    qr_size: int = Field(300, gt=0, le=MAX_QR_SIZE, description="QR code size in pixels")


class CodeResponse(BaseModel):
    code: str = Field(description="PAY by square code as text")
