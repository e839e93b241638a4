import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .enums import AccountType, MovementKind

Money = Decimal


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1)
    identification: str = Field(..., min_length=1, description="National id, unique per customer")
    gender: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)
    address: Optional[str] = None
    phone: Optional[str] = None
    status: bool = True


class CustomerUpdate(CustomerCreate):
    pass


class CustomerResponse(BaseModel):
    id: int
    name: str
    identification: str
    gender: Optional[str] = None
    age: Optional[int] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    status: bool


class AccountCreate(BaseModel):
    number: Optional[str] = Field(
        default=None,
        min_length=1,
        description="Account number; generated when omitted",
    )
    type: AccountType = AccountType.SAVINGS
    initial_balance: Money = Field(default=Decimal("0.00"), ge=0, max_digits=14, decimal_places=2)
    status: bool = True
    customer_id: int


class AccountUpdate(BaseModel):
    number: str = Field(..., min_length=1)
    type: AccountType
    initial_balance: Money = Field(..., ge=0, max_digits=14, decimal_places=2)
    status: bool


class AccountResponse(BaseModel):
    id: int
    number: str
    type: AccountType
    initial_balance: Money
    status: bool
    customer_id: int


class BalanceResponse(BaseModel):
    account_id: int
    balance: Money


class MovementCreate(BaseModel):
    account_id: Optional[int] = None
    account_number: Optional[str] = None
    # Left as a plain string so unknown kinds surface as INVALID_MOVEMENT_KIND.
    kind: str = Field(..., description="CREDIT or DEBIT")
    value: Money = Field(..., gt=0, max_digits=14, decimal_places=2)
    timestamp: Optional[dt.datetime] = Field(default=None, description="Defaults to submission time")

    @model_validator(mode="after")
    def require_account_reference(self) -> "MovementCreate":
        if self.account_id is None and not self.account_number:
            raise ValueError("Either account_id or account_number is required")
        return self


class MovementUpdate(BaseModel):
    kind: str = Field(..., description="CREDIT or DEBIT")
    value: Money = Field(..., gt=0, max_digits=14, decimal_places=2)
    timestamp: Optional[dt.datetime] = Field(default=None, description="Keeps the stored timestamp when omitted")


class MovementResponse(BaseModel):
    id: int
    account_id: int
    timestamp: dt.datetime
    kind: MovementKind
    value: Money
    available_balance: Money


class StatementModel(BaseModel):
    """Statement documents serialise with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatementCustomer(StatementModel):
    id: int
    name: str


class DateRange(StatementModel):
    start: dt.date
    end: dt.date


class StatementTransaction(StatementModel):
    date: dt.date
    kind: MovementKind
    amount: Money = Field(..., description="Signed amount: debits are negative")
    available_balance: Money


class StatementTotals(StatementModel):
    credits: Money = Decimal("0.00")
    debits: Money = Decimal("0.00")


class StatementAccount(StatementModel):
    number: str
    type: AccountType
    initial_balance: Money
    transactions: list[StatementTransaction] = Field(default_factory=list)
    totals: StatementTotals = Field(default_factory=StatementTotals)


class StatementResponse(StatementModel):
    customer: StatementCustomer
    date_range: DateRange
    accounts: list[StatementAccount]
