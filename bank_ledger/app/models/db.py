from __future__ import annotations
from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, SQLModel

from .enums import AccountType, MovementKind

class Customer(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    identification: str = Field(unique=True, index=True)
    gender: Optional[str] = None
    age: Optional[int] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    status: bool = True

class Account(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    number: str = Field(unique=True, index=True)
    type: AccountType = AccountType.SAVINGS
    initial_balance: Decimal = Field(default=Decimal("0.00"), max_digits=14, decimal_places=2)
    status: bool = True
    customer_id: int = Field(foreign_key="customer.id", index=True)

class Movement(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="account.id", index=True)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC), index=True)
    kind: MovementKind
    value: Decimal = Field(max_digits=14, decimal_places=2)
    available_balance: Decimal = Field(max_digits=14, decimal_places=2)
