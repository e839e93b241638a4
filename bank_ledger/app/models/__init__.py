from .db import Account as AccountModel
from .db import Customer as CustomerModel
from .db import Movement as MovementModel
from .enums import AccountType, MovementKind
from .schemas import (
    AccountCreate,
    AccountResponse,
    AccountUpdate,
    BalanceResponse,
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
    DateRange,
    MovementCreate,
    MovementResponse,
    MovementUpdate,
    StatementAccount,
    StatementCustomer,
    StatementResponse,
    StatementTotals,
    StatementTransaction,
)

__all__ = [
    "AccountCreate",
    "AccountResponse",
    "AccountUpdate",
    "BalanceResponse",
    "CustomerCreate",
    "CustomerResponse",
    "CustomerUpdate",
    "DateRange",
    "MovementCreate",
    "MovementResponse",
    "MovementUpdate",
    "StatementAccount",
    "StatementCustomer",
    "StatementResponse",
    "StatementTotals",
    "StatementTransaction",
    "AccountType",
    "MovementKind",
    "AccountModel",
    "CustomerModel",
    "MovementModel",
]
