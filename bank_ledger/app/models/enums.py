from enum import Enum


class MovementKind(str, Enum):
    CREDIT = "CREDIT"
    DEBIT = "DEBIT"


class AccountType(str, Enum):
    SAVINGS = "SAVINGS"
    CHECKING = "CHECKING"
    LOAN = "LOAN"
    CREDIT = "CREDIT"
