from __future__ import annotations

from decimal import Decimal


class LedgerError(Exception):
    """Base class for business-rule violations raised by the services."""

    code = "LEDGER_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AccountNotFoundError(LedgerError):
    """Raised when an account id or number cannot be resolved."""

    code = "ACCOUNT_NOT_FOUND"


class CustomerNotFoundError(LedgerError):
    """Raised when a customer id is missing from the store."""

    code = "CUSTOMER_NOT_FOUND"


class MovementNotFoundError(LedgerError):
    """Raised when a movement id is missing from the store."""

    code = "MOVEMENT_NOT_FOUND"


class NoAccountsForCustomerError(LedgerError):
    """Raised when a statement is requested for a customer without accounts."""

    code = "NO_ACCOUNTS_FOR_CUSTOMER"


class InsufficientFundsError(LedgerError):
    """Raised when a debit would drop the available balance below zero."""

    code = "INSUFFICIENT_FUNDS"

    def __init__(self, available_balance: Decimal) -> None:
        super().__init__(f"Insufficient funds. Available balance: {available_balance}")
        self.available_balance = available_balance


class InvalidMovementKindError(LedgerError):
    """Raised when a movement kind is neither CREDIT nor DEBIT."""

    code = "INVALID_MOVEMENT_KIND"


class BackdatedMovementError(LedgerError):
    """Raised when an appended movement is dated before the last one of its account."""

    code = "BACKDATED_MOVEMENT"


class DuplicateAccountNumberError(LedgerError):
    """Raised when an account number is already taken."""

    code = "DUPLICATE_ACCOUNT_NUMBER"

    def __init__(self, account_number: str) -> None:
        super().__init__(f"Account number already exists: {account_number}")
        self.account_number = account_number


class DuplicateCustomerError(LedgerError):
    """Raised when a customer identification is already registered."""

    code = "DUPLICATE_CUSTOMER"


class InvalidDateRangeError(LedgerError):
    """Raised when a statement range ends before it starts."""

    code = "INVALID_DATE_RANGE"


class InitialBalanceLockedError(LedgerError):
    """Raised when editing the initial balance of an account with movements."""

    code = "INITIAL_BALANCE_LOCKED"


class AccountHasMovementsError(LedgerError):
    """Raised when deleting an account that still owns movements."""

    code = "ACCOUNT_HAS_MOVEMENTS"


class AccountNumberExhaustedError(LedgerError):
    """Raised when no free account number was found within the retry limit."""

    code = "ACCOUNT_NUMBER_EXHAUSTED"


class UnsupportedFormatError(LedgerError):
    """Raised when no statement renderer is registered for a format."""

    code = "UNSUPPORTED_FORMAT"


class CustomerHasAccountsError(LedgerError):
    """Raised when deleting a customer that still owns accounts."""

    code = "CUSTOMER_HAS_ACCOUNTS"
