from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from ..core.errors import (
    AccountHasMovementsError,
    AccountNotFoundError,
    AccountNumberExhaustedError,
    CustomerNotFoundError,
    DuplicateAccountNumberError,
    InitialBalanceLockedError,
)
from ..models import AccountCreate, AccountModel, AccountResponse, AccountUpdate
from .ports import CustomerLookup, MovementStore
from .repository import AccountRepository


logger = logging.getLogger(__name__)


class AccountNumberGenerator:
    """Draws random account numbers until ``is_taken`` rejects none of them.

    Gives up with ``AccountNumberExhaustedError`` after ``max_attempts`` draws.
    """

    def __init__(
        self,
        is_taken: Callable[[str], bool],
        *,
        low: int = 100000,
        high: int = 999999,
        max_attempts: int = 20,
        rng: Optional[random.Random] = None,
    ) -> None:
        if low > high:
            raise ValueError("low must not exceed high")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.is_taken = is_taken
        self.low = low
        self.high = high
        self.max_attempts = max_attempts
        self.rng = rng or random.Random()

    def generate(self) -> str:
        for _ in range(self.max_attempts):
            candidate = str(self.rng.randint(self.low, self.high))
            if not self.is_taken(candidate):
                return candidate
        raise AccountNumberExhaustedError(
            f"No free account number found after {self.max_attempts} attempts"
        )


class AccountService:
    def __init__(
        self,
        accounts: AccountRepository,
        customers: CustomerLookup,
        movements: MovementStore,
        number_generator: Optional[AccountNumberGenerator] = None,
    ) -> None:
        self.accounts = accounts
        self.customers = customers
        self.movements = movements
        self.number_generator = number_generator or AccountNumberGenerator(
            self._number_taken
        )

    def _number_taken(self, number: str) -> bool:
        return self.accounts.find_by_number(number) is not None

    def _get_account(self, account_id: int) -> AccountModel:
        account = self.accounts.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(f"Account not found with ID: {account_id}")
        return account

    def _ensure_customer(self, customer_id: int) -> None:
        if self.customers.find_by_id(customer_id) is None:
            raise CustomerNotFoundError(f"Customer not found with ID: {customer_id}")

    def _ensure_number_free(self, number: str) -> None:
        if self._number_taken(number):
            raise DuplicateAccountNumberError(number)

    def _account_to_response(self, account: AccountModel) -> AccountResponse:
        return AccountResponse(
            id=account.id,
            number=account.number,
            type=account.type,
            initial_balance=account.initial_balance,
            status=account.status,
            customer_id=account.customer_id,
        )

    def create_account(self, payload: AccountCreate) -> AccountResponse:
        self._ensure_customer(payload.customer_id)
        if payload.number:
            self._ensure_number_free(payload.number)
            number = payload.number
        else:
            number = self.number_generator.generate()

        account = self.accounts.save(
            AccountModel(
                number=number,
                type=payload.type,
                initial_balance=payload.initial_balance,
                status=payload.status,
                customer_id=payload.customer_id,
            )
        )
        logger.info(
            "account.created",
            extra={
                "account_id": account.id,
                "account_number": account.number,
                "customer_id": account.customer_id,
            },
        )
        return self._account_to_response(account)

    def get_account(self, account_id: int) -> AccountResponse:
        return self._account_to_response(self._get_account(account_id))

    def get_account_by_number(self, number: str) -> AccountResponse:
        account = self.accounts.find_by_number(number)
        if account is None:
            raise AccountNotFoundError(f"Account not found with number: {number}")
        return self._account_to_response(account)

    def list_accounts(self, customer_id: Optional[int] = None) -> list[AccountResponse]:
        if customer_id is None:
            records = self.accounts.find_all()
        else:
            records = self.accounts.find_by_customer(customer_id)
        return [self._account_to_response(a) for a in records]

    def update_account(self, account_id: int, payload: AccountUpdate) -> AccountResponse:
        account = self._get_account(account_id)
        if payload.number != account.number:
            self._ensure_number_free(payload.number)
        if payload.initial_balance != account.initial_balance and self.movements.find_by_account(account_id):
            raise InitialBalanceLockedError(
                f"Initial balance of account {account.number} cannot change once movements exist"
            )

        account.number = payload.number
        account.type = payload.type
        account.initial_balance = payload.initial_balance
        account.status = payload.status
        account = self.accounts.save(account)
        logger.info("account.updated", extra={"account_id": account.id})
        return self._account_to_response(account)

    def delete_account(self, account_id: int) -> None:
        account = self._get_account(account_id)
        if self.movements.find_by_account(account_id):
            raise AccountHasMovementsError(
                f"Account {account.number} still has movements and cannot be deleted"
            )
        self.accounts.delete_by_id(account_id)
        logger.info("account.deleted", extra={"account_id": account_id})
