"""Storage ports consumed by the ledger and statement services.

Any object with these methods can back the services; the SQL repositories in
``repository.py`` are the production implementations.

``MovementStore`` implementations must return an account's movements ordered
by timestamp, then insertion order, and must serialise writes per account.
The ledger reads the current balance and writes the next movement as two
separate calls, so two concurrent appends against the same account are only
safe when the store (or a transaction wrapping the request) guarantees that
no other write lands in between.
"""
from __future__ import annotations

from typing import Optional, Protocol

from ..models import AccountModel, CustomerModel, MovementModel


class AccountLookup(Protocol):
    def find_by_id(self, account_id: int) -> Optional[AccountModel]: ...

    def find_by_number(self, number: str) -> Optional[AccountModel]: ...

    def find_by_customer(self, customer_id: int) -> list[AccountModel]: ...


class CustomerLookup(Protocol):
    def find_by_id(self, customer_id: int) -> Optional[CustomerModel]: ...


class MovementStore(Protocol):
    def find_all(self) -> list[MovementModel]: ...

    def find_by_id(self, movement_id: int) -> Optional[MovementModel]: ...

    def find_by_account(self, account_id: int) -> list[MovementModel]: ...

    def save(self, movement: MovementModel) -> MovementModel: ...

    def delete_by_id(self, movement_id: int) -> None: ...
