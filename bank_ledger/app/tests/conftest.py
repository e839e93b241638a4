from __future__ import annotations

import itertools
from datetime import UTC, datetime
from decimal import Decimal
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from ..core.db import create_engine_for_url, get_engine, get_session, set_engine
from ..main import app
from ..models import AccountModel, AccountType, CustomerModel, MovementModel
from ..services import LedgerService, StatementService


class InMemoryCustomers:
    def __init__(self) -> None:
        self._records: dict[int, CustomerModel] = {}
        self._ids = itertools.count(1)

    def find_by_id(self, customer_id: int) -> Optional[CustomerModel]:
        return self._records.get(customer_id)

    def save(self, customer: CustomerModel) -> CustomerModel:
        if customer.id is None:
            customer.id = next(self._ids)
        self._records[customer.id] = customer
        return customer


class InMemoryAccounts:
    def __init__(self) -> None:
        self._records: dict[int, AccountModel] = {}
        self._ids = itertools.count(1)

    def find_by_id(self, account_id: int) -> Optional[AccountModel]:
        return self._records.get(account_id)

    def find_by_number(self, number: str) -> Optional[AccountModel]:
        return next((a for a in self._records.values() if a.number == number), None)

    def find_by_customer(self, customer_id: int) -> list[AccountModel]:
        return [a for a in self._records.values() if a.customer_id == customer_id]

    def find_all(self) -> list[AccountModel]:
        return list(self._records.values())

    def save(self, account: AccountModel) -> AccountModel:
        if account.id is None:
            account.id = next(self._ids)
        self._records[account.id] = account
        return account

    def delete_by_id(self, account_id: int) -> None:
        self._records.pop(account_id, None)


class InMemoryMovements:
    def __init__(self) -> None:
        self._records: dict[int, MovementModel] = {}
        self._ids = itertools.count(1)
        self.writes = 0

    def find_all(self) -> list[MovementModel]:
        return sorted(self._records.values(), key=lambda m: (m.account_id, m.timestamp, m.id))

    def find_by_id(self, movement_id: int) -> Optional[MovementModel]:
        return self._records.get(movement_id)

    def find_by_account(self, account_id: int) -> list[MovementModel]:
        chain = [m for m in self._records.values() if m.account_id == account_id]
        return sorted(chain, key=lambda m: (m.timestamp, m.id))

    def save(self, movement: MovementModel) -> MovementModel:
        if movement.id is None:
            movement.id = next(self._ids)
        self._records[movement.id] = movement
        self.writes += 1
        return movement

    def delete_by_id(self, movement_id: int) -> None:
        self._records.pop(movement_id, None)

    def __len__(self) -> int:
        return len(self._records)


def at(day: int, hour: int = 12, month: int = 3) -> datetime:
    return datetime(2025, month, day, hour, 0, tzinfo=UTC)


@pytest.fixture
def customers() -> InMemoryCustomers:
    return InMemoryCustomers()


@pytest.fixture
def accounts() -> InMemoryAccounts:
    return InMemoryAccounts()


@pytest.fixture
def movements() -> InMemoryMovements:
    return InMemoryMovements()


@pytest.fixture
def ledger(accounts: InMemoryAccounts, movements: InMemoryMovements) -> LedgerService:
    return LedgerService(accounts, movements)


@pytest.fixture
def statements(
    customers: InMemoryCustomers,
    accounts: InMemoryAccounts,
    movements: InMemoryMovements,
) -> StatementService:
    return StatementService(customers, accounts, movements)


@pytest.fixture
def customer(customers: InMemoryCustomers) -> CustomerModel:
    return customers.save(CustomerModel(name="Jose Lema", identification="1712345678"))


@pytest.fixture
def make_account(accounts: InMemoryAccounts, customer: CustomerModel):
    def _make(number: str = "478758", initial_balance: str = "100.00", **fields) -> AccountModel:
        return accounts.save(
            AccountModel(
                number=number,
                type=fields.pop("type", AccountType.SAVINGS),
                initial_balance=Decimal(initial_balance),
                customer_id=fields.pop("customer_id", customer.id),
                **fields,
            )
        )

    return _make


@pytest.fixture
def client(tmp_path) -> TestClient:
    test_db = tmp_path / "test.db"
    engine = create_engine_for_url(f"sqlite:///{test_db}")
    original_engine = get_engine()
    set_engine(engine)
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)

    def _get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session_override

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    set_engine(original_engine)
    engine.dispose()
