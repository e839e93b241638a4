from __future__ import annotations

from typing import Optional

from sqlmodel import Session, select

from ..models import AccountModel, CustomerModel, MovementModel


class _SessionRepository:
    """Thin data access layer around the SQLModel session.

    Writes commit immediately, so every ``save`` is one durable write.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def _persist(self, record):
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    def _remove(self, record) -> None:
        self.session.delete(record)
        self.session.commit()


class CustomerRepository(_SessionRepository):
    def find_by_id(self, customer_id: int) -> Optional[CustomerModel]:
        return self.session.get(CustomerModel, customer_id)

    def find_by_identification(self, identification: str) -> Optional[CustomerModel]:
        stmt = select(CustomerModel).where(CustomerModel.identification == identification)
        return self.session.exec(stmt).first()

    def find_all(self) -> list[CustomerModel]:
        stmt = select(CustomerModel).order_by(CustomerModel.id)
        return list(self.session.exec(stmt))

    def save(self, customer: CustomerModel) -> CustomerModel:
        return self._persist(customer)

    def delete_by_id(self, customer_id: int) -> None:
        customer = self.find_by_id(customer_id)
        if customer is not None:
            self._remove(customer)


class AccountRepository(_SessionRepository):
    def find_by_id(self, account_id: int) -> Optional[AccountModel]:
        return self.session.get(AccountModel, account_id)

    def find_by_number(self, number: str) -> Optional[AccountModel]:
        stmt = select(AccountModel).where(AccountModel.number == number)
        return self.session.exec(stmt).first()

    def find_by_customer(self, customer_id: int) -> list[AccountModel]:
        stmt = (
            select(AccountModel)
            .where(AccountModel.customer_id == customer_id)
            .order_by(AccountModel.id)
        )
        return list(self.session.exec(stmt))

    def find_all(self) -> list[AccountModel]:
        stmt = select(AccountModel).order_by(AccountModel.id)
        return list(self.session.exec(stmt))

    def save(self, account: AccountModel) -> AccountModel:
        return self._persist(account)

    def delete_by_id(self, account_id: int) -> None:
        account = self.find_by_id(account_id)
        if account is not None:
            self._remove(account)


class MovementRepository(_SessionRepository):
    def find_all(self) -> list[MovementModel]:
        stmt = select(MovementModel).order_by(
            MovementModel.account_id, MovementModel.timestamp, MovementModel.id
        )
        return list(self.session.exec(stmt))

    def find_by_id(self, movement_id: int) -> Optional[MovementModel]:
        return self.session.get(MovementModel, movement_id)

    def find_by_account(self, account_id: int) -> list[MovementModel]:
        stmt = (
            select(MovementModel)
            .where(MovementModel.account_id == account_id)
            .order_by(MovementModel.timestamp, MovementModel.id)
        )
        return list(self.session.exec(stmt))

    def save(self, movement: MovementModel) -> MovementModel:
        return self._persist(movement)

    def delete_by_id(self, movement_id: int) -> None:
        movement = self.find_by_id(movement_id)
        if movement is not None:
            self._remove(movement)
