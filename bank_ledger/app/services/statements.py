from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ..core.errors import (
    CustomerNotFoundError,
    InvalidDateRangeError,
    NoAccountsForCustomerError,
)
from ..models import (
    AccountModel,
    DateRange,
    MovementKind,
    MovementModel,
    StatementAccount,
    StatementCustomer,
    StatementResponse,
    StatementTotals,
    StatementTransaction,
)
from .ports import AccountLookup, CustomerLookup, MovementStore
from .rendering import get_renderer


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedStatement:
    content: bytes
    media_type: str
    filename: str


def _signed_amount(movement: MovementModel) -> Decimal:
    if movement.kind is MovementKind.DEBIT:
        return -movement.value
    return movement.value


class StatementService:
    """Builds read-only, date-bounded statements over a customer's accounts."""

    def __init__(
        self,
        customers: CustomerLookup,
        accounts: AccountLookup,
        movements: MovementStore,
    ) -> None:
        self.customers = customers
        self.accounts = accounts
        self.movements = movements

    def _summarise_account(
        self, account: AccountModel, start_date: date, end_date: date
    ) -> StatementAccount:
        in_range = [
            movement
            for movement in self.movements.find_by_account(account.id)
            if start_date <= movement.timestamp.date() <= end_date
        ]

        transactions = [
            StatementTransaction(
                date=movement.timestamp.date(),
                kind=movement.kind,
                amount=_signed_amount(movement),
                available_balance=movement.available_balance,
            )
            for movement in in_range
        ]
        credits = sum(
            (m.value for m in in_range if m.kind is MovementKind.CREDIT), Decimal("0.00")
        )
        debits = sum(
            (m.value for m in in_range if m.kind is MovementKind.DEBIT), Decimal("0.00")
        )

        return StatementAccount(
            number=account.number,
            type=account.type,
            initial_balance=account.initial_balance,
            transactions=transactions,
            totals=StatementTotals(credits=credits, debits=debits),
        )

    def build_statement(
        self, customer_id: int, start_date: date, end_date: date
    ) -> StatementResponse:
        if end_date < start_date:
            raise InvalidDateRangeError("end_date must be on or after start_date")

        customer = self.customers.find_by_id(customer_id)
        if customer is None:
            raise CustomerNotFoundError(f"Customer not found with ID: {customer_id}")

        accounts = self.accounts.find_by_customer(customer_id)
        if not accounts:
            raise NoAccountsForCustomerError(f"No accounts found for customer: {customer_id}")

        statement = StatementResponse(
            customer=StatementCustomer(id=customer.id, name=customer.name),
            date_range=DateRange(start=start_date, end=end_date),
            accounts=[
                self._summarise_account(account, start_date, end_date)
                for account in accounts
            ],
        )
        logger.info(
            "statement.built",
            extra={
                "customer_id": customer_id,
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
                "account_count": len(statement.accounts),
            },
        )
        return statement

    def render_statement(
        self,
        customer_id: int,
        start_date: date,
        end_date: date,
        fmt: str = "csv",
    ) -> RenderedStatement:
        renderer = get_renderer(fmt)
        statement = self.build_statement(customer_id, start_date, end_date)
        filename = (
            f"account_statement_{customer_id}_{start_date.isoformat()}"
            f"_{end_date.isoformat()}.{renderer.extension}"
        )
        return RenderedStatement(
            content=renderer.render(statement),
            media_type=renderer.media_type,
            filename=filename,
        )
