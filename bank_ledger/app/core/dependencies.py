from fastapi import Depends
from sqlmodel import Session

from ..services import (
    AccountNumberGenerator,
    AccountRepository,
    AccountService,
    CustomerRepository,
    CustomerService,
    LedgerService,
    MovementRepository,
    StatementService,
)
from .config import get_settings
from .db import get_session


def get_customer_service(session: Session = Depends(get_session)) -> CustomerService:
    return CustomerService(CustomerRepository(session), AccountRepository(session))


def get_account_service(session: Session = Depends(get_session)) -> AccountService:
    settings = get_settings()
    accounts = AccountRepository(session)
    generator = AccountNumberGenerator(
        lambda number: accounts.find_by_number(number) is not None,
        low=settings.account_number_min,
        high=settings.account_number_max,
        max_attempts=settings.account_number_max_attempts,
    )
    return AccountService(
        accounts,
        CustomerRepository(session),
        MovementRepository(session),
        number_generator=generator,
    )


def get_ledger_service(session: Session = Depends(get_session)) -> LedgerService:
    return LedgerService(AccountRepository(session), MovementRepository(session))


def get_statement_service(session: Session = Depends(get_session)) -> StatementService:
    return StatementService(
        CustomerRepository(session),
        AccountRepository(session),
        MovementRepository(session),
    )
