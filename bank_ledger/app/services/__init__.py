from .accounts import AccountNumberGenerator, AccountService
from .customers import CustomerService
from .ledger import LedgerService
from .rendering import (
    CsvStatementRenderer,
    JsonStatementRenderer,
    PdfStatementRenderer,
    get_renderer,
)
from .repository import AccountRepository, CustomerRepository, MovementRepository
from .statements import RenderedStatement, StatementService

__all__ = [
    "AccountNumberGenerator",
    "AccountRepository",
    "AccountService",
    "CsvStatementRenderer",
    "CustomerRepository",
    "CustomerService",
    "JsonStatementRenderer",
    "LedgerService",
    "MovementRepository",
    "PdfStatementRenderer",
    "RenderedStatement",
    "StatementService",
    "get_renderer",
]
