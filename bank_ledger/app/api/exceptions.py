from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.errors import (
    AccountHasMovementsError,
    AccountNotFoundError,
    AccountNumberExhaustedError,
    BackdatedMovementError,
    CustomerHasAccountsError,
    CustomerNotFoundError,
    DuplicateAccountNumberError,
    DuplicateCustomerError,
    InitialBalanceLockedError,
    InsufficientFundsError,
    InvalidDateRangeError,
    InvalidMovementKindError,
    LedgerError,
    MovementNotFoundError,
    NoAccountsForCustomerError,
    UnsupportedFormatError,
)


logger = logging.getLogger(__name__)

# Most specific class wins; unlisted LedgerError subclasses answer 400.
STATUS_BY_ERROR: dict[type[LedgerError], int] = {
    AccountNotFoundError: 404,
    CustomerNotFoundError: 404,
    MovementNotFoundError: 404,
    NoAccountsForCustomerError: 404,
    InsufficientFundsError: 409,
    DuplicateAccountNumberError: 409,
    DuplicateCustomerError: 409,
    InitialBalanceLockedError: 409,
    AccountHasMovementsError: 409,
    CustomerHasAccountsError: 409,
    InvalidMovementKindError: 400,
    BackdatedMovementError: 400,
    InvalidDateRangeError: 400,
    UnsupportedFormatError: 400,
    AccountNumberExhaustedError: 503,
}


def status_for(exc: LedgerError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 400


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
        status_code = status_for(exc)
        logger.warning(
            "request.rejected",
            extra={
                "path": request.url.path,
                "code": exc.code,
                "status_code": status_code,
                "detail": exc.message,
            },
        )
        return JSONResponse(
            status_code=status_code,
            content={"code": exc.code, "detail": exc.message},
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"code": "VALIDATION_ERROR", "detail": str(exc)},
        )
