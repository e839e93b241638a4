from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from ..core.dependencies import (
    get_account_service,
    get_customer_service,
    get_ledger_service,
    get_statement_service,
)
from ..models import (
    AccountCreate,
    AccountResponse,
    AccountUpdate,
    BalanceResponse,
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
    MovementCreate,
    MovementResponse,
    MovementUpdate,
    StatementResponse,
)
from ..services import AccountService, CustomerService, LedgerService, StatementService


customer_router = APIRouter(prefix="/customers", tags=["customers"])

@customer_router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerResponse:
    return service.create_customer(payload)

@customer_router.get("", response_model=list[CustomerResponse])
def list_customers(
    service: CustomerService = Depends(get_customer_service),
) -> list[CustomerResponse]:
    return service.list_customers()

@customer_router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: int,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerResponse:
    return service.get_customer(customer_id)

@customer_router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: int,
    payload: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerResponse:
    return service.update_customer(customer_id, payload)

@customer_router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    customer_id: int,
    service: CustomerService = Depends(get_customer_service),
) -> Response:
    service.delete_customer(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


router = APIRouter(prefix="/accounts", tags=["accounts"])

@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_account(
    payload: AccountCreate,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    return service.create_account(payload)

@router.get("", response_model=list[AccountResponse])
def list_accounts(
    customer_id: Optional[int] = None,
    service: AccountService = Depends(get_account_service),
) -> list[AccountResponse]:
    return service.list_accounts(customer_id)

@router.get("/by-number/{number}", response_model=AccountResponse)
def get_account_by_number(
    number: str,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    return service.get_account_by_number(number)

@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    return service.get_account(account_id)

@router.put("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: int,
    payload: AccountUpdate,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    return service.update_account(account_id, payload)

@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    account_id: int,
    service: AccountService = Depends(get_account_service),
) -> Response:
    service.delete_account(account_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{account_id}/balance", response_model=BalanceResponse)
def get_balance(
    account_id: int,
    ledger: LedgerService = Depends(get_ledger_service),
) -> BalanceResponse:
    return BalanceResponse(
        account_id=account_id,
        balance=ledger.compute_current_balance(account_id),
    )

@router.get("/{account_id}/movements", response_model=list[MovementResponse])
def list_account_movements(
    account_id: int,
    ledger: LedgerService = Depends(get_ledger_service),
) -> list[MovementResponse]:
    return ledger.list_movements_by_account(account_id)


movement_router = APIRouter(prefix="/movements", tags=["movements"])

@movement_router.post("", response_model=MovementResponse, status_code=status.HTTP_201_CREATED)
def create_movement(
    payload: MovementCreate,
    ledger: LedgerService = Depends(get_ledger_service),
) -> MovementResponse:
    return ledger.append_movement(
        payload.kind,
        payload.value,
        account_id=payload.account_id,
        account_number=payload.account_number,
        timestamp=payload.timestamp,
    )

@movement_router.get("", response_model=list[MovementResponse])
def list_movements(
    ledger: LedgerService = Depends(get_ledger_service),
) -> list[MovementResponse]:
    return ledger.list_movements()

@movement_router.get("/{movement_id}", response_model=MovementResponse)
def get_movement(
    movement_id: int,
    ledger: LedgerService = Depends(get_ledger_service),
) -> MovementResponse:
    return ledger.get_movement(movement_id)

@movement_router.put("/{movement_id}", response_model=MovementResponse)
def update_movement(
    movement_id: int,
    payload: MovementUpdate,
    ledger: LedgerService = Depends(get_ledger_service),
) -> MovementResponse:
    return ledger.update_movement(movement_id, payload)

@movement_router.delete("/{movement_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_movement(
    movement_id: int,
    ledger: LedgerService = Depends(get_ledger_service),
) -> Response:
    ledger.delete_movement(movement_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


report_router = APIRouter(prefix="/reports", tags=["reports"])

@report_router.get("", response_model=StatementResponse)
def get_statement(
    customer_id: int,
    start_date: date,
    end_date: date,
    service: StatementService = Depends(get_statement_service),
) -> StatementResponse:
    return service.build_statement(customer_id, start_date, end_date)

@report_router.get("/download")
def download_statement(
    customer_id: int,
    start_date: date,
    end_date: date,
    format: str = "csv",
    service: StatementService = Depends(get_statement_service),
) -> Response:
    rendered = service.render_statement(customer_id, start_date, end_date, format)
    return Response(
        content=rendered.content,
        media_type=rendered.media_type,
        headers={
            "Content-Disposition": f'inline; filename="{rendered.filename}"',
            "Cache-Control": "no-cache",
        },
    )

__all__ = ["customer_router", "router", "movement_router", "report_router"]
