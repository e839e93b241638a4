from __future__ import annotations

import logging
from datetime import UTC, datetime
from decimal import Decimal
from typing import Optional, Union

from ..core.errors import (
    AccountNotFoundError,
    BackdatedMovementError,
    InsufficientFundsError,
    InvalidMovementKindError,
    MovementNotFoundError,
)
from ..models import (
    AccountModel,
    MovementKind,
    MovementModel,
    MovementResponse,
    MovementUpdate,
)
from .ports import AccountLookup, MovementStore


logger = logging.getLogger(__name__)


def as_utc(moment: datetime) -> datetime:
    """Normalise to an aware UTC datetime; naive values are taken as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def coerce_kind(kind: Union[MovementKind, str]) -> MovementKind:
    try:
        return MovementKind(kind)
    except ValueError as exc:
        raise InvalidMovementKindError(
            f"Invalid movement type {kind!r}. Must be CREDIT or DEBIT"
        ) from exc


def apply_movement(balance: Decimal, kind: MovementKind, value: Decimal) -> Decimal:
    """Return ``balance`` after applying one movement.

    Raises ``InsufficientFundsError`` carrying ``balance`` when a debit would
    leave it negative. Exactly zero is allowed.
    """
    if kind is MovementKind.CREDIT:
        return balance + value
    if kind is MovementKind.DEBIT:
        new_balance = balance - value
        if new_balance < 0:
            raise InsufficientFundsError(balance)
        return new_balance
    raise InvalidMovementKindError(f"Unhandled movement type {kind!r}")


class LedgerService:
    """Keeps each account's movement chain and its running balance.

    The current balance is never stored on the account: it is the
    ``available_balance`` of the last movement in store order, or the
    account's initial balance when the chain is empty.

    Editing or deleting a movement does not cascade. ``update_movement``
    rebases only the edited movement from the account's initial balance and
    ``delete_movement`` leaves later balances as they were, so after editing
    anything but the last movement the chain no longer folds cleanly.
    """

    def __init__(self, accounts: AccountLookup, movements: MovementStore) -> None:
        self.accounts = accounts
        self.movements = movements

    def _get_account(self, account_id: int) -> AccountModel:
        account = self.accounts.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(f"Account not found with ID: {account_id}")
        return account

    def _resolve_account(
        self,
        account_id: Optional[int],
        account_number: Optional[str],
    ) -> AccountModel:
        if account_id is None:
            if account_number is None:
                raise AccountNotFoundError("Account reference is missing")
            by_number = self.accounts.find_by_number(account_number)
            if by_number is None:
                raise AccountNotFoundError(f"Account not found with number: {account_number}")
            account_id = by_number.id
        return self._get_account(account_id)

    def _get_movement(self, movement_id: int) -> MovementModel:
        movement = self.movements.find_by_id(movement_id)
        if movement is None:
            raise MovementNotFoundError(f"Movement not found with ID: {movement_id}")
        return movement

    def _reload(self, movement: MovementModel) -> MovementModel:
        stored = self.movements.find_by_id(movement.id)
        if stored is None:
            raise MovementNotFoundError(f"Movement {movement.id} vanished after save")
        return stored

    def _movement_to_response(self, movement: MovementModel) -> MovementResponse:
        return MovementResponse(
            id=movement.id,
            account_id=movement.account_id,
            timestamp=movement.timestamp,
            kind=movement.kind,
            value=movement.value,
            available_balance=movement.available_balance,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def compute_current_balance(self, account_id: int) -> Decimal:
        chain = self.movements.find_by_account(account_id)
        if chain:
            return chain[-1].available_balance
        return self._get_account(account_id).initial_balance

    def append_movement(
        self,
        kind: Union[MovementKind, str],
        value: Decimal,
        *,
        account_id: Optional[int] = None,
        account_number: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> MovementResponse:
        account = self._resolve_account(account_id, account_number)
        movement_kind = coerce_kind(kind)
        timestamp = as_utc(timestamp) if timestamp is not None else datetime.now(UTC)

        chain = self.movements.find_by_account(account.id)
        if chain:
            tail = chain[-1]
            # Appends only extend the chain; a movement placed before the
            # tail would never reach the current balance.
            if timestamp < as_utc(tail.timestamp):
                raise BackdatedMovementError(
                    f"Movement timestamp {timestamp.isoformat()} precedes the last "
                    f"movement of account {account.number} "
                    f"({as_utc(tail.timestamp).isoformat()})"
                )
            current = tail.available_balance
        else:
            current = account.initial_balance

        try:
            new_balance = apply_movement(current, movement_kind, value)
        except InsufficientFundsError:
            logger.warning(
                "movement.rejected",
                extra={
                    "account_id": account.id,
                    "kind": movement_kind.value,
                    "value": str(value),
                    "balance": str(current),
                },
            )
            raise

        saved = self.movements.save(
            MovementModel(
                account_id=account.id,
                timestamp=timestamp,
                kind=movement_kind,
                value=value,
                available_balance=new_balance,
            )
        )
        stored = self._reload(saved)
        logger.info(
            "movement.appended",
            extra={
                "account_id": account.id,
                "movement_id": stored.id,
                "kind": movement_kind.value,
                "value": str(value),
                "balance": str(stored.available_balance),
            },
        )
        return self._movement_to_response(stored)

    def update_movement(self, movement_id: int, payload: MovementUpdate) -> MovementResponse:
        movement = self._get_movement(movement_id)
        account = self._get_account(movement.account_id)
        movement_kind = coerce_kind(payload.kind)

        # Rebased from the account baseline, not from the preceding movement.
        new_balance = apply_movement(account.initial_balance, movement_kind, payload.value)

        movement.kind = movement_kind
        movement.value = payload.value
        if payload.timestamp is not None:
            movement.timestamp = as_utc(payload.timestamp)
        movement.available_balance = new_balance

        stored = self._reload(self.movements.save(movement))
        logger.info(
            "movement.updated",
            extra={
                "account_id": account.id,
                "movement_id": stored.id,
                "balance": str(stored.available_balance),
            },
        )
        return self._movement_to_response(stored)

    def delete_movement(self, movement_id: int) -> None:
        movement = self._get_movement(movement_id)
        self.movements.delete_by_id(movement_id)
        logger.info(
            "movement.deleted",
            extra={"account_id": movement.account_id, "movement_id": movement_id},
        )

    def get_movement(self, movement_id: int) -> MovementResponse:
        return self._movement_to_response(self._get_movement(movement_id))

    def list_movements(self) -> list[MovementResponse]:
        return [self._movement_to_response(m) for m in self.movements.find_all()]

    def list_movements_by_account(self, account_id: int) -> list[MovementResponse]:
        self._get_account(account_id)
        return [
            self._movement_to_response(m)
            for m in self.movements.find_by_account(account_id)
        ]
