from __future__ import annotations

import logging

from ..core.errors import (
    CustomerHasAccountsError,
    CustomerNotFoundError,
    DuplicateCustomerError,
)
from ..models import CustomerCreate, CustomerModel, CustomerResponse, CustomerUpdate
from .ports import AccountLookup
from .repository import CustomerRepository


logger = logging.getLogger(__name__)


class CustomerService:
    def __init__(self, customers: CustomerRepository, accounts: AccountLookup) -> None:
        self.customers = customers
        self.accounts = accounts

    def _get_customer(self, customer_id: int) -> CustomerModel:
        customer = self.customers.find_by_id(customer_id)
        if customer is None:
            raise CustomerNotFoundError(f"Customer not found with ID: {customer_id}")
        return customer

    def _ensure_identification_free(self, identification: str) -> None:
        if self.customers.find_by_identification(identification) is not None:
            raise DuplicateCustomerError(
                f"Customer identification already registered: {identification}"
            )

    def _customer_to_response(self, customer: CustomerModel) -> CustomerResponse:
        return CustomerResponse(
            id=customer.id,
            name=customer.name,
            identification=customer.identification,
            gender=customer.gender,
            age=customer.age,
            address=customer.address,
            phone=customer.phone,
            status=customer.status,
        )

    def create_customer(self, payload: CustomerCreate) -> CustomerResponse:
        self._ensure_identification_free(payload.identification)
        customer = self.customers.save(CustomerModel(**payload.model_dump()))
        logger.info("customer.created", extra={"customer_id": customer.id})
        return self._customer_to_response(customer)

    def get_customer(self, customer_id: int) -> CustomerResponse:
        return self._customer_to_response(self._get_customer(customer_id))

    def list_customers(self) -> list[CustomerResponse]:
        return [self._customer_to_response(c) for c in self.customers.find_all()]

    def update_customer(self, customer_id: int, payload: CustomerUpdate) -> CustomerResponse:
        customer = self._get_customer(customer_id)
        if payload.identification != customer.identification:
            self._ensure_identification_free(payload.identification)
        for field, value in payload.model_dump().items():
            setattr(customer, field, value)
        customer = self.customers.save(customer)
        logger.info("customer.updated", extra={"customer_id": customer.id})
        return self._customer_to_response(customer)

    def delete_customer(self, customer_id: int) -> None:
        self._get_customer(customer_id)
        if self.accounts.find_by_customer(customer_id):
            raise CustomerHasAccountsError(
                f"Customer {customer_id} still owns accounts and cannot be deleted"
            )
        self.customers.delete_by_id(customer_id)
        logger.info("customer.deleted", extra={"customer_id": customer_id})
