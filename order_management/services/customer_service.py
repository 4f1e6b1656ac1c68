# order_management/services/customer_service.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from order_management.config.settings import Settings, get_settings
from order_management.models import Customer
from order_management.repositories import CustomerRepository
from order_management.schemas import (
    CustomerCreate, CustomerCreationResult, CustomerNumberCheck, CustomerOut,
)

logger = logging.getLogger(__name__)


class CustomerService:

    def __init__(self, db: Session, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.customers = CustomerRepository(db, self.settings)

    def get_customers(self) -> List[CustomerOut]:
        try:
            return [CustomerOut.model_validate(c) for c in self.customers.get_customers()]
        except Exception as e:
            logger.error(f"Error getting customers: {e!r}")
            return []

    def get_customer_by_id(self, customer_id: int) -> Optional[CustomerOut]:
        try:
            customer = self.customers.get_customer_by_id(customer_id)
            return CustomerOut.model_validate(customer) if customer is not None else None
        except Exception as e:
            logger.error(f"Error getting customer {customer_id}: {e!r}")
            return None

    def check_customer_number(self, customer_number: str) -> CustomerNumberCheck:
        try:
            exists = self.customers.customer_number_exists(customer_number)
            return CustomerNumberCheck(success=True, exists=exists)
        except Exception as e:
            logger.error(f"Error checking customer number {customer_number!r}: {e!r}")
            return CustomerNumberCheck(success=False, error_message=f"Failed to check customer number: {e}")

    def create_customer(self, request: CustomerCreate) -> CustomerCreationResult:
        """Reject a customer number that is already taken, otherwise insert and return the new id."""
        try:
            if request.customer_number:
                if self.customers.customer_number_exists(request.customer_number):
                    return CustomerCreationResult(
                        success=False,
                        error_message=f"Customer number {request.customer_number} already exists",
                    )

            customer = Customer(**request.model_dump())
            customer_id = self.customers.create_customer(customer)

            logger.info(f"Customer created successfully. CustomerId: {customer_id}")
            return CustomerCreationResult(success=True, customer_id=customer_id)
        except Exception as e:
            logger.error(f"Error creating customer: {e!r}")
            return CustomerCreationResult(success=False, error_message=f"Failed to create customer: {e}")
