# order_management/repositories/customer_repository.py
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import text

from order_management.database.sql import (
    as_bool, as_datetime, as_decimal, as_int, as_str, column, insert_returning_identity,
)
from order_management.models import Customer

from .base import BaseRepository

logger = logging.getLogger(__name__)

CUSTOMER_COLUMNS = (
    "Cust_Sup_id, Name_e, Name_a, Cust_Sup_no, Country_id, City_id, Discount_Percent, "
    "Contact_Person, Address, Phone1, Phone2, Fax, E_mail, Web_site, Zip_Code, P_O_Box, "
    "Is_Release_Tax, Release_No, Release_Expiry_Date, Is_Project_Account, Salesman_id"
)


def _row_to_customer(row: Mapping[str, Any]) -> Customer:
    return Customer(
        cust_sup_id=as_int(column(row, "Cust_Sup_id")),
        name_english=as_str(column(row, "Name_e"), ""),
        name_arabic=as_str(column(row, "Name_a")),
        customer_number=as_str(column(row, "Cust_Sup_no")),
        country_id=as_str(column(row, "Country_id")),
        city_id=as_str(column(row, "City_id")),
        discount_percent=as_decimal(column(row, "Discount_Percent"), None),
        contact_person=as_str(column(row, "Contact_Person")),
        address1=as_str(column(row, "Address")),
        phone1=as_str(column(row, "Phone1")),
        phone2=as_str(column(row, "Phone2")),
        fax=as_str(column(row, "Fax")),
        email=as_str(column(row, "E_mail")),
        website=as_str(column(row, "Web_site")),
        zip_code=as_str(column(row, "Zip_Code")),
        po_box=as_str(column(row, "P_O_Box")),
        is_release_tax=as_bool(column(row, "Is_Release_Tax")),
        release_number=as_str(column(row, "Release_No")),
        release_expiry_date=as_datetime(column(row, "Release_Expiry_Date")),
        is_project_account=as_bool(column(row, "Is_Project_Account")),
        salesman_id=as_int(column(row, "Salesman_id")),
    )


def _customer_values(c: Customer) -> Dict[str, Any]:
    # None stays None: optional fields are stored as NULL, never as ''
    return {
        "Name_e": c.name_english,
        "Name_a": c.name_arabic,
        "Cust_Sup_no": c.customer_number,
        "Country_id": c.country_id,
        "City_id": c.city_id,
        "Discount_Percent": c.discount_percent,
        "Contact_Person": c.contact_person,
        "Address": c.address1,
        "Phone1": c.phone1,
        "Phone2": c.phone2,
        "Fax": c.fax,
        "E_mail": c.email,
        "Web_site": c.website,
        "Zip_Code": c.zip_code,
        "P_O_Box": c.po_box,
        "Is_Release_Tax": bool(c.is_release_tax),
        "Release_No": c.release_number,
        "Release_Expiry_Date": c.release_expiry_date,
        "Is_Project_Account": bool(c.is_project_account),
        "Salesman_id": c.salesman_id,
    }


class CustomerRepository(BaseRepository):

    def get_customers(self) -> List[Customer]:
        return self.run(
            "get_customers",
            lambda: self.db.query(Customer).order_by(Customer.name_english).all(),
            self._get_customers_sql,
            default=[],
        )

    def _get_customers_sql(self) -> List[Customer]:
        with self.connect() as conn:
            rows = conn.execute(
                text(f"SELECT {CUSTOMER_COLUMNS} FROM Cust_Sup ORDER BY Name_e")
            ).mappings().all()
        return [_row_to_customer(r) for r in rows]

    def get_customer_by_id(self, customer_id: int) -> Optional[Customer]:
        return self.run(
            f"get_customer_by_id({customer_id})",
            lambda: self.db.get(Customer, customer_id),
            lambda: self._get_customer_sql(customer_id),
            default=None,
        )

    def _get_customer_sql(self, customer_id: int) -> Optional[Customer]:
        with self.connect() as conn:
            row = conn.execute(
                text(f"SELECT {CUSTOMER_COLUMNS} FROM Cust_Sup WHERE Cust_Sup_id = :customer_id"),
                {"customer_id": customer_id},
            ).mappings().first()
        return _row_to_customer(row) if row is not None else None

    def create_customer(self, customer: Customer) -> int:
        values = _customer_values(customer)
        return self.run(
            "create_customer",
            lambda: self._create_customer_orm(customer),
            lambda: self._create_customer_sql(values),
        )

    def _create_customer_orm(self, customer: Customer) -> int:
        try:
            self.db.add(customer)
            self.db.flush()
            customer_id = customer.cust_sup_id
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Created customer {customer_id}")
        return customer_id

    def _create_customer_sql(self, values: Dict[str, Any]) -> int:
        with self.connect() as conn:
            with conn.begin():
                customer_id = insert_returning_identity(conn, "Cust_Sup", values, "Cust_Sup_id")
        logger.info(f"Created customer {customer_id} using raw SQL")
        return customer_id

    def customer_number_exists(self, customer_number: str) -> bool:
        return self.run(
            f"customer_number_exists({customer_number!r})",
            lambda: (
                self.db.query(Customer.cust_sup_id)
                .filter(Customer.customer_number == customer_number)
                .first()
                is not None
            ),
            lambda: self._customer_number_exists_sql(customer_number),
        )

    def _customer_number_exists_sql(self, customer_number: str) -> bool:
        with self.connect() as conn:
            count = conn.execute(
                text("SELECT COUNT(*) FROM Cust_Sup WHERE Cust_Sup_no = :customer_number"),
                {"customer_number": customer_number},
            ).scalar()
        return (count or 0) > 0
