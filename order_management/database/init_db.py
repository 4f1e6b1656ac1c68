# order_management/database/init_db.py
"""
Create the order-management tables and add a small demo data set.

Run:
    python -m order_management.database.init_db

Existing tables are left untouched; demo rows are only added to an empty Users table.
"""

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from order_management import models
from order_management.database.session import Base, SessionLocal, get_engine

logger = logging.getLogger(__name__)


def create_tables(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)
    logger.info(f"Tables ready: {', '.join(sorted(Base.metadata.tables))}")


def seed_demo_data(db: Session) -> bool:
    """Idempotent: returns False when users already exist."""
    if db.query(models.User).first() is not None:
        logger.info("Demo data already present, skipping")
        return False

    try:
        piece = models.Unit(description_english="Piece", description_arabic="قطعة")
        box   = models.Unit(description_english="Box", description_arabic="صندوق")
        db.add_all([piece, box])
        db.flush()

        db.add(models.User(
            user_name="admin",
            password="admin",
            password_date=datetime.now(),
            password_period=0,
            company_id=1,
        ))
        db.add_all([
            models.InventoryItem(item_description="Office Chair", price=Decimal("450.00"),
                                 bar_code="7290000000011", unit_id=piece.unit_id),
            models.InventoryItem(item_description="Desk Lamp", price=Decimal("120.00"),
                                 bar_code="7290000000028", unit_id=piece.unit_id),
            models.InventoryItem(item_description="A4 Paper", price=Decimal("95.50"),
                                 bar_code="7290000000035", unit_id=box.unit_id),
        ])
        db.add(models.Customer(
            name_english="Demo Trading Ltd",
            customer_number="C-1001",
            contact_person="Dana Levi",
            phone1="03-5551234",
            email="orders@demo-trading.com",
            discount_percent=Decimal("0"),
        ))
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Demo data created: 1 user, 2 units, 3 inventory items, 1 customer")
    return True


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    engine = get_engine()
    create_tables(engine)

    db = SessionLocal()
    try:
        seed_demo_data(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
