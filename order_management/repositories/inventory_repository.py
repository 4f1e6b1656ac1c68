# order_management/repositories/inventory_repository.py
from typing import Any, List, Mapping, Optional

from sqlalchemy import text

from order_management.database.sql import as_decimal, as_int, as_str, column
from order_management.models import InventoryItem, Unit

from .base import BaseRepository

ITEM_COLUMNS = "Item_Child_id, Item_Child_Desc_e, Price, Bar_Code, Unit_id"


def _row_to_item(row: Mapping[str, Any]) -> InventoryItem:
    return InventoryItem(
        item_child_id=as_int(column(row, "Item_Child_id")),
        item_description=as_str(column(row, "Item_Child_Desc_e"), ""),
        price=as_decimal(column(row, "Price")),
        bar_code=as_str(column(row, "Bar_Code"), ""),
        unit_id=as_int(column(row, "Unit_id")),
    )


def _row_to_unit(row: Mapping[str, Any]) -> Unit:
    return Unit(
        unit_id=as_int(column(row, "Unit_id")),
        description_english=as_str(column(row, "Unit_Desc_e"), ""),
        description_arabic=as_str(column(row, "Unit_Desc_a")),
    )


class InventoryRepository(BaseRepository):

    def get_inventory_items(self) -> List[InventoryItem]:
        return self.run(
            "get_inventory_items",
            lambda: self.db.query(InventoryItem).order_by(InventoryItem.item_description).all(),
            self._get_inventory_items_sql,
            default=[],
        )

    def _get_inventory_items_sql(self) -> List[InventoryItem]:
        with self.connect() as conn:
            rows = conn.execute(
                text(f"SELECT {ITEM_COLUMNS} FROM Inv_Item_Index_Child ORDER BY Item_Child_Desc_e")
            ).mappings().all()
        return [_row_to_item(r) for r in rows]

    def get_units(self) -> List[Unit]:
        return self.run(
            "get_units",
            lambda: self.db.query(Unit).order_by(Unit.unit_id).all(),
            self._get_units_sql,
            default=[],
        )

    def _get_units_sql(self) -> List[Unit]:
        with self.connect() as conn:
            rows = conn.execute(
                text("SELECT Unit_id, Unit_Desc_e, Unit_Desc_a FROM Inv_Units ORDER BY Unit_id")
            ).mappings().all()
        return [_row_to_unit(r) for r in rows]

    def get_inventory_item_by_id(self, item_id: int) -> Optional[InventoryItem]:
        return self.run(
            f"get_inventory_item_by_id({item_id})",
            lambda: self.db.get(InventoryItem, item_id),
            lambda: self._get_inventory_item_sql(item_id),
            default=None,
        )

    def _get_inventory_item_sql(self, item_id: int) -> Optional[InventoryItem]:
        with self.connect() as conn:
            row = conn.execute(
                text(f"SELECT {ITEM_COLUMNS} FROM Inv_Item_Index_Child WHERE Item_Child_id = :item_id"),
                {"item_id": item_id},
            ).mappings().first()
        return _row_to_item(row) if row is not None else None
