"""
Pytest configuration and shared fixtures.

The fixtures build a small base in an InMemoryTableService:

    Orders (main)            Items (child)
    -------------            -------------
    Order (primary text)     Item (primary text)
    Items  <--- duplex --->  Order
                             Quantity (number)
                             Note (text)
                             Total (formula)
                             Created (created time)

PO-1 links Bolt, Nut and Washer; PO-2 links nothing.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from duplex_copy.core.enums import FieldType, LinkCellFormat
from duplex_copy.service.memory import InMemoryTableService

MAIN_TABLE = "tblOrders"
CHILD_TABLE = "tblItems"
FORWARD_FIELD = "fldOrderItems"
BACK_FIELD = "fldItemOrder"


@dataclass
class LinkedTables:
    service: InMemoryTableService
    main_table_id: str
    child_table_id: str
    forward_field_id: str
    back_field_id: str
    m1: str
    m2: str
    c1: str
    c2: str
    c3: str

    async def linked_ids(self, anchor: str) -> list[str]:
        """Record ids currently linked from an anchor's forward field."""
        cell = await self.service.get_cell_value(self.main_table_id, self.forward_field_id, anchor)
        if cell is None:
            return []
        if isinstance(cell, dict):
            return cell["recordIds"]
        return [item if isinstance(item, str) else item["record_id"] for item in cell]


def build_linked_tables(
    link_cell_format: LinkCellFormat | str = LinkCellFormat.object,
    sync_links: bool = True,
    multiple: bool = True,
) -> LinkedTables:
    service = InMemoryTableService(link_cell_format=link_cell_format)
    main = service.create_table("Orders", table_id=MAIN_TABLE)
    child = service.create_table("Items", table_id=CHILD_TABLE)

    service.add_field(main, "Order", FieldType.text, field_id="fldOrderName", is_primary=True)
    service.add_field(child, "Item", FieldType.text, field_id="fldItemName", is_primary=True)
    service.add_field(child, "Quantity", FieldType.number, field_id="fldQuantity")
    service.add_field(child, "Note", FieldType.text, field_id="fldNote")
    service.add_field(child, "Total", FieldType.formula, field_id="fldTotal")
    service.add_field(child, "Created", FieldType.created_time, field_id="fldCreated")
    service.add_duplex_link(
        main,
        "Items",
        child,
        "Order",
        multiple=multiple,
        forward_field_id=FORWARD_FIELD,
        back_field_id=BACK_FIELD,
    )

    m1 = service.insert_record(main, {"Order": "PO-1"})
    m2 = service.insert_record(main, {"Order": "PO-2"})
    c1 = service.insert_record(
        child, {"Item": "Bolt", "Quantity": 10, "Note": "zinc", "Total": 50, "Created": 1700000000000, "Order": [m1]}
    )
    c2 = service.insert_record(
        child, {"Item": "Nut", "Quantity": 20, "Note": None, "Total": 40, "Created": 1700000000000, "Order": [m1]}
    )
    c3 = service.insert_record(
        child, {"Item": "Washer", "Quantity": 5, "Total": 5, "Created": 1700000000000, "Order": [m1]}
    )

    # Seeding always synchronizes; the flag only affects later writes
    service.sync_links = sync_links
    return LinkedTables(service, main, child, FORWARD_FIELD, BACK_FIELD, m1, m2, c1, c2, c3)


@pytest.fixture
def linked_tables() -> LinkedTables:
    """Orders/Items base with PO-1 linking three items."""
    return build_linked_tables()


@pytest.fixture
def make_linked_tables():
    """Factory for variants of the Orders/Items base."""
    return build_linked_tables
