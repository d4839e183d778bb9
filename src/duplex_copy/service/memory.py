"""An in-memory table store.

InMemoryTableService implements the TableService protocol over plain dicts.
It is used for tests, for dry runs and for demonstrating the engine without a
live base. Like the real store it keeps duplex links symmetric: writing a
child's back-link field adds the child to the forward field of every record
it points at.

The store can be told to report link cells in any of the shapes the real
store is known to emit (see LinkCellFormat), and to stop synchronizing duplex
links, which reproduces a store that lags behind its writes.

Example:
    >>> store = InMemoryTableService()
    >>> orders = store.create_table("Orders")
    >>> items = store.create_table("Items")
    >>> store.add_field(orders, "Name", FieldType.text, is_primary=True)
    >>> forward, back = store.add_duplex_link(orders, "Items", items, "Order")
    >>> o1 = store.insert_record(orders, {"Name": "Order 1"})
    >>> store.insert_record(items, {"Order": [o1]})
"""

from __future__ import annotations

import copy
import itertools
from dataclasses import dataclass, field
from typing import Any

from duplex_copy.core.constants import LINK_FIELD_TYPES
from duplex_copy.core.enums import FieldType, LinkCellFormat
from duplex_copy.core.exceptions import DuplexCopyNotFoundError, TableServiceError
from duplex_copy.core.logging_config import LoggerMixin
from duplex_copy.core.models import FieldMeta, FieldProperty, NewRecordSpec, Record, primary_field
from duplex_copy.duplication.display import cell_text
from duplex_copy.duplication.field_filter import is_field_copyable
from duplex_copy.link.codec import record_ids_of


@dataclass
class _Table:
    id: str
    name: str
    fields: list[FieldMeta] = field(default_factory=list)
    # record id -> {field id: value}; link cells hold a list of record ids
    records: dict[str, dict[str, Any]] = field(default_factory=dict)

    def get_field(self, field_id: str) -> FieldMeta | None:
        return next((f for f in self.fields if f.id == field_id), None)

    def get_field_by_name(self, name: str) -> FieldMeta | None:
        return next((f for f in self.fields if f.name == name), None)


class InMemoryTableService(LoggerMixin):
    """TableService backed by in-process dictionaries.

    Args:
        link_cell_format: Shape used when link cells are read back.
        sync_links: When False, writing a back-link field does not update the
            paired forward field.

    Attributes:
        add_records_calls: Every (table_id, specs) pair passed to add_records.
    """

    def __init__(
        self,
        link_cell_format: LinkCellFormat | str = LinkCellFormat.object,
        sync_links: bool = True,
    ):
        self.link_cell_format = LinkCellFormat(link_cell_format)
        self.sync_links = sync_links
        self.add_records_calls: list[tuple[str, list[NewRecordSpec]]] = []
        self._tables: dict[str, _Table] = {}
        self._ids = itertools.count(1)

    # -- seeding --------------------------------------------------------

    def _next_id(self, prefix: str) -> str:
        return f"{prefix}{next(self._ids):04d}"

    def _table(self, table_id: str) -> _Table:
        try:
            return self._tables[table_id]
        except KeyError:
            raise DuplexCopyNotFoundError(f"Table {table_id} not found")

    def create_table(self, name: str, table_id: str | None = None) -> str:
        """Create an empty table and return its id."""
        table_id = table_id or self._next_id("tbl")
        self._tables[table_id] = _Table(id=table_id, name=name)
        return table_id

    def table_name(self, table_id: str) -> str:
        return self._table(table_id).name

    def add_field(
        self,
        table_id: str,
        name: str,
        field_type: int,
        field_id: str | None = None,
        is_primary: bool = False,
        property: FieldProperty | None = None,
    ) -> FieldMeta:
        """Append a field to a table and return its metadata."""
        table = self._table(table_id)
        meta = FieldMeta(
            id=field_id or self._next_id("fld"),
            name=name,
            type=field_type,
            is_primary=is_primary,
            property=property,
        )
        table.fields.append(meta)
        return meta

    def add_duplex_link(
        self,
        main_table_id: str,
        forward_name: str,
        child_table_id: str,
        back_name: str,
        multiple: bool = True,
        forward_field_id: str | None = None,
        back_field_id: str | None = None,
    ) -> tuple[FieldMeta, FieldMeta]:
        """Create a duplex link as a pair of fields, one on each table.

        Args:
            main_table_id: Table receiving the forward field.
            forward_name: Name of the forward field.
            child_table_id: Table receiving the back field.
            back_name: Name of the back field.
            multiple: Multiplicity of the back field. The forward field is
                always multiple.

        Returns:
            tuple[FieldMeta, FieldMeta]: The forward and the back field.
        """
        forward_field_id = forward_field_id or self._next_id("fld")
        back_field_id = back_field_id or self._next_id("fld")
        forward = self.add_field(
            main_table_id,
            forward_name,
            FieldType.duplex_link,
            field_id=forward_field_id,
            property=FieldProperty(table_id=child_table_id, back_field_id=back_field_id, multiple=True),
        )
        back = self.add_field(
            child_table_id,
            back_name,
            FieldType.duplex_link,
            field_id=back_field_id,
            property=FieldProperty(table_id=main_table_id, back_field_id=forward_field_id, multiple=multiple),
        )
        return forward, back

    def insert_record(self, table_id: str, values: dict[str, Any]) -> str:
        """Insert one record, addressing fields by id or by name.

        Computed fields may be seeded this way; add_records rejects them.
        """
        table = self._table(table_id)
        by_id: dict[str, Any] = {}
        for key, value in values.items():
            meta = table.get_field(key) or table.get_field_by_name(key)
            if meta is None:
                raise DuplexCopyNotFoundError(f"Field {key} not found in table {table_id}")
            by_id[meta.id] = value
        return self._insert(table, by_id)

    # -- internals ------------------------------------------------------

    def _validate(self, table: _Table, values: dict[str, Any]) -> None:
        for field_id, value in values.items():
            meta = table.get_field(field_id)
            if meta is None:
                raise TableServiceError(f"Field {field_id} not found in table {table.id}")
            if meta.type in LINK_FIELD_TYPES:
                self._check_targets(meta, record_ids_of(value))

    def _insert(self, table: _Table, values: dict[str, Any]) -> str:
        self._validate(table, values)
        record_id = self._next_id("rec")
        stored: dict[str, Any] = {}
        links: list[tuple[FieldMeta, list[str]]] = []
        for field_id, value in values.items():
            meta = table.get_field(field_id)
            if meta.type in LINK_FIELD_TYPES:
                targets = record_ids_of(value)
                stored[field_id] = targets
                links.append((meta, targets))
            elif value is not None:
                stored[field_id] = copy.deepcopy(value)
        table.records[record_id] = stored

        if self.sync_links:
            for meta, targets in links:
                if meta.is_duplex_link():
                    self._link_back(meta, targets, record_id)
        return record_id

    def _check_targets(self, meta: FieldMeta, targets: list[str]) -> None:
        linked = self._table(meta.linked_table_id()) if meta.linked_table_id() else None
        if linked is None:
            raise TableServiceError(f"Link field {meta.id} has no linked table")
        unknown = [t for t in targets if t not in linked.records]
        if unknown:
            raise TableServiceError(f"Records {unknown} not found in table {linked.id}")
        if meta.property is not None and not meta.property.multiple and len(targets) > 1:
            raise TableServiceError(f"Field {meta.id} links a single record, got {len(targets)}")

    def _link_back(self, meta: FieldMeta, targets: list[str], record_id: str) -> None:
        linked = self._table(meta.linked_table_id())
        back_field_id = meta.back_field_id()
        for target in targets:
            cell = linked.records[target].setdefault(back_field_id, [])
            if record_id not in cell:
                cell.append(record_id)

    def _render(self, meta: FieldMeta, value: Any) -> Any:
        if meta.type not in LINK_FIELD_TYPES:
            return copy.deepcopy(value)
        if not value:
            return None
        linked = self._table(meta.linked_table_id())
        texts = [self._primary_text(linked, rid) for rid in value]
        if self.link_cell_format is LinkCellFormat.ids:
            return list(value)
        if self.link_cell_format is LinkCellFormat.objects:
            return [{"record_id": rid, "text": text} for rid, text in zip(value, texts)]
        return {
            "recordIds": list(value),
            "tableId": linked.id,
            "text": ",".join(texts),
            "type": "text",
        }

    def _primary_text(self, table: _Table, record_id: str) -> str:
        primary = primary_field(table.fields)
        if primary is None or primary.type in LINK_FIELD_TYPES:
            return ""
        return cell_text(table.records.get(record_id, {}).get(primary.id))

    def _rendered_record(self, table: _Table, record_id: str) -> Record:
        fields = {}
        for field_id, value in table.records[record_id].items():
            rendered = self._render(table.get_field(field_id), value)
            if rendered is not None:
                fields[field_id] = rendered
        return Record(record_id=record_id, fields=fields)

    # -- TableService ---------------------------------------------------

    async def get_field_metadata(self, table_id: str) -> list[FieldMeta]:
        return [f.model_copy(deep=True) for f in self._table(table_id).fields]

    async def get_records(self, table_id: str, page_size: int) -> list[Record]:
        table = self._table(table_id)
        record_ids = list(table.records)[:page_size]
        return [self._rendered_record(table, rid) for rid in record_ids]

    async def get_cell_value(self, table_id: str, field_id: str, record_id: str) -> Any:
        table = self._table(table_id)
        meta = table.get_field(field_id)
        if meta is None:
            raise DuplexCopyNotFoundError(f"Field {field_id} not found in table {table_id}")
        if record_id not in table.records:
            raise DuplexCopyNotFoundError(f"Record {record_id} not found in table {table_id}")
        value = table.records[record_id].get(field_id)
        return None if value is None else self._render(meta, value)

    async def add_records(self, table_id: str, specs: list[NewRecordSpec]) -> list[str]:
        """Insert records the way the store does: computed fields are rejected."""
        table = self._table(table_id)
        self.add_records_calls.append((table_id, list(specs)))
        for spec in specs:
            self._validate(table, spec.fields)
            for field_id in spec.fields:
                meta = table.get_field(field_id)
                if not is_field_copyable(meta.type):
                    raise TableServiceError(f"Field {meta.name} is computed and cannot be written")
        record_ids = [self._insert(table, spec.fields) for spec in specs]
        self._logger.debug("Inserted %d records into %s", len(record_ids), table_id)
        return record_ids
