"""Tests for the in-memory table store."""

import pytest

from duplex_copy.core.enums import FieldType
from duplex_copy.core.exceptions import DuplexCopyNotFoundError, TableServiceError
from duplex_copy.core.models import NewRecordSpec
from duplex_copy.protocols.table_service import TableService
from duplex_copy.service.memory import InMemoryTableService


class TestSeeding:
    """Tests for building tables, fields and records."""

    def test_implements_protocol(self):
        assert isinstance(InMemoryTableService(), TableService)

    def test_duplex_link_fields_pair_up(self, linked_tables):
        t = linked_tables
        main_fields = {f.id: f for f in t.service._table(t.main_table_id).fields}
        child_fields = {f.id: f for f in t.service._table(t.child_table_id).fields}

        forward = main_fields[t.forward_field_id]
        back = child_fields[t.back_field_id]
        assert forward.back_field_id() == back.id
        assert back.back_field_id() == forward.id
        assert forward.linked_table_id() == t.child_table_id
        assert back.linked_table_id() == t.main_table_id

    def test_generated_ids(self):
        service = InMemoryTableService()
        table_id = service.create_table("Orders")
        field = service.add_field(table_id, "Name", FieldType.text)
        record_id = service.insert_record(table_id, {"Name": "PO-1"})

        assert table_id.startswith("tbl")
        assert field.id.startswith("fld")
        assert record_id.startswith("rec")
        assert service.table_name(table_id) == "Orders"

    def test_unknown_field_name(self):
        service = InMemoryTableService()
        table_id = service.create_table("Orders")
        with pytest.raises(DuplexCopyNotFoundError):
            service.insert_record(table_id, {"Missing": 1})

    def test_unknown_table(self):
        with pytest.raises(DuplexCopyNotFoundError):
            InMemoryTableService().table_name("tblNope")


class TestReads:
    """Tests for the read side of the TableService protocol."""

    @pytest.mark.asyncio
    async def test_seeding_links_both_directions(self, linked_tables):
        t = linked_tables
        assert await t.linked_ids(t.m1) == [t.c1, t.c2, t.c3]
        assert await t.linked_ids(t.m2) == []

    @pytest.mark.asyncio
    async def test_object_format(self, linked_tables):
        t = linked_tables
        cell = await t.service.get_cell_value(t.main_table_id, t.forward_field_id, t.m1)
        assert cell == {
            "recordIds": [t.c1, t.c2, t.c3],
            "tableId": t.child_table_id,
            "text": "Bolt,Nut,Washer",
            "type": "text",
        }

    @pytest.mark.asyncio
    async def test_ids_format(self, make_linked_tables):
        t = make_linked_tables(link_cell_format="ids")
        cell = await t.service.get_cell_value(t.child_table_id, t.back_field_id, t.c1)
        assert cell == [t.m1]

    @pytest.mark.asyncio
    async def test_objects_format(self, make_linked_tables):
        t = make_linked_tables(link_cell_format="objects")
        cell = await t.service.get_cell_value(t.child_table_id, t.back_field_id, t.c1)
        assert cell == [{"record_id": t.m1, "text": "PO-1"}]

    @pytest.mark.asyncio
    async def test_empty_link_reads_as_none(self, linked_tables):
        t = linked_tables
        assert await t.service.get_cell_value(t.main_table_id, t.forward_field_id, t.m2) is None

    @pytest.mark.asyncio
    async def test_get_records_respects_page_size(self, linked_tables):
        t = linked_tables
        records = await t.service.get_records(t.child_table_id, 2)
        assert [r.record_id for r in records] == [t.c1, t.c2]

    @pytest.mark.asyncio
    async def test_get_records_omits_empty_cells(self, linked_tables):
        t = linked_tables
        records = {r.record_id: r for r in await t.service.get_records(t.main_table_id, 10)}
        assert t.forward_field_id not in records[t.m2].fields

    @pytest.mark.asyncio
    async def test_reads_return_copies(self, linked_tables):
        t = linked_tables
        fields = await t.service.get_field_metadata(t.child_table_id)
        fields[0].name = "Renamed"
        again = await t.service.get_field_metadata(t.child_table_id)
        assert again[0].name == "Item"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field_id, record_id", [("fldMissing", None), ("fldOrderName", "recMissing")])
    async def test_get_cell_value_not_found(self, linked_tables, field_id, record_id):
        t = linked_tables
        with pytest.raises(DuplexCopyNotFoundError):
            await t.service.get_cell_value(t.main_table_id, field_id, record_id or t.m1)


class TestAddRecords:
    """Tests for batch inserts."""

    @pytest.mark.asyncio
    async def test_computed_field_rejected(self, linked_tables):
        t = linked_tables
        specs = [NewRecordSpec(fields={"fldItemName": "Clip"}), NewRecordSpec(fields={"fldTotal": 1})]

        with pytest.raises(TableServiceError, match="computed"):
            await t.service.add_records(t.child_table_id, specs)

        assert len(await t.service.get_records(t.child_table_id, 100)) == 3

    @pytest.mark.asyncio
    async def test_unknown_link_target_rejected(self, linked_tables):
        t = linked_tables
        spec = NewRecordSpec(fields={t.back_field_id: ["recNope"]})
        with pytest.raises(TableServiceError, match="not found"):
            await t.service.add_records(t.child_table_id, [spec])

    @pytest.mark.asyncio
    async def test_single_link_rejects_several_targets(self, make_linked_tables):
        t = make_linked_tables(multiple=False)
        spec = NewRecordSpec(fields={t.back_field_id: [t.m1, t.m2]})
        with pytest.raises(TableServiceError, match="single record"):
            await t.service.add_records(t.child_table_id, [spec])

    @pytest.mark.asyncio
    async def test_unknown_field_rejected(self, linked_tables):
        t = linked_tables
        with pytest.raises(TableServiceError):
            await t.service.add_records(t.child_table_id, [NewRecordSpec(fields={"fldNope": 1})])

    @pytest.mark.asyncio
    async def test_back_link_write_syncs_forward_field(self, linked_tables):
        t = linked_tables
        spec = NewRecordSpec(fields={"fldItemName": "Clip", t.back_field_id: {"recordIds": [t.m2]}})
        (new_id,) = await t.service.add_records(t.child_table_id, [spec])

        assert await t.linked_ids(t.m2) == [new_id]
        assert t.service.add_records_calls == [(t.child_table_id, [spec])]

    @pytest.mark.asyncio
    async def test_sync_disabled(self, make_linked_tables):
        t = make_linked_tables(sync_links=False)
        spec = NewRecordSpec(fields={t.back_field_id: [t.m2]})
        await t.service.add_records(t.child_table_id, [spec])

        assert await t.linked_ids(t.m2) == []

    @pytest.mark.asyncio
    async def test_values_are_copied_on_write(self, linked_tables):
        t = linked_tables
        tags = ["a"]
        (new_id,) = await t.service.add_records(t.child_table_id, [NewRecordSpec(fields={"fldNote": tags})])
        tags.append("b")

        assert await t.service.get_cell_value(t.child_table_id, "fldNote", new_id) == ["a"]
