"""Tests for cell_text."""

import pytest

from duplex_copy.duplication.display import cell_text


class TestCellText:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, ""),
            ("PO-1", "PO-1"),
            (7, "7"),
            (7.0, "7"),
            (2.5, "2.5"),
            (True, "Yes"),
            (False, "No"),
        ],
    )
    def test_scalars(self, value, expected):
        assert cell_text(value) == expected

    def test_rich_text_segments(self):
        """Text cells arrive as a list of segments."""
        value = [{"type": "text", "text": "PO-"}, {"type": "text", "text": "1"}]
        assert cell_text(value) == "PO-, 1"

    def test_select_options(self):
        assert cell_text([{"id": "opt1", "text": "Red"}, {"id": "opt2", "text": "Blue"}]) == "Red, Blue"

    def test_link_object(self):
        assert cell_text({"recordIds": ["rec1"], "text": "Order 7"}) == "Order 7"

    def test_nested_text(self):
        assert cell_text({"text": [{"text": "inner"}]}) == "inner"

    def test_empty_items_are_dropped(self):
        assert cell_text(["a", "", None, "b"]) == "a, b"

    def test_object_without_text(self):
        assert cell_text({"link": "https://example.org"}) == '{"link": "https://example.org"}'
