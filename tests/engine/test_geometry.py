"""
Tests for page geometry and the fixed table columns.
"""

import pytest

from attendance_report.engine.geometry import PageGeometry, Rect, TableColumnSpec


class TestPageGeometry:
    def test_a4_defaults(self):
        geometry = PageGeometry()

        assert geometry.width == pytest.approx(595.28, abs=0.01)
        assert geometry.height == pytest.approx(841.89, abs=0.01)
        assert geometry.margin == 36.0
        assert geometry.content_width == pytest.approx(geometry.width - 72.0)
        assert geometry.content_top == pytest.approx(geometry.height - 36.0)

    def test_content_box_follows_margins(self):
        geometry = PageGeometry(margin=24.0)
        margins = geometry.margins

        assert (margins.top, margins.bottom, margins.left, margins.right) == (24.0, 24.0, 24.0, 24.0)
        assert geometry.content_left == 24.0
        assert geometry.content_bottom == 24.0
        assert geometry.content_right == pytest.approx(geometry.width - 24.0)
        assert geometry.content_width == pytest.approx(geometry.content_right - geometry.content_left)


class TestTableColumnSpec:
    def test_signature_absorbs_remaining_width(self):
        geometry = PageGeometry()
        columns = TableColumnSpec.for_geometry(geometry)

        assert columns.fixed_width == 420.0
        assert columns.signature == pytest.approx(geometry.content_width - 420.0)
        assert sum(columns.widths().values()) == pytest.approx(geometry.content_width)

    def test_offsets_and_dividers(self):
        columns = TableColumnSpec()
        offsets = columns.offsets(36.0)

        assert list(offsets) == ["index", "name", "tax_id", "role", "time", "signature"]
        assert offsets["name"] == 56.0
        assert offsets["signature"] == 456.0
        assert columns.dividers(36.0) == (56.0, 221.0, 301.0, 386.0, 456.0)

    def test_columns_must_leave_room_for_signatures(self):
        with pytest.raises(ValueError):
            TableColumnSpec(content_width=400.0)


class TestRect:
    def test_inset_and_contains(self):
        outer = Rect(0, 0, 100, 50)
        inner = outer.inset(6, 9)

        assert inner == Rect(6, 9, 88, 32)
        assert outer.contains(inner)
        assert not inner.contains(outer)
