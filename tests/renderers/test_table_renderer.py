"""
Tests for the attendee table renderer.
"""

import logging
from datetime import datetime

import pytest

from attendance_report import AttendeeRecord
from attendance_report.renderers import TableRenderer


@pytest.fixture
def table(layout):
    return TableRenderer(layout.canvas, layout.pages, layout.config, layout.fitter)


def attendee(**overrides):
    values = dict(
        full_name="Pedro Soto",
        tax_id="123456785",
        role="Supervisor",
        checked_in_at=datetime(2026, 10, 19, 9, 5, 30),
    )
    values.update(overrides)
    return AttendeeRecord(**values)


def texts_at(canvas, x):
    return [text for _, text, tx, _ in canvas.texts if tx == pytest.approx(x)]


class TestColumnHeader:
    def test_titles_and_advance(self, layout, table):
        top = layout.pages.y
        table.draw_column_header()

        assert layout.canvas.texts_on(1) == ["N°", "Nombre", "RUT", "Cargo", "Hora", "Firma"]
        assert [y for _, _, _, y in layout.canvas.texts] == pytest.approx([top - 15] * 6)
        assert layout.pages.y == pytest.approx(top - layout.config.header_row_height)

    def test_titles_sit_in_their_columns(self, layout, table):
        table.draw_column_header()

        left = layout.config.geometry.content_left
        xs = [x for _, _, x, _ in layout.canvas.texts]
        expected = [left + offset + 6 for offset in (0, 20, 185, 265, 350, 420)]
        assert xs == pytest.approx(expected)


class TestRow:
    def test_cell_contents(self, layout, table):
        top = layout.pages.y
        page = table.draw_row(3, attendee(), None)

        assert page == 1
        texts = layout.canvas.texts_on(1)
        assert texts[:3] == ["3", "Pedro Soto", "12.345.678-5"]
        assert "Supervisor" in texts
        assert "19-10-2026" in texts
        assert "09:05:30" in texts
        assert "Sin firma" in texts
        assert layout.pages.y == pytest.approx(top - layout.config.row_height)

    def test_date_above_time(self, layout, table):
        top = layout.pages.y
        table.draw_row(1, attendee(), None)

        positions = {text: y for _, text, _, y in layout.canvas.texts}
        assert positions["19-10-2026"] == pytest.approx(top - 16)
        assert positions["09:05:30"] == pytest.approx(top - 32)

    def test_index_is_centered_and_whole(self, layout, table):
        table.draw_row(40, attendee(), None)

        assert texts_at(layout.canvas, 36 + 10) == ["40"]
        assert table.index_font_size(40) == layout.config.body_font_size

    @pytest.mark.parametrize("index", [9, 99, 100, 1000, 12345])
    def test_index_stays_inside_its_column(self, layout, table, index):
        size = table.index_font_size(index)
        width = layout.fitter.measure(str(index), "Helvetica", size)

        center = 36 + 10
        assert center - width / 2 >= 36
        assert center + width / 2 <= 56 + 1e-6
        assert size <= layout.config.body_font_size

    def test_long_index_shrinks(self, table):
        assert table.index_font_size(1000) < table.index_font_size(100)

    def test_long_name_is_clamped(self, layout, table):
        name = "Juan Pablo Alejandro de la Fuente Valenzuela"
        table.draw_row(1, attendee(full_name=name), None)

        drawn = texts_at(layout.canvas, 36 + 20 + 6)[0]
        assert drawn.endswith("…")
        assert len(drawn) <= layout.config.name_max_chars
        assert drawn.startswith("Juan Pablo")

    def test_long_role_keeps_two_lines(self, layout, table):
        role = " ".join(["Supervisor de operaciones"] * 8)
        top = layout.pages.y
        table.draw_row(1, attendee(role=role), None)

        role_x = 36 + 265 + 6
        role_texts = [(text, y) for _, text, x, y in layout.canvas.texts if x == pytest.approx(role_x)]
        assert len(role_texts) == 2
        assert role_texts[1][0].endswith("…")
        assert role_texts[0][1] == pytest.approx(top - 16)
        assert role_texts[1][1] == pytest.approx(top - 28)
        for text, _ in role_texts:
            assert layout.fitter.fits(text, "Helvetica", 8, table.cell_text_width("role"))

    def test_blank_values_render_dashes(self, layout, table):
        table.draw_row(1, attendee(tax_id="", role=""), None)

        assert texts_at(layout.canvas, 36 + 185 + 6) == ["-"]
        assert texts_at(layout.canvas, 36 + 265 + 6) == ["-"]

    def test_invalid_tax_id_is_drawn_and_logged(self, layout, table, caplog):
        with caplog.at_level(logging.WARNING):
            table.draw_row(1, attendee(tax_id="12345678-9"), None)

        assert "12.345.678-9" in layout.canvas.texts_on(1)
        assert "invalid check digit" in caplog.text

    def test_signature_inside_cell(self, layout, table, loaded_image):
        top = layout.pages.y
        table.draw_row(1, attendee(), loaded_image(400, 100))

        box = table.signature_box(top)
        ((_, x, y, width, height),) = layout.canvas.images
        assert "Sin firma" not in layout.canvas.texts_on(1)
        assert x >= box.left and x + width <= box.right + 1e-6
        assert y >= box.bottom - 1e-6 and y + height <= box.top + 1e-6
        assert width / height == pytest.approx(4.0)

    def test_signature_box_is_inset_cell(self, layout, table):
        top = layout.pages.y
        box = table.signature_box(top)

        assert box.x == pytest.approx(456 + 6)
        assert box.y == pytest.approx(top - 52 + 9)
        assert (box.width, box.height) == pytest.approx((layout.config.geometry.content_width - 420 - 12, 34))

    def test_signature_box_stays_in_row(self, layout, table):
        top = layout.pages.y
        box = table.signature_box(top)

        assert box.top < top
        assert box.bottom > top - layout.config.row_height
        assert box.right <= layout.config.geometry.content_right


class TestRowPagination:
    def test_rows_break_onto_new_page(self, layout, table, attendees_factory):
        continued = []
        layout.pages.on_continuation_page = lambda pages: continued.append(pages.cursor.page_number)
        layout.pages.advance(layout.config.header_height + layout.config.table_gap)
        table.draw_column_header()

        row_pages = table.draw_rows(attendees_factory(12), [None] * 12)

        assert row_pages == [1] * 8 + [2] * 4
        assert continued == [2]
        assert layout.canvas.show_page_calls == 1

    def test_missing_signatures_default_to_placeholder(self, layout, table, attendees_factory):
        table.draw_rows(attendees_factory(2), [])

        assert layout.canvas.texts_on(1).count("Sin firma") == 2

    def test_rows_never_cross_footer_floor(self, layout, table, attendees_factory):
        floor = layout.config.geometry.content_bottom + layout.config.reserved_footer_space

        for index, record in enumerate(attendees_factory(30), start=1):
            table.draw_row(index, record, None)
            assert layout.pages.y >= floor - 1e-6
