"""
Tests for ReportConfig defaults and option parsing.
"""

import pytest

from attendance_report import AssetRef, ReportConfig


class TestDefaults:
    def test_a4_template(self):
        config = ReportConfig()

        assert config.geometry.pagesize == pytest.approx((595.28, 841.89), abs=0.01)
        assert config.geometry.content_width == pytest.approx(523.28, abs=0.01)
        assert config.row_height == 52
        assert config.header_row_height == 22

    def test_footer_reserve_matches_closing_block(self):
        config = ReportConfig()

        assert config.signature_block_height == pytest.approx(140)
        assert config.reserved_footer_space == config.signature_block_height

    def test_spanish_labels(self):
        labels = ReportConfig().labels

        assert labels.title == "REGISTRO DE ASISTENCIA – CHARLA"
        assert labels.no_signature == "Sin firma"
        assert labels.continuation_title.format(company="Acme") == "Registro de asistencia – Acme"


class TestValidation:
    def test_non_positive_row_height(self):
        with pytest.raises(ValueError, match="row_height"):
            ReportConfig(row_height=0)

    def test_bad_max_workers(self):
        with pytest.raises(ValueError):
            ReportConfig(max_workers=0)

    def test_unknown_timezone(self):
        with pytest.raises(ValueError, match="timezone"):
            ReportConfig(timezone="Mars/Olympus_Mons")

    def test_logo_boxes_leave_title_room(self):
        with pytest.raises(ValueError):
            ReportConfig.from_options({"logo_box": (260, 52)})


class TestFromOptions:
    def test_empty(self):
        assert ReportConfig.from_options() == ReportConfig()

    def test_scalars(self):
        config = ReportConfig.from_options({"max_workers": 4, "row_height": 60})

        assert config.max_workers == 4
        assert config.row_height == 60

    def test_margin_rebuilds_columns(self):
        config = ReportConfig.from_options({"margin": 24})

        assert config.geometry.content_width == pytest.approx(595.28 - 48, abs=0.01)
        assert config.columns.content_width == config.geometry.content_width
        assert config.columns.signature == pytest.approx(config.geometry.content_width - 420)

    def test_nested_labels(self):
        config = ReportConfig.from_options({"labels": {"no_signature": "Unsigned"}})

        assert config.labels.no_signature == "Unsigned"
        assert config.labels.column_name == "Nombre"

    def test_nested_must_be_mapping(self):
        with pytest.raises(ValueError, match="mapping"):
            ReportConfig.from_options({"fonts": "Times-Roman"})

    def test_brand_logo_candidates(self):
        config = ReportConfig.from_options({"brand_logo_candidates": [("static", "logo.png")]})

        assert config.brand_logo_candidates == (AssetRef("static", "logo.png"),)

    def test_accepted_formats_uppercased(self):
        config = ReportConfig.from_options({"accepted_image_formats": ["png"]})

        assert config.accepted_image_formats == ("PNG",)

    def test_unknown_option(self):
        with pytest.raises(ValueError, match="colour"):
            ReportConfig.from_options({"colour": "red"})

    def test_unknown_nested_option(self):
        with pytest.raises(ValueError, match="subtitle"):
            ReportConfig.from_options({"labels": {"subtitle": "x"}})
