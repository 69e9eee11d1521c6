"""
Configuration for the attendance report template.

Every number here is a fixed template constant: column widths and row
heights never depend on report content. ``ReportConfig.from_options``
accepts a flat options mapping, the way render options are passed to the
renderers, and validates it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .engine.geometry import PageGeometry, Size, TableColumnSpec
from .models import AssetRef

BRAND_BUCKET = "brand"


@dataclass(frozen=True)
class FontSpec:
    regular: str = "Helvetica"
    bold: str = "Helvetica-Bold"


@dataclass(frozen=True)
class ReportLabels:
    """Template strings; the defaults are the Spanish wording of the record."""

    title: str = "REGISTRO DE ASISTENCIA – CHARLA"
    continuation_title: str = "Registro de asistencia – {company}"
    company: str = "Empresa"
    company_tax_id: str = "RUT empresa"
    address: str = "Dirección"
    topic: str = "Tema"
    location: str = "Lugar"
    session_code: str = "Código"
    session_date: str = "Fecha charla"
    trainer: str = "Relator"
    closed_at: str = "Cerrada"
    column_index: str = "N°"
    column_name: str = "Nombre"
    column_tax_id: str = "RUT"
    column_role: str = "Cargo"
    column_time: str = "Hora"
    column_signature: str = "Firma"
    no_signature: str = "Sin firma"
    trainer_signature: str = "Firma relator:"
    no_trainer_signature: str = "Sin firma relator"


@dataclass(frozen=True)
class HeaderBudgets:
    """Character budgets applied to tenant-supplied header values."""

    company: int = 45
    company_tax_id: int = 20
    address: int = 55
    topic: int = 55
    location: int = 55
    trainer: int = 32
    continuation_company: int = 60


DEFAULT_BRAND_LOGOS: Tuple[AssetRef, ...] = (
    AssetRef(BRAND_BUCKET, "logo-horizontal.png"),
    AssetRef(BRAND_BUCKET, "registro-logo.png"),
)


@dataclass(frozen=True)
class ReportConfig:
    """Fixed geometry, fonts, labels and runtime knobs for one report template."""

    geometry: PageGeometry = field(default_factory=PageGeometry)
    columns: TableColumnSpec = field(default_factory=TableColumnSpec)
    fonts: FontSpec = field(default_factory=FontSpec)
    labels: ReportLabels = field(default_factory=ReportLabels)
    budgets: HeaderBudgets = field(default_factory=HeaderBudgets)

    # Header block (page 1)
    header_height: float = 145.0
    header_padding: float = 12.0
    logo_box: Size = Size(170.0, 52.0)
    title_font_size: float = 12.0
    info_font_size: float = 10.0
    info_line_height: float = 13.0
    info_right_column: float = 0.62
    table_gap: float = 18.0

    # Continuation pages
    continuation_font_size: float = 10.0
    continuation_title_height: float = 16.0

    # Table
    header_row_height: float = 22.0
    row_height: float = 52.0
    cell_padding: float = 6.0
    header_font_size: float = 10.0
    body_font_size: float = 9.0
    time_font_size: float = 8.0
    role_font_size: float = 8.0
    role_line_height: float = 12.0
    role_max_lines: int = 2
    name_max_chars: int = 30
    date_max_chars: int = 14
    time_max_chars: int = 10
    signature_cell_padding: float = 9.0
    placeholder_font_size: float = 8.0

    # Trainer signature block
    signature_label_height: float = 22.0
    signature_box: Size = Size(300.0, 90.0)
    signature_name_gap: float = 18.0
    signature_trailing_space: float = 10.0
    signature_label_font_size: float = 11.0
    trainer_font_size: float = 10.0

    # Runtime
    session_code_length: int = 6
    timezone: Optional[str] = None
    max_workers: int = 1
    brand_logo_candidates: Tuple[AssetRef, ...] = DEFAULT_BRAND_LOGOS
    accepted_image_formats: Tuple[str, ...] = ("PNG", "JPEG")
    invariant: bool = True
    line_width: float = 1.0

    def __post_init__(self) -> None:
        positive = (
            "header_height",
            "header_row_height",
            "row_height",
            "role_line_height",
            "title_font_size",
            "info_font_size",
            "body_font_size",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.columns.content_width != self.geometry.content_width:
            raise ValueError("Table columns must span the page content width")
        if self.role_max_lines < 1:
            raise ValueError("role_max_lines must be at least 1")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.session_code_length < 1:
            raise ValueError("session_code_length must be at least 1")
        if self.logo_box.width <= 0 or self.logo_box.height <= 0:
            raise ValueError("logo_box dimensions must be positive")
        if 2 * (self.header_padding + self.logo_box.width) >= self.geometry.content_width:
            raise ValueError("Logo boxes leave no room for the title")
        if self.timezone:
            try:
                ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise ValueError(f"Unknown timezone: {self.timezone}") from exc

    @property
    def signature_block_height(self) -> float:
        """Total height of the closing block: label, box, trainer line and descent."""
        return (
            self.signature_label_height
            + self.signature_box.height
            + self.signature_name_gap
            + self.signature_trailing_space
        )

    @property
    def reserved_footer_space(self) -> float:
        """Space rows keep free so the closing block always follows the last row."""
        return self.signature_block_height

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "ReportConfig":
        """
        Build a config from a flat options mapping.

        ``margin`` rebuilds the page geometry and table columns; ``labels``,
        ``fonts`` and ``budgets`` take nested mappings; ``brand_logo_candidates``
        takes ``(bucket, path)`` pairs. Unknown keys raise ``ValueError``.
        """
        options = dict(options or {})
        config = cls()
        updates: Dict[str, Any] = {}

        if "margin" in options:
            geometry = PageGeometry(margin=float(options.pop("margin")))
            updates["geometry"] = geometry
            updates["columns"] = TableColumnSpec.for_geometry(geometry)

        nested = {"labels": ReportLabels, "fonts": FontSpec, "budgets": HeaderBudgets}
        for key, nested_cls in nested.items():
            if key in options:
                value = options.pop(key)
                if not isinstance(value, Mapping):
                    raise ValueError(f"Option '{key}' must be a mapping")
                updates[key] = replace(getattr(config, key), **_checked(nested_cls, value))

        if "brand_logo_candidates" in options:
            updates["brand_logo_candidates"] = tuple(
                AssetRef(str(bucket), str(path)) for bucket, path in options.pop("brand_logo_candidates")
            )
        if "accepted_image_formats" in options:
            updates["accepted_image_formats"] = tuple(
                str(fmt).upper() for fmt in options.pop("accepted_image_formats")
            )
        for key in ("logo_box", "signature_box"):
            if key in options:
                width, height = options.pop(key)
                updates[key] = Size(float(width), float(height))

        updates.update(_checked(cls, options))
        return replace(config, **updates)


def _checked(target: type, values: Mapping[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(target)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown {target.__name__} options: {', '.join(unknown)}")
    return dict(values)
