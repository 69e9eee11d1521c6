"""Renderers for the blocks of the attendance record."""

from .header_renderer import HeaderBlockRenderer
from .signature_renderer import TrainerSignatureRenderer
from .table_renderer import TableRenderer

__all__ = ["HeaderBlockRenderer", "TableRenderer", "TrainerSignatureRenderer"]
