"""
DocumentAssembler - turns one ReportModel into a PDF attendance record.

Pipeline (single pass, top to bottom):
validate → open canvas → header block → column header → attendee rows
(paginating) → trainer signature block → serialize.

Every render owns its canvas, cursor and buffer, so independent renders
can run concurrently.
"""

from __future__ import annotations

import io
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterator, Optional, Sequence, Tuple

from reportlab.pdfgen.canvas import Canvas

from .config import ReportConfig
from .engine.page_engine import PageCursorManager
from .engine.text_fitter import TextFitter
from .engine.text_metrics import TextMetricsEngine
from .exceptions import SerializationError, StorageError
from .media.asset_resolver import AssetResolver, ImageLoader, LoadedImage, first_available
from .models import AttendeeRecord, ReportModel
from .renderers import HeaderBlockRenderer, TableRenderer, TrainerSignatureRenderer
from .storage import DocumentStore, propose_storage_path

logger = logging.getLogger(__name__)

CanvasFactory = Callable[..., Canvas]
Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RenderedReport:
    """Serialized document plus the facts a caller needs to persist it."""

    content: bytes
    storage_path: str
    session_code: str
    page_count: int
    row_pages: Tuple[int, ...]
    generated_at: datetime

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def row_count(self) -> int:
        return len(self.row_pages)


class DocumentAssembler:
    """Orchestrates the renderers over one shared page cursor per render."""

    def __init__(
        self,
        resolver: AssetResolver,
        config: Optional[ReportConfig] = None,
        brand_resolver: Optional[AssetResolver] = None,
        canvas_factory: CanvasFactory = Canvas,
        clock: Clock = _utcnow,
    ) -> None:
        """
        Args:
            resolver: Resolves company logos and signatures
            config: Template configuration (defaults to the standard A4 template)
            brand_resolver: Resolves the brand logo candidates; defaults to ``resolver``
            canvas_factory: Builds the ReportLab canvas around the output buffer
            clock: Source of the generation timestamp
        """
        self.config = config or ReportConfig()
        self.resolver = resolver
        self.brand_resolver = brand_resolver or resolver
        self.canvas_factory = canvas_factory
        self.clock = clock

        metrics = TextMetricsEngine()
        metrics.ensure_font(self.config.fonts.regular)
        metrics.ensure_font(self.config.fonts.bold)
        self.fitter = TextFitter(metrics)

    def render(self, model: ReportModel) -> RenderedReport:
        """
        Render ``model`` to PDF bytes.

        Raises:
            ModelValidationError: if the model is structurally incomplete
            SerializationError: if the PDF cannot be finalized
        """
        config = self.config
        model.validate(config)
        started = time.perf_counter()
        generated_at = self.clock()
        code = model.session_code

        loader = ImageLoader(self.resolver, config.accepted_image_formats)
        brand_loader = ImageLoader(self.brand_resolver, config.accepted_image_formats)

        buffer = io.BytesIO()
        canvas = self.canvas_factory(buffer, pagesize=config.geometry.pagesize, invariant=config.invariant)
        canvas.setTitle(config.labels.continuation_title.format(company=model.company.display_name))
        canvas.setSubject(code)

        pages = PageCursorManager(canvas, config.geometry, reserved_footer_space=config.reserved_footer_space)
        header = HeaderBlockRenderer(canvas, pages, config, self.fitter)
        table = TableRenderer(canvas, pages, config, self.fitter)
        closing = TrainerSignatureRenderer(canvas, pages, config, self.fitter)

        def continue_page(_: PageCursorManager) -> None:
            header.draw_continuation(model)
            table.draw_column_header()

        pages.on_continuation_page = continue_page

        pages.new_page()
        brand_logo = first_available(config.brand_logo_candidates, brand_loader.load)
        header.draw(model, brand_logo, loader.load(model.company.logo))
        table.draw_column_header()
        row_pages = table.draw_rows(model.attendees, self._signatures(loader, model.attendees))

        pages.ensure_space(closing.height, reserve=0.0)
        closing.draw(model.session, loader.load(model.session.trainer_signature))

        content = self._serialize(canvas, buffer)
        report = RenderedReport(
            content=content,
            storage_path=propose_storage_path(code, generated_at, content),
            session_code=code,
            page_count=pages.page_count,
            row_pages=tuple(row_pages),
            generated_at=generated_at,
        )
        logger.info(
            "Rendered session %s: %d attendees on %d page(s), %d bytes in %.3fs",
            code,
            report.row_count,
            report.page_count,
            report.size,
            time.perf_counter() - started,
        )
        return report

    def publish(self, model: ReportModel, store: DocumentStore) -> RenderedReport:
        """Render ``model`` and persist it at the proposed storage path."""
        report = self.render(model)
        try:
            store.store(report.content, report.storage_path)
        except StorageError:
            raise
        except Exception as exc:
            raise StorageError("Document store failed", f"{type(exc).__name__}: {exc}") from exc
        logger.info("Published session %s to %s", report.session_code, report.storage_path)
        return report

    def _signatures(
        self, loader: ImageLoader, attendees: Sequence[AttendeeRecord]
    ) -> Iterator[Optional[LoadedImage]]:
        refs = [attendee.signature for attendee in attendees]
        if self.config.max_workers <= 1 or len(refs) <= 1:
            for ref in refs:
                yield loader.load(ref)
            return
        # At most one batch of decoded images is held ahead of the rows;
        # map() yields each batch in submission order.
        batch_size = self.config.max_workers
        with ThreadPoolExecutor(max_workers=batch_size) as executor:
            for start in range(0, len(refs), batch_size):
                yield from executor.map(loader.load, refs[start:start + batch_size])

    @staticmethod
    def _serialize(canvas: Canvas, buffer: io.BytesIO) -> bytes:
        try:
            canvas.save()
        except Exception as exc:
            raise SerializationError("Cannot finalize PDF", f"{type(exc).__name__}: {exc}") from exc
        return buffer.getvalue()


def render_report(
    model: ReportModel,
    resolver: AssetResolver,
    config: Optional[ReportConfig] = None,
    **kwargs,
) -> RenderedReport:
    """One-call render with a throwaway assembler."""
    return DocumentAssembler(resolver, config=config, **kwargs).render(model)
