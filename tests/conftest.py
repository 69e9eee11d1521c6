"""
Pytest configuration for attendance_report
"""

import io
import logging
import sys
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from PIL import Image
from reportlab.pdfgen.canvas import Canvas

from attendance_report import (
    AssetRef,
    AttendeeRecord,
    CompanyInfo,
    ImageLoader,
    InMemoryAssetResolver,
    ReportConfig,
    ReportModel,
    SessionInfo,
)
from attendance_report.engine import PageCursorManager, TextFitter

FIXED_NOW = datetime(2026, 10, 19, 15, 30, 0, tzinfo=timezone.utc)
SESSION_START = datetime(2026, 10, 19, 9, 0, 0)


class RecordingCanvas(Canvas):
    """ReportLab canvas that also remembers what was drawn on which page."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.texts = []
        self.images = []
        self.show_page_calls = 0

    def drawString(self, x, y, text, *args, **kwargs):
        self.texts.append((self.getPageNumber(), text, x, y))
        return super().drawString(x, y, text, *args, **kwargs)

    def drawCentredString(self, x, y, text, *args, **kwargs):
        self.texts.append((self.getPageNumber(), text, x, y))
        return super().drawCentredString(x, y, text, *args, **kwargs)

    def drawImage(self, image, x, y, width=None, height=None, *args, **kwargs):
        self.images.append((self.getPageNumber(), x, y, width, height))
        return super().drawImage(image, x, y, width, height, *args, **kwargs)

    def showPage(self):
        self.show_page_calls += 1
        return super().showPage()

    def texts_on(self, page):
        return [text for number, text, _, _ in self.texts if number == page]

    def pages_with(self, text):
        return [number for number, drawn, _, _ in self.texts if drawn == text]


class CanvasRecorder:
    """Canvas factory keeping a handle on the canvas it built."""

    def __init__(self):
        self.canvas = None

    def __call__(self, *args, **kwargs):
        self.canvas = RecordingCanvas(*args, **kwargs)
        return self.canvas


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


def image_bytes(width=200, height=80, fmt="PNG", color=(20, 20, 120)):
    buffer = io.BytesIO()
    mode = "RGB" if fmt == "JPEG" else "RGBA"
    Image.new(mode, (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_factory():
    """Build PNG bytes of a given size."""
    return lambda width=200, height=80: image_bytes(width, height, "PNG")


@pytest.fixture
def resolver():
    return InMemoryAssetResolver()


@pytest.fixture
def recorder():
    return CanvasRecorder()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


def make_attendees(count, signature_bucket=None, role="Operador de grúa"):
    attendees = []
    for i in range(count):
        signature = AssetRef(signature_bucket, f"signatures/{i + 1}.png") if signature_bucket else None
        attendees.append(
            AttendeeRecord(
                full_name=f"Trabajador Número {i + 1}",
                tax_id="12.345.678-5",
                role=role,
                checked_in_at=SESSION_START + timedelta(minutes=i),
                signature=signature,
            )
        )
    return tuple(attendees)


def make_model(attendees=(), code="AB12CD", trainer_signature=None, logo=None):
    company = CompanyInfo(
        name="Constructora Andes",
        legal_name="Constructora Andes SpA",
        tax_id="76.123.456-0",
        address="Av. Providencia 1234, Santiago",
        logo=logo,
    )
    session = SessionInfo(
        code=code,
        topic="Uso de arnés de seguridad",
        location="Faena Norte",
        scheduled_at=SESSION_START,
        trainer_name="María Fernández",
        closed_at=SESSION_START + timedelta(hours=2),
        trainer_signature=trainer_signature,
    )
    return ReportModel(company=company, session=session, attendees=tuple(attendees))


@pytest.fixture
def model_factory():
    return make_model


@pytest.fixture
def attendees_factory():
    return make_attendees


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


class Layout:
    """Canvas, page manager and fitter wired the way a render wires them."""

    def __init__(self, config=None):
        self.config = config or ReportConfig()
        self.canvas = RecordingCanvas(io.BytesIO(), pagesize=self.config.geometry.pagesize)
        self.pages = PageCursorManager(
            self.canvas,
            self.config.geometry,
            reserved_footer_space=self.config.reserved_footer_space,
        )
        self.fitter = TextFitter()
        self.pages.new_page()


@pytest.fixture
def layout():
    return Layout()


@pytest.fixture
def loaded_image(png_factory):
    """Decode PNG bytes of a given size into a drawable image."""
    loader = ImageLoader(InMemoryAssetResolver())
    return lambda width=200, height=80: loader.decode(png_factory(width, height))
