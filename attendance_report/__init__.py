"""
attendance_report - PDF attendance records for training sessions.

Turns a session snapshot (company, trainer, attendees in check-in order,
signature images) into a paginated A4 record: header block with logos and
session details, an attendee table repeated across pages, and the closing
trainer signature.

Quick Start:
    from attendance_report import (
        DocumentAssembler,
        FileSystemAssetResolver,
        FileSystemDocumentStore,
        ReportModel,
    )

    model = ReportModel.from_dict(session_row)
    assembler = DocumentAssembler(FileSystemAssetResolver("storage"))
    report = assembler.publish(model, FileSystemDocumentStore("storage"))
    print(report.storage_path, report.page_count)
"""

from .version import __version__, __version_info__

from .exceptions import (
    AssetError,
    LayoutError,
    ModelValidationError,
    ReportError,
    SerializationError,
    StorageError,
)
from .config import FontSpec, HeaderBudgets, ReportConfig, ReportLabels
from .models import AssetRef, AttendeeRecord, CompanyInfo, ReportModel, SessionInfo
from .media import FileSystemAssetResolver, ImageLoader, InMemoryAssetResolver, LoadedImage
from .storage import (
    DocumentStore,
    FileSystemDocumentStore,
    InMemoryDocumentStore,
    propose_storage_path,
)
from .assembler import DocumentAssembler, RenderedReport, render_report
from .utils.logger import configure_logging

__all__ = [
    "__version__",
    "__version_info__",
    "AssetError",
    "AssetRef",
    "AttendeeRecord",
    "CompanyInfo",
    "DocumentAssembler",
    "DocumentStore",
    "FileSystemAssetResolver",
    "FileSystemDocumentStore",
    "FontSpec",
    "HeaderBudgets",
    "ImageLoader",
    "InMemoryAssetResolver",
    "InMemoryDocumentStore",
    "LayoutError",
    "LoadedImage",
    "ModelValidationError",
    "RenderedReport",
    "ReportConfig",
    "ReportError",
    "ReportLabels",
    "ReportModel",
    "SerializationError",
    "SessionInfo",
    "StorageError",
    "configure_logging",
    "propose_storage_path",
    "render_report",
]
