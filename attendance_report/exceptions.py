"""Custom exceptions for the attendance report renderer."""

from typing import Optional


class ReportError(Exception):
    """Base exception for attendance report errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ModelValidationError(ReportError):
    """Raised when a ReportModel is structurally unusable; nothing is drawn."""

    pass


class LayoutError(ReportError):
    """Exception raised when the page cursor is used outside its lifecycle."""

    pass


class AssetError(ReportError):
    """Exception raised while resolving or decoding an image asset."""

    pass


class SerializationError(ReportError):
    """Exception raised when the PDF byte stream cannot be finalized."""

    pass


class StorageError(ReportError):
    """Exception raised when a rendered document cannot be persisted."""

    pass
