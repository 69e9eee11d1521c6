"""
Input data model for one report render.

The surrounding application hands over a fully populated, already
authorized snapshot; this module only types it and checks that it is
structurally complete enough to be a legal attendance record.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Tuple

from .exceptions import ModelValidationError

if TYPE_CHECKING:
    from .config import ReportConfig

DEFAULT_ASSET_BUCKET = "assets"
COMPANY_LOGO_BUCKET = "company-logos"

_CODE_PATTERN = re.compile(r"^[A-Z0-9]+$")


@dataclass(frozen=True, slots=True)
class AssetRef:
    """Opaque pointer to a stored image, resolved by an AssetResolver."""

    bucket: str
    path: str

    def __str__(self) -> str:
        return f"{self.bucket}/{self.path}"


@dataclass(frozen=True, slots=True)
class CompanyInfo:
    name: str
    legal_name: str = ""
    tax_id: str = ""
    address: str = ""
    logo: Optional[AssetRef] = None

    @property
    def display_name(self) -> str:
        return self.legal_name or self.name


@dataclass(frozen=True, slots=True)
class SessionInfo:
    code: str
    topic: str
    closed_at: Optional[datetime]
    location: str = ""
    scheduled_at: Optional[datetime] = None
    trainer_name: str = ""
    trainer_signature: Optional[AssetRef] = None


@dataclass(frozen=True, slots=True)
class AttendeeRecord:
    full_name: str
    checked_in_at: Optional[datetime]
    tax_id: str = ""
    role: str = ""
    signature: Optional[AssetRef] = None


@dataclass(frozen=True, slots=True)
class ReportModel:
    """Company, session and attendees (in check-in order) for one document."""

    company: CompanyInfo
    session: SessionInfo
    attendees: Tuple[AttendeeRecord, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.attendees, tuple):
            object.__setattr__(self, "attendees", tuple(self.attendees))

    @property
    def session_code(self) -> str:
        return self.session.code.strip().upper()

    def validate(self, config: Optional["ReportConfig"] = None) -> None:
        """
        Check the structural preconditions of a render.

        Raises:
            ModelValidationError: on the first problem found
        """
        code_length = config.session_code_length if config is not None else 6

        code = self.session_code
        if not code:
            raise ModelValidationError("Session code is required")
        if len(code) != code_length or not _CODE_PATTERN.match(code):
            raise ModelValidationError(
                "Session code must be alphanumeric",
                f"expected {code_length} characters, got {self.session.code!r}",
            )
        if not self.company.name.strip():
            raise ModelValidationError("Company name is required")
        if not self.session.topic.strip():
            raise ModelValidationError("Session topic is required")
        if self.session.closed_at is None:
            raise ModelValidationError("Session must be closed before its record is rendered", code)

        previous: Optional[datetime] = None
        for position, attendee in enumerate(self.attendees, start=1):
            if not attendee.full_name.strip():
                raise ModelValidationError("Attendee name is required", f"row {position}")
            if attendee.checked_in_at is None:
                raise ModelValidationError("Attendee check-in time is required", f"row {position}")
            if previous is not None:
                try:
                    out_of_order = attendee.checked_in_at < previous
                except TypeError as exc:
                    raise ModelValidationError(
                        "Attendee check-in times mix naive and aware datetimes", f"row {position}"
                    ) from exc
                if out_of_order:
                    raise ModelValidationError(
                        "Attendees must be ordered by check-in time", f"row {position}"
                    )
            previous = attendee.checked_in_at

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReportModel":
        """
        Build a model from the loosely-typed rows the application queries.

        Accepts either the model's own field names or the storage column
        names (``rut``, ``created_at``, ``signature_path``, ``session_date``,
        ``trainer_signature_path``, ``logo_path``, nested ``companies``).
        """
        session_data = _mapping(data.get("session") or data)
        company_data = data.get("company") or session_data.get("companies") or {}
        if isinstance(company_data, (list, tuple)):
            company_data = company_data[0] if company_data else {}
        company_data = _mapping(company_data)

        company = CompanyInfo(
            name=_text(company_data.get("name")),
            legal_name=_text(company_data.get("legal_name")),
            tax_id=_text(company_data.get("tax_id") or company_data.get("rut")),
            address=_text(company_data.get("address")),
            logo=_asset(
                company_data.get("logo") or company_data.get("logo_path"),
                COMPANY_LOGO_BUCKET,
            ),
        )
        session = SessionInfo(
            code=_text(session_data.get("code")).strip().upper(),
            topic=_text(session_data.get("topic")),
            location=_text(session_data.get("location")),
            scheduled_at=parse_timestamp(
                session_data.get("scheduled_at") or session_data.get("session_date")
            ),
            trainer_name=_text(session_data.get("trainer_name")),
            closed_at=parse_timestamp(session_data.get("closed_at")),
            trainer_signature=_asset(
                session_data.get("trainer_signature") or session_data.get("trainer_signature_path"),
                DEFAULT_ASSET_BUCKET,
            ),
        )
        attendees = tuple(_attendee(_mapping(row)) for row in _rows(data.get("attendees")))
        return cls(company=company, session=session, attendees=attendees)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp (``Z`` suffix allowed); None for blanks."""
    if value is None or isinstance(value, datetime):
        return value
    text = str(value).strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ModelValidationError("Invalid timestamp", repr(value)) from exc


def _attendee(row: Mapping[str, Any]) -> AttendeeRecord:
    return AttendeeRecord(
        full_name=_text(row.get("full_name")),
        tax_id=_text(row.get("tax_id") or row.get("rut")),
        role=_text(row.get("role")),
        checked_in_at=parse_timestamp(row.get("checked_in_at") or row.get("created_at")),
        signature=_asset(row.get("signature") or row.get("signature_path"), DEFAULT_ASSET_BUCKET),
    )


def _asset(value: Any, default_bucket: str) -> Optional[AssetRef]:
    if value is None or isinstance(value, AssetRef):
        return value
    if isinstance(value, Mapping):
        path = _text(value.get("path"))
        return AssetRef(_text(value.get("bucket")) or default_bucket, path) if path else None
    path = _text(value).strip()
    if not path:
        return None
    prefix = f"{default_bucket}/"
    if path.startswith(prefix):
        path = path[len(prefix):]
    return AssetRef(default_bucket, path)


def _mapping(value: Any) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ModelValidationError("Expected a mapping", type(value).__name__)
    return value


def _rows(value: Any) -> Iterable[Any]:
    if value is None:
        return ()
    if isinstance(value, (str, bytes, Mapping)):
        raise ModelValidationError("Attendees must be a list", type(value).__name__)
    return value


def _text(value: Any) -> str:
    return "" if value is None else str(value)
