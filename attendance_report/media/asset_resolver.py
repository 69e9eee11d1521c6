"""
Asset resolution for logos and signatures.

Resolvers fetch raw bytes for an ``AssetRef``; ``ImageLoader`` turns those
bytes into a decoded image or ``None``. A missing, unreadable or corrupt
image is never an error for the render: callers branch on ``None`` and
draw a placeholder instead.
"""

from __future__ import annotations

import io
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Protocol, Tuple, TypeVar, runtime_checkable

from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader

from ..exceptions import AssetError
from ..models import AssetRef

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@runtime_checkable
class AssetResolver(Protocol):
    """Fetches stored binary content; returns None when the object does not exist."""

    def resolve(self, bucket: str, path: str) -> Optional[bytes]:
        ...


class InMemoryAssetResolver:
    """Dictionary-backed resolver; safe to share between threads."""

    def __init__(self, assets: Optional[Dict[Tuple[str, str], bytes]] = None) -> None:
        self._assets: Dict[Tuple[str, str], bytes] = dict(assets or {})
        self._lock = threading.Lock()

    def put(self, bucket: str, path: str, data: bytes) -> AssetRef:
        with self._lock:
            self._assets[(bucket, path)] = bytes(data)
        return AssetRef(bucket, path)

    def resolve(self, bucket: str, path: str) -> Optional[bytes]:
        with self._lock:
            return self._assets.get((bucket, path))


class FileSystemAssetResolver:
    """Resolves ``bucket/path`` below a root directory."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).resolve()

    def resolve(self, bucket: str, path: str) -> Optional[bytes]:
        candidate = (self.root / bucket / path).resolve()
        if not candidate.is_relative_to(self.root):
            logger.warning("Asset path escapes resolver root: %s/%s", bucket, path)
            return None
        if not candidate.is_file():
            return None
        return candidate.read_bytes()


@dataclass(frozen=True)
class LoadedImage:
    """A decoded image ready to be drawn."""

    width: int
    height: int
    format: str
    reader: ImageReader

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


class ImageLoader:
    """Resolves asset references and decodes them with Pillow."""

    def __init__(
        self,
        resolver: AssetResolver,
        accepted_formats: Iterable[str] = ("PNG", "JPEG"),
    ) -> None:
        self.resolver = resolver
        self.accepted_formats = tuple(fmt.upper() for fmt in accepted_formats)

    def load(self, ref: Optional[AssetRef]) -> Optional[LoadedImage]:
        """
        Resolve and decode ``ref``.

        Returns:
            The decoded image, or None when the reference is absent, the
            resolver reports NotFound or fails, or the bytes are not a usable
            image.
        """
        if ref is None:
            return None
        try:
            data = self._fetch(ref)
            return self.decode(data)
        except AssetError as exc:
            logger.warning("Image %s unavailable: %s", ref, exc)
            return None

    def decode(self, data: bytes) -> LoadedImage:
        """
        Decode image bytes.

        Raises:
            AssetError: if the bytes are not an accepted, non-empty image
        """
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError, SyntaxError) as exc:
            raise AssetError("Cannot decode image", str(exc)) from exc

        image_format = (image.format or "").upper()
        if image_format not in self.accepted_formats:
            raise AssetError("Unsupported image format", image_format or "unknown")
        width, height = image.size
        if width <= 0 or height <= 0:
            raise AssetError("Image has no area", f"{width}x{height}")
        return LoadedImage(width=width, height=height, format=image_format, reader=ImageReader(image))

    def _fetch(self, ref: AssetRef) -> bytes:
        try:
            data = self.resolver.resolve(ref.bucket, ref.path)
        except Exception as exc:
            raise AssetError("Asset resolver failed", f"{type(exc).__name__}: {exc}") from exc
        if data is None:
            raise AssetError("Asset not found")
        if not data:
            raise AssetError("Asset is empty")
        return data


def first_available(candidates: Iterable[T], load: Callable[[T], Optional[R]]) -> Optional[R]:
    """Return the first candidate that ``load`` succeeds on, trying them in order."""
    for candidate in candidates:
        result = load(candidate)
        if result is not None:
            return result
    return None
