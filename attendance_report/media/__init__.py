"""Image asset resolution and decoding."""

from .asset_resolver import (
    AssetResolver,
    FileSystemAssetResolver,
    ImageLoader,
    InMemoryAssetResolver,
    LoadedImage,
    first_available,
)

__all__ = [
    "AssetResolver",
    "FileSystemAssetResolver",
    "ImageLoader",
    "InMemoryAssetResolver",
    "LoadedImage",
    "first_available",
]
