"""Buildpack Inspector - read buildpack metadata from OCI buildpackage archives."""

__version__ = "0.1.0"

from .core.types import InspectorConfig
from .exceptions import (
    ArchivedFileNotFoundError,
    ArchiveReadError,
    BuildpackConfigError,
    InspectorError,
    LayerDecompressionError,
    MetadataDecodeError,
)
from .inspector import BuildpackInspector, get_buildpack_dependencies
from .models import BuildpackConfig, BuildpackMetadata

__all__ = [
    "BuildpackInspector",
    "get_buildpack_dependencies",
    "InspectorConfig",
    "BuildpackConfig",
    "BuildpackMetadata",
    "InspectorError",
    "ArchiveReadError",
    "ArchivedFileNotFoundError",
    "MetadataDecodeError",
    "BuildpackConfigError",
    "LayerDecompressionError",
]
