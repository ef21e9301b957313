"""Custom exceptions for the buildpack inspector."""


class InspectorError(Exception):
    """Base exception for all inspector errors."""

    pass


class ArchiveReadError(InspectorError):
    """Raised when the archive or one of its tar streams cannot be read."""

    pass


class ArchivedFileNotFoundError(ArchiveReadError):
    """Raised when no tar entry ends with the requested file name."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"failed to fetch archived file {filename}")
        self.filename = filename


class MetadataDecodeError(InspectorError):
    """Raised when index.json or a manifest blob cannot be decoded."""

    pass


class BuildpackConfigError(MetadataDecodeError):
    """Raised when buildpack.toml cannot be decoded."""

    pass


class LayerDecompressionError(InspectorError):
    """Raised when a layer blob is not valid gzip."""

    pass
