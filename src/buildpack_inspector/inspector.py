"""Buildpack metadata extraction from OCI buildpackage archives."""

import asyncio
import gzip
import logging
import tarfile
import zlib
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, List, Optional, Union

import aiofiles.os

from .buildpack_config import decode_config
from .core.types import InspectorConfig
from .exceptions import ArchiveReadError, LayerDecompressionError, MetadataDecodeError
from .models import BuildpackConfig, BuildpackMetadata, ImageIndex, ImageManifest
from .tar.reader import fetch_archived_file, open_tar_stream, read_archived_json
from .utils.digest import blob_path

logger = logging.getLogger(__name__)


class BuildpackInspector:
    """Reads the buildpacks packaged in an OCI buildpackage archive."""

    def __init__(self, config: Optional[InspectorConfig] = None) -> None:
        """Initialize inspector.

        Args:
            config: File and blob names to look up (OCI layout defaults)
        """
        self.config = config or InspectorConfig()

    def dependencies(self, path: Union[str, Path]) -> List[BuildpackMetadata]:
        """Extract one BuildpackMetadata per layer of the archive at ``path``.

        The archive is opened once and closed on every exit path.

        Args:
            path: Path to the buildpackage archive

        Returns:
            Metadata in manifest layer order

        Raises:
            ArchiveReadError: If the archive cannot be opened or read
            ArchivedFileNotFoundError: If index.json, a blob or
                buildpack.toml is missing
            MetadataDecodeError: If index.json or the manifest is malformed
            BuildpackConfigError: If a buildpack.toml is malformed
            LayerDecompressionError: If a layer blob is not valid gzip
        """
        try:
            archive = open(path, "rb")
        except OSError as e:
            raise ArchiveReadError(f"Cannot open archive {path}: {e}") from e

        with archive:
            logger.debug(f"Inspecting buildpackage {path}")
            return self.inspect(archive)

    def inspect(self, archive: IO[bytes]) -> List[BuildpackMetadata]:
        """Extract metadata from an open, seekable archive.

        Every lookup rewinds ``archive`` and rescans it, so the caller must
        not read from it concurrently.
        """
        index_filename = self.config.index_filename
        with self._rescan(archive) as tar:
            index = ImageIndex.from_dict(
                read_archived_json(tar, index_filename), index_filename
            )

        # Multi-manifest indexes are not supported; the first entry wins.
        if not index.manifests:
            raise MetadataDecodeError(f"No manifests listed in {index_filename}")
        buildpackage_digest = index.manifests[0].digest
        logger.debug(f"Buildpackage manifest digest: {buildpackage_digest}")

        manifest_path = self._blob_path(buildpackage_digest)
        with self._rescan(archive) as tar:
            manifest = ImageManifest.from_dict(
                read_archived_json(tar, manifest_path), manifest_path
            )

        metadata_collection: List[BuildpackMetadata] = []
        for layer in manifest.layers:
            config = self._read_layer_config(archive, layer.digest)

            metadata = BuildpackMetadata(config=config)
            if config.is_meta_buildpack:
                metadata.sha256 = buildpackage_digest
            metadata_collection.append(metadata)

        # A package holding a single buildpack is addressed by its own digest
        if len(metadata_collection) == 1:
            metadata_collection[0].sha256 = buildpackage_digest

        return metadata_collection

    def _read_layer_config(self, archive: IO[bytes], digest: str) -> BuildpackConfig:
        """Decode buildpack.toml from the gzip-compressed layer ``digest``."""
        filename = self.config.buildpack_filename
        with self._rescan(archive) as tar:
            blob = fetch_archived_file(tar, self._blob_path(digest))
            try:
                with gzip.GzipFile(fileobj=blob, mode="rb") as layer:
                    with open_tar_stream(layer, f"layer {digest}") as layer_tar:
                        config = decode_config(fetch_archived_file(layer_tar, filename))
            except (gzip.BadGzipFile, EOFError, zlib.error) as e:
                raise LayerDecompressionError(
                    f"failed to read buildpack gzip {digest}: {e}"
                ) from e
            except tarfile.TarError as e:
                raise ArchiveReadError(f"Failed to read layer {digest}: {e}") from e

        logger.debug(
            f"Layer {digest}: buildpack {config.buildpack.id} "
            f"{config.buildpack.version} ({len(config.order)} order groups)"
        )
        return config

    def _blob_path(self, digest: str) -> str:
        return blob_path(
            digest, algorithm=self.config.digest_algorithm, root=self.config.blob_root
        )

    @contextmanager
    def _rescan(self, archive: IO[bytes]) -> Iterator[tarfile.TarFile]:
        """Rewind the archive and open a fresh tar stream from its start."""
        try:
            archive.seek(0)
        except OSError as e:
            raise ArchiveReadError(f"Cannot rewind archive: {e}") from e

        with open_tar_stream(archive) as tar:
            yield tar


async def get_buildpack_dependencies(
    path: Union[str, Path], config: Optional[InspectorConfig] = None
) -> List[BuildpackMetadata]:
    """Async variant of :meth:`BuildpackInspector.dependencies`.

    The scan runs in the default executor. Each call opens its own file
    handle, so concurrent calls never share a file position.

    Args:
        path: Path to the buildpackage archive
        config: File and blob names to look up

    Returns:
        Metadata in manifest layer order

    Raises:
        Same exceptions as :meth:`BuildpackInspector.dependencies`
    """
    if not await aiofiles.os.path.isfile(path):
        raise ArchiveReadError(f"Cannot open archive {path}: file not found")

    inspector = BuildpackInspector(config)
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, inspector.dependencies, path)
