"""Sequential file lookups inside tar streams."""

import json
import tarfile
from contextlib import contextmanager
from typing import IO, Any, Iterator

from ..exceptions import ArchivedFileNotFoundError, ArchiveReadError, MetadataDecodeError


@contextmanager
def open_tar_stream(
    fileobj: IO[bytes], description: str = "tar stream"
) -> Iterator[tarfile.TarFile]:
    """Open a forward-only tar reader over ``fileobj``.

    The reader never seeks backwards, so it works on plain files as well as
    on decompression streams. ``fileobj`` itself is left open on exit.

    Raises:
        ArchiveReadError: If the stream is not a readable tar archive
    """
    try:
        tar = tarfile.open(fileobj=fileobj, mode="r|")
    except tarfile.TarError as e:
        raise ArchiveReadError(f"Cannot read {description}: {e}") from e

    try:
        yield tar
    finally:
        tar.close()


def fetch_archived_file(tar: tarfile.TarFile, filename: str) -> IO[bytes]:
    """Find the first regular file whose name ends with ``filename``.

    Matching is by suffix, since blob entries usually carry leading path
    segments such as ``./``. The returned reader is only valid until the
    tar stream advances.

    Args:
        tar: Tar reader opened with :func:`open_tar_stream`
        filename: Suffix to look for

    Returns:
        Binary file object positioned at the start of the entry's data

    Raises:
        ArchivedFileNotFoundError: If the stream ends without a match
        ArchiveReadError: If the stream cannot be advanced
    """
    try:
        for member in tar:
            if member.isfile() and member.name.endswith(filename):
                return tar.extractfile(member)
    except tarfile.TarError as e:
        raise ArchiveReadError(f"Failed to scan tar for {filename}: {e}") from e

    raise ArchivedFileNotFoundError(filename)


def read_archived_json(tar: tarfile.TarFile, filename: str) -> Any:
    """Fetch ``filename`` from the tar stream and decode it as JSON.

    Raises:
        ArchivedFileNotFoundError: If the file is missing
        ArchiveReadError: If the entry data cannot be read
        MetadataDecodeError: If the content is not valid JSON
    """
    member = fetch_archived_file(tar, filename)
    try:
        content = member.read()
    except tarfile.TarError as e:
        raise ArchiveReadError(f"Failed to read {filename}: {e}") from e

    try:
        return json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MetadataDecodeError(f"Invalid JSON in {filename}: {e}") from e
