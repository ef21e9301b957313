"""Digest helpers for content-addressed OCI blobs."""

import posixpath


def strip_algorithm(digest: str, algorithm: str = "sha256") -> str:
    """Remove a leading ``<algorithm>:`` prefix from a digest.

    Args:
        digest: Digest as written in index.json or a manifest
        algorithm: Algorithm prefix to strip

    Returns:
        The bare hex part, or the digest unchanged when it has no such prefix
    """
    return digest.removeprefix(f"{algorithm}:")


def blob_path(digest: str, algorithm: str = "sha256", root: str = "blobs") -> str:
    """Build the archive path of the blob addressed by ``digest``.

    ``sha256:abc123`` maps to ``blobs/sha256/abc123``.
    """
    return posixpath.join(root, algorithm, strip_algorithm(digest, algorithm))
