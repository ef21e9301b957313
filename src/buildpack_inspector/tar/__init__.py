"""Tar stream handling for OCI buildpackage archives."""

from .reader import fetch_archived_file, open_tar_stream, read_archived_json

__all__ = ["fetch_archived_file", "open_tar_stream", "read_archived_json"]
