"""Configuration types for the buildpack inspector."""

from dataclasses import dataclass


@dataclass(frozen=True)
class InspectorConfig:
    """Names used to walk an OCI buildpackage archive."""

    index_filename: str = "index.json"
    buildpack_filename: str = "buildpack.toml"
    blob_root: str = "blobs"
    digest_algorithm: str = "sha256"
