"""Tests for digest helpers."""

from buildpack_inspector.utils.digest import blob_path, strip_algorithm


def test_blob_path_strips_prefix():
    """Test that the sha256: prefix is dropped from blob paths."""
    assert blob_path("sha256:abc123") == "blobs/sha256/abc123"


def test_blob_path_without_prefix():
    """Test that bare digests map to the same directory."""
    assert blob_path("d0") == "blobs/sha256/d0"


def test_blob_path_custom_root():
    """Test blob path with a different root and algorithm."""
    assert blob_path("sha512:ff", algorithm="sha512", root="store") == "store/sha512/ff"


def test_strip_algorithm_only_leading():
    """Test that only a leading prefix is removed."""
    assert strip_algorithm("sha256:abc") == "abc"
    assert strip_algorithm("abcsha256:") == "abcsha256:"
    assert strip_algorithm("sha512:abc") == "sha512:abc"
