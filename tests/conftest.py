"""Test configuration and fixtures."""

import pytest

from tests.helpers import buildpack_toml, layer_blob


@pytest.fixture
def leaf_layer():
    """Layer holding a leaf buildpack."""
    return layer_blob(buildpack_toml("org.example.leaf"))


@pytest.fixture
def meta_layer():
    """Layer holding an order-group buildpack."""
    return layer_blob(
        buildpack_toml(
            "org.example.meta",
            order=[["org.example.leaf", "org.example.other"]],
        )
    )
