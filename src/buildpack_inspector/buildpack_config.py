"""Decoding of buildpack.toml into BuildpackConfig."""

import tomllib
from typing import IO, Any, Dict, List

from .exceptions import BuildpackConfigError
from .models import BuildpackConfig, BuildpackInfo, GroupEntry, OrderGroup, Stack


def decode_config(stream: IO[bytes]) -> BuildpackConfig:
    """Decode a buildpack.toml stream.

    Args:
        stream: Binary file-like object positioned at the start of the TOML

    Returns:
        BuildpackConfig with missing tables left at their defaults

    Raises:
        BuildpackConfigError: If the content is not valid TOML or has the
            wrong shape
    """
    try:
        payload = tomllib.load(stream)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise BuildpackConfigError(f"Failed to decode buildpack.toml: {e}") from e

    try:
        return _parse_config(payload)
    except (TypeError, ValueError, KeyError, AttributeError) as e:
        raise BuildpackConfigError(f"Invalid buildpack.toml structure: {e}") from e


def _parse_config(payload: Dict[str, Any]) -> BuildpackConfig:
    return BuildpackConfig(
        api=str(payload.get("api", "")),
        buildpack=_parse_buildpack(payload.get("buildpack", {})),
        stacks=[_parse_stack(entry) for entry in _tables(payload, "stacks")],
        order=[_parse_order_group(entry) for entry in _tables(payload, "order")],
        metadata=dict(payload.get("metadata", {})),
    )


def _tables(payload: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    """Return an array of tables, rejecting anything else."""
    entries = payload.get(key, [])
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        raise TypeError(f"{key} must be an array of tables")
    return entries


def _parse_buildpack(table: Dict[str, Any]) -> BuildpackInfo:
    if not isinstance(table, dict):
        raise TypeError("buildpack must be a table")

    return BuildpackInfo(
        id=table.get("id", ""),
        name=table.get("name", ""),
        version=table.get("version", ""),
        homepage=table.get("homepage", ""),
        description=table.get("description", ""),
        keywords=list(table.get("keywords", [])),
        licenses=[dict(entry) for entry in table.get("licenses", [])],
        clear_env=bool(table.get("clear-env", False)),
    )


def _parse_stack(table: Dict[str, Any]) -> Stack:
    return Stack(id=table["id"], mixins=list(table.get("mixins", [])))


def _parse_order_group(table: Dict[str, Any]) -> OrderGroup:
    return OrderGroup(
        group=[
            GroupEntry(
                id=entry["id"],
                version=entry.get("version", ""),
                optional=bool(entry.get("optional", False)),
            )
            for entry in _tables(table, "group")
        ]
    )
