"""Data models for OCI buildpackage archives and buildpack metadata."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .exceptions import MetadataDecodeError


@dataclass
class Descriptor:
    """OCI content descriptor, reduced to the fields the inspector reads."""

    digest: str
    media_type: str = ""
    size: int = 0

    @classmethod
    def from_dict(cls, data: Any, source: str) -> "Descriptor":
        if not isinstance(data, dict) or not isinstance(data.get("digest"), str):
            raise MetadataDecodeError(f"Invalid descriptor in {source}: {data!r}")
        return cls(
            digest=data["digest"],
            media_type=data.get("mediaType", ""),
            size=data.get("size", 0),
        )


def _descriptor_list(data: Any, key: str, source: str) -> List[Descriptor]:
    if not isinstance(data, dict):
        raise MetadataDecodeError(f"{source} must be a JSON object")

    entries = data.get(key) or []
    if not isinstance(entries, list):
        raise MetadataDecodeError(f"{key} in {source} must be a list")

    return [Descriptor.from_dict(entry, source) for entry in entries]


@dataclass
class ImageIndex:
    """Parsed index.json."""

    manifests: List[Descriptor]

    @classmethod
    def from_dict(cls, data: Any, source: str = "index.json") -> "ImageIndex":
        return cls(manifests=_descriptor_list(data, "manifests", source))


@dataclass
class ImageManifest:
    """Parsed manifest blob."""

    layers: List[Descriptor]

    @classmethod
    def from_dict(cls, data: Any, source: str = "manifest") -> "ImageManifest":
        return cls(layers=_descriptor_list(data, "layers", source))


@dataclass
class BuildpackInfo:
    """The [buildpack] table of buildpack.toml."""

    id: str = ""
    name: str = ""
    version: str = ""
    homepage: str = ""
    description: str = ""
    keywords: List[str] = field(default_factory=list)
    licenses: List[Dict[str, str]] = field(default_factory=list)
    clear_env: bool = False


@dataclass
class Stack:
    """One [[stacks]] entry."""

    id: str
    mixins: List[str] = field(default_factory=list)


@dataclass
class GroupEntry:
    """One buildpack reference inside an order group."""

    id: str
    version: str = ""
    optional: bool = False


@dataclass
class OrderGroup:
    """One [[order]] entry."""

    group: List[GroupEntry] = field(default_factory=list)


@dataclass
class BuildpackConfig:
    """Decoded buildpack.toml."""

    api: str = ""
    buildpack: BuildpackInfo = field(default_factory=BuildpackInfo)
    stacks: List[Stack] = field(default_factory=list)
    order: List[OrderGroup] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_meta_buildpack(self) -> bool:
        """True when the buildpack composes other buildpacks via order groups."""
        return len(self.order) > 0


@dataclass
class BuildpackMetadata:
    """A buildpack config and, where addressable, the buildpackage digest."""

    config: BuildpackConfig
    sha256: str = ""
