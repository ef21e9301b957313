"""Builders for synthetic OCI buildpackage archives."""

import gzip
import hashlib
import io
import json
import tarfile
from pathlib import Path


def calculate_digest(data: bytes) -> str:
    """Return the sha256 content address of a blob."""
    return f"sha256:{hashlib.sha256(data).hexdigest()}"


def add_file(tar: tarfile.TarFile, name: str, content: bytes) -> None:
    """Add an in-memory file to an open tar archive."""
    info = tarfile.TarInfo(name)
    info.size = len(content)
    tar.addfile(info, fileobj=io.BytesIO(content))


def buildpack_toml(buildpack_id: str, version: str = "1.0.0", order=None) -> bytes:
    """Render a minimal buildpack.toml, with order groups when given."""
    lines = [
        'api = "0.7"',
        "",
        "[buildpack]",
        f'  id = "{buildpack_id}"',
        f'  name = "{buildpack_id} buildpack"',
        f'  version = "{version}"',
    ]
    for group in order or []:
        lines += ["", "[[order]]"]
        for member in group:
            lines += [
                "",
                "  [[order.group]]",
                f'    id = "{member}"',
                '    version = "1.0.0"',
            ]
    if not order:
        lines += ["", "[[stacks]]", '  id = "io.buildpacks.stacks.bionic"']
    return ("\n".join(lines) + "\n").encode("utf-8")


def layer_blob(toml_content: bytes, name: str = "cnb/buildpacks/bp/1.0.0/buildpack.toml") -> bytes:
    """Build a gzip-compressed layer tar holding one buildpack.toml."""
    raw = io.BytesIO()
    with tarfile.open(fileobj=raw, mode="w") as tar:
        add_file(tar, "cnb/buildpacks/bp/1.0.0/bin/build", b"#!/bin/sh\n")
        add_file(tar, name, toml_content)
    return gzip.compress(raw.getvalue())


def write_buildpackage(
    path: Path,
    layers: list[bytes],
    manifest_digest: str | None = None,
    include_index: bool = True,
    include_manifest: bool = True,
    skip_layers: tuple[int, ...] = (),
    prefix: str = "",
) -> str:
    """Write an OCI archive with the given layer blobs.

    Returns:
        The manifest digest recorded in index.json
    """
    layer_digests = [calculate_digest(blob) for blob in layers]
    manifest = json.dumps(
        {
            "schemaVersion": 2,
            "layers": [
                {
                    "mediaType": "application/vnd.docker.image.rootfs.diff.tar.gzip",
                    "digest": digest,
                    "size": len(blob),
                }
                for digest, blob in zip(layer_digests, layers)
            ],
        }
    ).encode("utf-8")
    manifest_digest = manifest_digest or calculate_digest(manifest)
    index = json.dumps(
        {
            "schemaVersion": 2,
            "manifests": [
                {
                    "mediaType": "application/vnd.oci.image.manifest.v1+json",
                    "digest": manifest_digest,
                    "size": len(manifest),
                }
            ],
        }
    ).encode("utf-8")

    with tarfile.open(path, "w") as tar:
        add_file(tar, f"{prefix}oci-layout", b'{"imageLayoutVersion": "1.0.0"}')
        for i, (digest, blob) in enumerate(zip(layer_digests, layers)):
            if i not in skip_layers:
                add_file(tar, f"{prefix}blobs/sha256/{digest[len('sha256:'):]}", blob)
        if include_manifest:
            add_file(
                tar,
                f"{prefix}blobs/sha256/{manifest_digest.removeprefix('sha256:')}",
                manifest,
            )
        if include_index:
            add_file(tar, f"{prefix}index.json", index)

    return manifest_digest
