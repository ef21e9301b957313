"""Example: list the buildpacks inside a buildpackage archive."""

import asyncio
import logging
import sys

from buildpack_inspector import InspectorError, get_buildpack_dependencies

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main(paths):
    """Inspect every archive concurrently and report its buildpacks."""
    results = await asyncio.gather(
        *(get_buildpack_dependencies(path) for path in paths), return_exceptions=True
    )

    for path, result in zip(paths, results):
        if isinstance(result, InspectorError):
            logger.error(f"{path}: {result}")
            continue
        if isinstance(result, BaseException):
            raise result

        logger.info(f"{path}: {len(result)} buildpack(s)")
        for metadata in result:
            buildpack = metadata.config.buildpack
            kind = "meta" if metadata.config.is_meta_buildpack else "leaf"
            logger.info(
                f"  {buildpack.id} {buildpack.version} [{kind}] "
                f"{metadata.sha256 or '-'}"
            )


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("usage: inspect_buildpackage.py ARCHIVE [ARCHIVE ...]")
        sys.exit(1)
    asyncio.run(main(sys.argv[1:]))
