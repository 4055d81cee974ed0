"""
cache.py

Responsibility: keep downloaded spec documents on disk, keyed by
{ref, api, version, filename}, so repeated runs skip the network.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from azdo_sdkgen.pipeline_types import ResolvedSpec

logger = logging.getLogger(__name__)


def default_cache_dir() -> Path:
    return Path.home() / ".cache" / "azdo-sdk-gen"


class SpecCache:
    def __init__(self, root: str | Path | None = None, *, enabled: bool = True) -> None:
        self.root = Path(root).expanduser() if root is not None else default_cache_dir()
        self.enabled = enabled

    def path_for(self, spec: ResolvedSpec) -> Path:
        return self.root / "specs" / spec.ref / spec.api / spec.version / spec.file

    def fetch(self, spec: ResolvedSpec, download: Callable[[str], str]) -> Path:
        """
        Return a local path holding `spec`.

        A disabled cache still stores what it downloads, it only refuses to
        answer from disk.
        """
        path = self.path_for(spec)
        if self.enabled and path.is_file():
            logger.info("Cache hit: %s", path)
            return path

        logger.info("Downloading spec: %s", spec.url)
        content = download(spec.url)
        path.parent.mkdir(parents=True, exist_ok=True)
        # Only a complete document may appear at the cache path.
        partial = path.with_name(path.name + ".part")
        partial.write_text(content, encoding="utf-8", newline="\n")
        partial.replace(path)
        return path
