"""Manifest scanner - finds extension manifests under the search roots."""

import logging
from pathlib import Path
from typing import Iterator

from extension_finder.config import FinderConfig

logger = logging.getLogger(__name__)


class ManifestScanner:
    """Scans the managed and local roots for extension manifests.

    A manifest qualifies when it sits at ``<root>/<vendor>/<package>/``,
    carries the configured filename, is outside the excluded subtree and
    mentions the marker key in its raw text.
    """

    def __init__(self, config: FinderConfig):
        self.config = config

    def scan(self) -> Iterator[Path]:
        """Yield qualifying manifest paths, managed root first.

        Missing roots are not an error and contribute nothing.
        """
        for search_root in self.config.search_roots:
            if not search_root.is_dir():
                logger.debug(f"Extension search root does not exist: {search_root}")
                continue

            yield from self._scan_root(search_root)

    def _scan_root(self, search_root: Path) -> Iterator[Path]:
        pattern = "/".join(["*"] * self.config.manifest_depth + [self.config.manifest_name])

        for manifest_file in sorted(search_root.glob(pattern)):
            if not manifest_file.is_file():
                continue
            if self._is_hidden(manifest_file, search_root):
                continue
            if self._is_excluded(manifest_file):
                logger.debug(f"Skipping excluded manifest: {manifest_file}")
                continue
            if not self._has_marker(manifest_file):
                logger.debug(f"No '{self.config.marker_key}' marker in {manifest_file}")
                continue

            logger.debug(f"Found extension manifest: {manifest_file}")
            yield manifest_file

    @staticmethod
    def _is_hidden(manifest_file: Path, search_root: Path) -> bool:
        return any(part.startswith(".") for part in manifest_file.relative_to(search_root).parts)

    def _is_excluded(self, manifest_file: Path) -> bool:
        excluded = Path(self.config.excluded_path).parts
        relative = manifest_file.relative_to(self.config.root).parts
        return relative[: len(excluded)] == excluded

    def _has_marker(self, manifest_file: Path) -> bool:
        return self.config.marker in manifest_file.read_bytes()
