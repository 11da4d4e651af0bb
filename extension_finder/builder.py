"""Index builder - turns discovered manifests into the autoload cache."""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from extension_finder.cache import Index, IndexCache
from extension_finder.config import FinderConfig, MissingFieldPolicy
from extension_finder.errors import MissingFieldError, ParseError
from extension_finder.manifest import ExtensionDescriptor, ExtensionManifest
from extension_finder.scanner import ManifestScanner

logger = logging.getLogger(__name__)


class IndexBuilder:
    """Rebuilds the whole extension index from disk on every call."""

    def __init__(
        self,
        config: FinderConfig,
        scanner: Optional[ManifestScanner] = None,
        cache: Optional[IndexCache] = None,
    ):
        self.config = config
        self.scanner = scanner or ManifestScanner(config)
        self.cache = cache or IndexCache(config.cache_path)

    def build(self) -> Index:
        """Scan, parse and write the index.

        Nothing is written unless every manifest was handled, so a failed
        build leaves the previous cache file in place.

        Returns:
            The index that was written, keyed by extension name

        Raises:
            ParseError: A manifest is not a JSON object
            MissingFieldError: A manifest lacks a required field and the
                policy is ``MissingFieldPolicy.ABORT``
        """
        index: Index = {}

        for manifest_file in self.scanner.scan():
            try:
                descriptor = self.parse_manifest(manifest_file)
            except MissingFieldError as e:
                if self.config.missing_field_policy != MissingFieldPolicy.SKIP:
                    raise
                logger.warning(f"Skipping manifest {manifest_file}: {e.message}")
                continue

            if descriptor.name in index:
                logger.debug(f"Extension '{descriptor.name}' redeclared at {descriptor.path}")
            index[descriptor.name] = descriptor

        self.cache.dump(index)
        logger.info(f"Built extension index with {len(index)} extension(s)")
        return index

    def parse_manifest(self, manifest_file: Path) -> ExtensionDescriptor:
        """Read one manifest into a descriptor.

        Args:
            manifest_file: Path to a composer.json that passed the scanner

        Returns:
            ExtensionDescriptor for the manifest's package
        """
        try:
            with open(manifest_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except UnicodeDecodeError as e:
            raise ParseError(manifest_file, f"Not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise ParseError(manifest_file, f"Invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ParseError(manifest_file, "Expected an object at the top level")

        try:
            manifest = ExtensionManifest(**data)
        except ValidationError as e:
            bad_fields = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
            if "name" in bad_fields:
                raise MissingFieldError(manifest_file, "name") from e
            raise MissingFieldError(manifest_file, f"extra.{self.config.marker_key}") from e

        entry_class = manifest.extra.get(self.config.marker_key)
        if not isinstance(entry_class, str) or not entry_class:
            raise MissingFieldError(manifest_file, f"extra.{self.config.marker_key}")

        return ExtensionDescriptor(
            name=manifest.name,
            entry_class=entry_class,
            path=manifest_file.parent.relative_to(self.config.root).as_posix(),
        )
