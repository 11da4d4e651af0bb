"""Extension finder - top-level entry point for building and loading the index."""

import logging
from typing import Dict, Optional

from extension_finder.bootstrap import Bootstrap
from extension_finder.builder import IndexBuilder
from extension_finder.cache import Index, IndexCache
from extension_finder.config import FinderConfig
from extension_finder.loader import ExtensionLoader, LoadReport
from extension_finder.registry import ClassRegistry, default_registry
from extension_finder.resolved import ResolvedExtension
from extension_finder.scanner import ManifestScanner

logger = logging.getLogger(__name__)


class ExtensionFinder:
    """Coordinates scanning, index building and extension loading.

    Extension modules imported by the bootstrap register into ``registry``
    (``default_registry`` when none is given).

    ``build()`` and ``load()`` share one cache file and must not be run
    concurrently against the same root; callers own that ordering.
    """

    def __init__(
        self,
        config: Optional[FinderConfig] = None,
        registry: Optional[ClassRegistry] = None,
    ):
        self.config = config or FinderConfig.from_env()
        self.registry = registry if registry is not None else default_registry

        self.cache = IndexCache(self.config.cache_path)
        self.scanner = ManifestScanner(self.config)
        self.builder = IndexBuilder(self.config, scanner=self.scanner, cache=self.cache)
        self.loader = ExtensionLoader(
            self.config,
            registry=self.registry,
            bootstrap=Bootstrap(self.config.bootstrap_path, self.config.root),
            cache=self.cache,
        )

    def build(self) -> Index:
        """Rebuild autoload.json from the installed manifests."""
        logger.info(f"Building extension index under {self.config.root}")
        return self.builder.build()

    def load(self) -> Dict[str, ResolvedExtension]:
        """Instantiate every extension listed in autoload.json."""
        return self.loader.load()

    def load_with_report(self) -> LoadReport:
        return self.loader.load_with_report()

    def read_index(self) -> Index:
        """Return the cached index, or an empty one if it was never built."""
        if not self.cache.exists():
            return {}
        return self.cache.parse()
