"""Extension loader - instantiates the extensions recorded in the index cache."""

import importlib
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from extension_finder.bootstrap import Bootstrap
from extension_finder.cache import IndexCache
from extension_finder.config import FinderConfig
from extension_finder.errors import BootstrapUnavailableError
from extension_finder.extension import Extension
from extension_finder.manifest import ExtensionDescriptor
from extension_finder.registry import ClassRegistry, ExtensionFactory, default_registry
from extension_finder.resolved import ResolvedExtension

logger = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    """Outcome of loading one index entry."""

    LOADED = "loaded"
    CLASS_UNRESOLVABLE = "class_unresolvable"
    CAPABILITY_MISMATCH = "capability_mismatch"


@dataclass
class LoadOutcome:
    """What happened to a single descriptor during a load pass."""

    descriptor_name: str
    entry_class: str
    status: LoadStatus
    detail: str = ""
    resolved_name: Optional[str] = None


@dataclass
class LoadReport:
    """Result of a load pass: the loaded extensions plus per-entry outcomes."""

    extensions: Dict[str, ResolvedExtension] = field(default_factory=dict)
    outcomes: List[LoadOutcome] = field(default_factory=list)
    skipped_reason: Optional[str] = None  # "cache_missing" | "bootstrap_unavailable"

    def skipped(self) -> List[LoadOutcome]:
        return [o for o in self.outcomes if o.status != LoadStatus.LOADED]


class ExtensionLoader:
    """Reads the index cache and instantiates every usable extension."""

    def __init__(
        self,
        config: FinderConfig,
        registry: Optional[ClassRegistry] = None,
        bootstrap: Optional[Bootstrap] = None,
        cache: Optional[IndexCache] = None,
    ):
        self.config = config
        self.registry = registry if registry is not None else default_registry
        self.bootstrap = bootstrap or Bootstrap(config.bootstrap_path, config.root)
        self.cache = cache or IndexCache(config.cache_path)

    def load(self) -> Dict[str, ResolvedExtension]:
        """Load all extensions, keyed by the name each reports for itself.

        Returns an empty mapping when the cache has never been built or the
        bootstrap is unavailable.
        """
        return self.load_with_report().extensions

    def load_with_report(self) -> LoadReport:
        """Load all extensions and record why any entry was skipped.

        Returns:
            LoadReport with the loaded extensions and one outcome per entry

        Raises:
            ParseError: If the cache file exists but is corrupt
        """
        report = LoadReport()

        if not self.cache.exists():
            logger.debug(f"No extension index at {self.cache.cache_file}")
            report.skipped_reason = "cache_missing"
            return report

        try:
            self.bootstrap.activate(self.registry)
        except BootstrapUnavailableError as e:
            logger.info(f"Extension bootstrap unavailable, no extensions loaded: {e.message}")
            report.skipped_reason = "bootstrap_unavailable"
            return report

        for descriptor in self.cache.parse().values():
            outcome = self._load_one(descriptor, report.extensions)
            report.outcomes.append(outcome)

        logger.info(
            f"Loaded {len(report.extensions)} extension(s), "
            f"skipped {len(report.skipped())}"
        )
        return report

    def _load_one(
        self, descriptor: ExtensionDescriptor, extensions: Dict[str, ResolvedExtension]
    ) -> LoadOutcome:
        factory = self.resolve_class(descriptor.entry_class)
        if factory is None:
            logger.warning(
                f"Skipping extension '{descriptor.name}': "
                f"class {descriptor.entry_class} not found"
            )
            return LoadOutcome(
                descriptor_name=descriptor.name,
                entry_class=descriptor.entry_class,
                status=LoadStatus.CLASS_UNRESOLVABLE,
                detail="Entry class is not registered or importable",
            )

        instance = factory()
        if not isinstance(instance, Extension):
            logger.warning(
                f"Skipping extension '{descriptor.name}': "
                f"{descriptor.entry_class} is not an Extension"
            )
            return LoadOutcome(
                descriptor_name=descriptor.name,
                entry_class=descriptor.entry_class,
                status=LoadStatus.CAPABILITY_MISMATCH,
                detail=f"{type(instance).__name__} does not implement Extension",
            )

        name = instance.get_name()
        if name in extensions:
            logger.debug(f"Extension name '{name}' reported twice, keeping the later one")
        extensions[name] = ResolvedExtension(inner_extension=instance, descriptor=descriptor)
        logger.debug(f"Loaded extension: {name} ({descriptor.entry_class})")

        return LoadOutcome(
            descriptor_name=descriptor.name,
            entry_class=descriptor.entry_class,
            status=LoadStatus.LOADED,
            resolved_name=name,
        )

    def resolve_class(self, entry_class: str) -> Optional[ExtensionFactory]:
        """Find the factory for an entry-class identifier.

        Registered identifiers win. Identifiers of the form
        ``package.module:Attr`` fall back to a regular import.
        """
        factory = self.registry.resolve(entry_class)
        if factory is not None:
            return factory

        if ":" not in entry_class:
            return None

        module_name, _, attr_name = entry_class.partition(":")
        if not module_name or not attr_name:
            return None
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            return None

        factory = getattr(module, attr_name, None)
        return factory if callable(factory) else None
