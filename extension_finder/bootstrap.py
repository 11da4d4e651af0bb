"""Runtime bootstrap - executes the file that makes extension classes resolvable."""

import importlib.util
import logging
import sys
from pathlib import Path
from typing import Optional

from extension_finder.errors import BootstrapUnavailableError
from extension_finder.registry import ClassRegistry, active_registry, collecting_into

logger = logging.getLogger(__name__)


class Bootstrap:
    """Executes the extension runtime's bootstrap file as a module.

    The bootstrap is expected to import the installed extension modules,
    which register their entry classes with the class registry.
    """

    MODULE_NAME = "_extension_bootstrap"

    def __init__(self, bootstrap_file: Path, search_path: Path):
        """Initialize the bootstrap.

        Args:
            bootstrap_file: Path to the bootstrap file, e.g. vendor/autoload.py
            search_path: Directory put on sys.path while the bootstrap runs
        """
        self.bootstrap_file = bootstrap_file
        self.search_path = search_path

    def activate(self, registry: Optional[ClassRegistry] = None) -> None:
        """Run the bootstrap file.

        Args:
            registry: Registry that extension classes registered while the
                bootstrap runs are added to. Defaults to the active registry.

        Raises:
            BootstrapUnavailableError: If the file is missing or raises
        """
        if not self.bootstrap_file.is_file():
            raise BootstrapUnavailableError(self.bootstrap_file, "Bootstrap file not found")

        search_path = str(self.search_path)
        added = search_path not in sys.path
        if added:
            sys.path.insert(0, search_path)

        try:
            spec = importlib.util.spec_from_file_location(self.MODULE_NAME, self.bootstrap_file)
            if spec is None or spec.loader is None:
                raise BootstrapUnavailableError(self.bootstrap_file, "Cannot create module spec")

            module = importlib.util.module_from_spec(spec)
            with collecting_into(registry if registry is not None else active_registry()):
                spec.loader.exec_module(module)
        except BootstrapUnavailableError:
            raise
        except Exception as e:
            raise BootstrapUnavailableError(self.bootstrap_file, f"Bootstrap failed: {e}") from e
        finally:
            if added and search_path in sys.path:
                sys.path.remove(search_path)

        logger.debug(f"Activated extension bootstrap: {self.bootstrap_file}")
