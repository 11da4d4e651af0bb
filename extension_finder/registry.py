"""Class registry - maps entry-class identifiers to factories."""

import logging
from contextlib import contextmanager
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

ExtensionFactory = Callable[[], object]


class ClassRegistry:
    """Central registry of resolvable extension classes.

    Extension modules register themselves when the bootstrap imports them;
    the loader then resolves cached ``class`` identifiers here.
    """

    def __init__(self):
        self._factories: Dict[str, ExtensionFactory] = {}

    def register(self, name: str, factory: ExtensionFactory) -> None:
        """Register a factory under an entry-class identifier."""
        if name in self._factories:
            logger.debug(f"Entry class '{name}' already registered, overwriting")
        self._factories[name] = factory

    def unregister(self, name: str) -> Optional[ExtensionFactory]:
        return self._factories.pop(name, None)

    def resolve(self, name: str) -> Optional[ExtensionFactory]:
        """Get the factory for an identifier, or None if nothing registered it."""
        return self._factories.get(name)

    def has(self, name: str) -> bool:
        return name in self._factories

    def names(self) -> List[str]:
        return list(self._factories)

    def clear(self) -> None:
        self._factories.clear()


default_registry = ClassRegistry()
_active_registry: Optional[ClassRegistry] = None


def active_registry() -> ClassRegistry:
    """Registry that undecorated registrations go to right now."""
    return _active_registry if _active_registry is not None else default_registry


@contextmanager
def collecting_into(registry: ClassRegistry):
    """Send registrations without an explicit registry to ``registry``."""
    global _active_registry
    previous = _active_registry
    _active_registry = registry
    try:
        yield registry
    finally:
        _active_registry = previous


def register_extension(name: str, registry: Optional[ClassRegistry] = None):
    """Class decorator registering an extension entry point.

    Without an explicit registry the class goes to the active registry: the
    one the bootstrap is filling, otherwise ``default_registry``. Modules
    already imported before a bootstrap runs are not registered again.

    Example:
        @register_extension("Acme\\\\Foo\\\\Extension")
        class FooExtension(Extension):
            def get_name(self) -> str:
                return "acme/foo"
    """

    def decorator(cls):
        target = registry if registry is not None else active_registry()
        target.register(name, cls)
        return cls

    return decorator
