"""Extension discovery, index building and loading.

Imports are lazy so that extension modules can import the registry
decorator without pulling in the builder and loader.
"""

__all__ = [
    "FinderConfig",
    "MissingFieldPolicy",
    "ExtensionFinder",
    "IndexBuilder",
    "ManifestScanner",
    "IndexCache",
    "ExtensionLoader",
    "LoadReport",
    "LoadOutcome",
    "LoadStatus",
    "Extension",
    "ResolvedExtension",
    "ExtensionDescriptor",
    "ClassRegistry",
    "default_registry",
    "register_extension",
    "active_registry",
    "collecting_into",
    "ExtensionFinderError",
    "ParseError",
    "MissingFieldError",
    "BootstrapUnavailableError",
]


def __getattr__(name):
    if name in ("FinderConfig", "MissingFieldPolicy"):
        from extension_finder import config
        return getattr(config, name)
    if name == "ExtensionFinder":
        from extension_finder.finder import ExtensionFinder
        return ExtensionFinder
    if name == "IndexBuilder":
        from extension_finder.builder import IndexBuilder
        return IndexBuilder
    if name == "ManifestScanner":
        from extension_finder.scanner import ManifestScanner
        return ManifestScanner
    if name == "IndexCache":
        from extension_finder.cache import IndexCache
        return IndexCache
    if name in ("ExtensionLoader", "LoadReport", "LoadOutcome", "LoadStatus"):
        from extension_finder import loader
        return getattr(loader, name)
    if name == "Extension":
        from extension_finder.extension import Extension
        return Extension
    if name == "ResolvedExtension":
        from extension_finder.resolved import ResolvedExtension
        return ResolvedExtension
    if name == "ExtensionDescriptor":
        from extension_finder.manifest import ExtensionDescriptor
        return ExtensionDescriptor
    if name in (
        "ClassRegistry",
        "default_registry",
        "register_extension",
        "active_registry",
        "collecting_into",
    ):
        from extension_finder import registry
        return getattr(registry, name)
    if name in ("ExtensionFinderError", "ParseError", "MissingFieldError", "BootstrapUnavailableError"):
        from extension_finder import errors
        return getattr(errors, name)
    raise AttributeError(f"module 'extension_finder' has no attribute {name!r}")
