"""Exceptions raised while building or loading the extension index."""

from pathlib import Path


class ExtensionFinderError(Exception):
    """Base exception for extension finder operations."""

    def __init__(self, path: Path, message: str):
        self.path = path
        self.message = message
        super().__init__(f"[{path}] {message}")


class ParseError(ExtensionFinderError):
    """A manifest or the cache file is not valid structured data."""

    pass


class MissingFieldError(ExtensionFinderError):
    """A manifest lacks ``name`` or its entry-class field."""

    def __init__(self, path: Path, field: str):
        self.field = field
        super().__init__(path, f"Missing required field '{field}'")


class BootstrapUnavailableError(ExtensionFinderError):
    """The runtime bootstrap file is missing or failed while executing."""

    pass
