"""Extension abstract base class."""

from abc import ABC, abstractmethod


class Extension(ABC):
    """Base class every extension entry point must implement.

    Only ``get_name()`` is required. The name should match the package name
    declared in the extension's composer.json, e.g. ``acme/foo``.
    """

    @abstractmethod
    def get_name(self) -> str:
        """Return the extension's package name."""
        ...

    def get_vendor(self) -> str:
        """Vendor part of the name, ``acme`` for ``acme/foo``."""
        name = self.get_name()
        return name.split("/", 1)[0] if "/" in name else ""

    def get_id(self) -> str:
        """Title-cased identifier, ``Acme/Foo`` for ``acme/foo``."""
        return "/".join(part.title() for part in self.get_name().split("/"))

    def get_display_name(self) -> str:
        """Human readable name. Override to provide a nicer one."""
        return self.get_name().rsplit("/", 1)[-1].replace("-", " ").title()
