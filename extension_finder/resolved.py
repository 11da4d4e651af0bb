"""Resolved extension - a live extension paired with its index entry."""

from dataclasses import dataclass, field
from typing import Optional

from extension_finder.extension import Extension
from extension_finder.manifest import ExtensionDescriptor


@dataclass
class ResolvedExtension:
    """Wraps a loaded extension instance for the host application."""

    inner_extension: Extension = field(repr=False)
    descriptor: Optional[ExtensionDescriptor] = None
    enabled: bool = True
    valid: bool = True

    @property
    def name(self) -> str:
        """The name the extension reports for itself."""
        return self.inner_extension.get_name()

    @property
    def id(self) -> str:
        return self.inner_extension.get_id()

    @property
    def vendor(self) -> str:
        return self.inner_extension.get_vendor()

    @property
    def display_name(self) -> str:
        return self.inner_extension.get_display_name()

    @property
    def path(self) -> Optional[str]:
        return self.descriptor.path if self.descriptor else None

    def to_dict(self) -> dict:
        """Serialize for listings."""
        return {
            "id": self.id,
            "name": self.name,
            "vendor": self.vendor,
            "display_name": self.display_name,
            "class": self.descriptor.entry_class if self.descriptor else None,
            "path": self.path,
            "enabled": self.enabled,
            "valid": self.valid,
        }
