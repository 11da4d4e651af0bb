"""Manifest and descriptor models."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class ExtensionManifest(BaseModel):
    """The fields of an extension's composer.json the index cares about."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Unique package name, e.g. 'acme/foo'")
    extra: Dict[str, Any] = Field(default_factory=dict)


class ExtensionDescriptor(BaseModel):
    """One entry of the index, as stored in the cache file."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    entry_class: str = Field(..., alias="class", description="Entry-point class identifier")
    path: str = Field(..., description="Manifest directory relative to the finder root")

    def to_dict(self) -> dict:
        """Serialize with the on-disk key names."""
        return self.model_dump(by_alias=True)
