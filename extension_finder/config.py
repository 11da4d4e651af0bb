"""Finder configuration - paths and policies for building and loading the index."""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional


class MissingFieldPolicy(str, Enum):
    """What a build does with a manifest lacking ``name`` or the entry class."""

    ABORT = "abort"
    SKIP = "skip"


@dataclass
class FinderConfig:
    """Configuration for a single extension root.

    All relative paths are resolved against ``root``.
    """

    root: Path
    manifest_name: str = "composer.json"
    marker_key: str = "extension-class"
    managed_dir: str = "vendor"
    local_dir: str = "local"
    excluded_path: str = "vendor/composer"
    manifest_depth: int = 2
    cache_file: str = "autoload.json"
    bootstrap_file: str = "vendor/autoload.py"
    missing_field_policy: MissingFieldPolicy = MissingFieldPolicy.ABORT

    def __post_init__(self):
        self.root = Path(self.root)
        self.missing_field_policy = MissingFieldPolicy(self.missing_field_policy)

    @property
    def marker(self) -> bytes:
        """Quoted marker key as it appears in raw manifest text."""
        return f'"{self.marker_key}"'.encode("utf-8")

    @property
    def search_roots(self) -> List[Path]:
        """Managed root first, then the manually installed root."""
        return [self.root / self.managed_dir, self.root / self.local_dir]

    @property
    def cache_path(self) -> Path:
        return self.root / self.cache_file

    @property
    def bootstrap_path(self) -> Path:
        return self.root / self.bootstrap_file

    @classmethod
    def from_env(cls, root: Optional[Path] = None) -> "FinderConfig":
        """Build a config from ``EXTENSIONS_*`` environment variables.

        Args:
            root: Explicit root, takes precedence over ``EXTENSIONS_ROOT``

        Returns:
            FinderConfig with unset variables left at their defaults
        """
        if root is None:
            root = Path(os.getenv("EXTENSIONS_ROOT", ".")).resolve()

        overrides = {}
        env_map = {
            "marker_key": "EXTENSIONS_MARKER_KEY",
            "cache_file": "EXTENSIONS_CACHE_FILE",
            "bootstrap_file": "EXTENSIONS_BOOTSTRAP_FILE",
            "missing_field_policy": "EXTENSIONS_MISSING_FIELD_POLICY",
        }
        for field_name, env_name in env_map.items():
            value = os.getenv(env_name, "")
            if value:
                overrides[field_name] = value.lower() if field_name == "missing_field_policy" else value

        return cls(root=root, **overrides)
