"""Shared fixtures for extension finder tests."""

import json
import textwrap
from pathlib import Path

import pytest

from extension_finder.config import FinderConfig
from extension_finder.registry import default_registry

FOO_CLASS = "Acme\\Foo\\Extension"
BAR_CLASS = "Acme\\Bar\\Extension"

# Executed by the bootstrap; registers every local/<vendor>/<pkg>/extension.py
BOOTSTRAP_SOURCE = textwrap.dedent(
    """
    import runpy
    from pathlib import Path

    root = Path(__file__).resolve().parent.parent
    for extension_file in sorted(root.glob("local/*/*/extension.py")):
        runpy.run_path(str(extension_file))
    """
)


def write_manifest(root: Path, relative_dir: str, data, raw: str = None) -> Path:
    """Write a composer.json under root/relative_dir."""
    directory = root / relative_dir
    directory.mkdir(parents=True, exist_ok=True)
    manifest_file = directory / "composer.json"
    manifest_file.write_text(raw if raw is not None else json.dumps(data, indent=4))
    return manifest_file


def extension_manifest(name: str, entry_class: str) -> dict:
    return {
        "name": name,
        "type": "bolt-extension",
        "require-dev": {"phpunit/phpunit": "^9.0"},
        "extra": {"extension-class": entry_class},
    }


def write_extension_module(root: Path, relative_dir: str, entry_class: str, name: str) -> Path:
    """Write an extension.py that registers an Extension reporting ``name``."""
    directory = root / relative_dir
    directory.mkdir(parents=True, exist_ok=True)
    module_file = directory / "extension.py"
    module_file.write_text(
        textwrap.dedent(
            f"""
            from extension_finder.extension import Extension
            from extension_finder.registry import register_extension


            @register_extension({entry_class!r})
            class PackageExtension(Extension):
                def get_name(self):
                    return {name!r}
            """
        )
    )
    return module_file


def write_bootstrap(root: Path, source: str = BOOTSTRAP_SOURCE) -> Path:
    bootstrap_file = root / "vendor" / "autoload.py"
    bootstrap_file.parent.mkdir(parents=True, exist_ok=True)
    bootstrap_file.write_text(source)
    return bootstrap_file


@pytest.fixture(autouse=True)
def clean_registry():
    """Every test starts and ends with an empty default registry."""
    default_registry.clear()
    yield
    default_registry.clear()


@pytest.fixture
def root(tmp_path) -> Path:
    return tmp_path / "site"


@pytest.fixture
def config(root) -> FinderConfig:
    root.mkdir(parents=True, exist_ok=True)
    return FinderConfig(root=root)
