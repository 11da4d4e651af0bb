"""Index cache - reads and atomically writes autoload.json."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict

from pydantic import ValidationError

from extension_finder.errors import ParseError
from extension_finder.manifest import ExtensionDescriptor

logger = logging.getLogger(__name__)

Index = Dict[str, ExtensionDescriptor]


class IndexCache:
    """The single persisted form of the extension index.

    File format:
    {
        "acme/foo": {
            "name": "acme/foo",
            "class": "Acme\\\\Foo\\\\Extension",
            "path": "local/acme/foo"
        }
    }
    """

    def __init__(self, cache_file: Path):
        self.cache_file = cache_file

    def exists(self) -> bool:
        return self.cache_file.is_file()

    def parse(self) -> Index:
        """Read the cache file into an index.

        Raises:
            ParseError: If the file is not a mapping of name to descriptor
        """
        try:
            with open(self.cache_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except UnicodeDecodeError as e:
            raise ParseError(self.cache_file, f"Not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise ParseError(self.cache_file, f"Invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ParseError(self.cache_file, "Expected an object at the top level")

        try:
            return {key: ExtensionDescriptor(**entry) for key, entry in data.items()}
        except (TypeError, ValidationError) as e:
            raise ParseError(self.cache_file, f"Invalid descriptor: {e}") from e

    def dump(self, index: Index) -> None:
        """Replace the cache file with the serialized index.

        The new content is written to a sibling temp file and moved into
        place, so readers see either the old or the new file in full.
        """
        self.cache_file.parent.mkdir(parents=True, exist_ok=True)
        content = serialize_index(index)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.cache_file.name}.", suffix=".tmp", dir=self.cache_file.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.cache_file)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Wrote {len(index)} descriptor(s) to {self.cache_file}")


def serialize_index(index: Index) -> str:
    """Deterministic JSON text for an index, preserving its key order."""
    data = {key: descriptor.to_dict() for key, descriptor in index.items()}
    return json.dumps(data, indent=4, ensure_ascii=False) + "\n"
