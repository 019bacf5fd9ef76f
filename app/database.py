import asyncio
import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

from .core import Catalog, StorageFailure

# The catalog lives in a single JSON document; every call goes back to disk.

logger = logging.getLogger(__name__)

_LOCKS: Dict[str, asyncio.Lock] = {}

NEW_FILE_MODE = 0o644


def _get_lock(key: str) -> asyncio.Lock:
    if key not in _LOCKS:
        _LOCKS[key] = asyncio.Lock()
    return _LOCKS[key]


def write_json_atomic(path: Union[str, Path], data: Any, **dump_kwargs: Any) -> None:
    """
    Dump ``data`` next to ``path`` then rename it into place, so readers never
    see half a file. The target keeps its permission bits.
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, **dump_kwargs)
        try:
            mode = stat.S_IMODE(os.stat(path).st_mode)
        except FileNotFoundError:
            mode = NEW_FILE_MODE
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class CatalogStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @property
    def lock(self) -> asyncio.Lock:
        """Serializes read-modify-write cycles on this file within the process."""
        return _get_lock(f"catalog:{self.path.resolve()}")

    def load(self) -> Catalog:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error("Failed to read catalog %s: %s", self.path, e, exc_info=True)
            raise StorageFailure(f"could not read {self.path}") from e
        if not isinstance(data, dict) or not isinstance(data.get("products"), list):
            logger.error("Catalog %s has no products list", self.path)
            raise StorageFailure(f"malformed catalog in {self.path}")
        return data

    def save(self, catalog: Catalog) -> None:
        try:
            write_json_atomic(self.path, catalog, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to write catalog %s: %s", self.path, e, exc_info=True)
            raise StorageFailure(f"could not write {self.path}") from e
