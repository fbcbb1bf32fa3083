"""File-backed fingerprint cache: one JSON file per request fingerprint.

Entries never expire. They are only replaced or removed when a caller forces
a refresh. Storage failures are raised as CacheIOError, never swallowed.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from src.core.errors import CacheEntryNotFound, CacheIOError
from src.core.schemas import RequestDescriptor

logger = logging.getLogger(__name__)

_SUFFIX = ".json"


class FingerprintCache:
    """Persistent response cache rooted at an explicit directory.

    Usage::

        cache = FingerprintCache("data/cache")
        if not cache.has(descriptor):
            cache.save(descriptor, payload)
        payload = cache.get(descriptor)
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheIOError(self._root, str(e)) from e

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, descriptor: RequestDescriptor) -> Path:
        """File that holds (or would hold) the entry for this descriptor."""
        return self._root / f"{descriptor.fingerprint}{_SUFFIX}"

    def has(self, descriptor: RequestDescriptor) -> bool:
        return self.path_for(descriptor).is_file()

    def get(self, descriptor: RequestDescriptor) -> Any:
        """Return the stored payload.

        Raises:
            CacheEntryNotFound: No entry for this descriptor.
            CacheIOError: The entry exists but cannot be read or decoded.
        """
        path = self.path_for(descriptor)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            msg = f"No cache entry for {descriptor.path} ({path.stem})"
            raise CacheEntryNotFound(msg) from None
        except OSError as e:
            raise CacheIOError(path, str(e)) from e

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise CacheIOError(path, f"corrupt entry: {e}") from e

    def save(self, descriptor: RequestDescriptor, payload: Any) -> None:
        """Write payload under the descriptor's fingerprint, replacing any prior entry.

        The write goes through a temp file and os.replace, so readers never see
        a half-written entry.
        """
        path = self.path_for(descriptor)
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self._root, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, ensure_ascii=False)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise CacheIOError(path, str(e)) from e
        logger.debug("Cached %s as %s", descriptor.path, path.name)

    def delete(self, descriptor: RequestDescriptor) -> None:
        """Remove the entry. Missing entries are ignored."""
        path = self.path_for(descriptor)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise CacheIOError(path, str(e)) from e

    def clear(self) -> int:
        """Delete every entry and return how many were removed."""
        removed = 0
        for path in self._root.glob(f"*{_SUFFIX}"):
            try:
                path.unlink()
            except FileNotFoundError:
                continue
            except OSError as e:
                raise CacheIOError(path, str(e)) from e
            removed += 1
        logger.info("Cleared %d cache entries from %s", removed, self._root)
        return removed

    def __len__(self) -> int:
        return sum(1 for _ in self._root.glob(f"*{_SUFFIX}"))
