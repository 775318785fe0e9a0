from __future__ import annotations
"""File based response cache.

One file per key, named after the MD5 of the key with a ``.cache`` suffix.
Writes are not locked; a single client process is assumed.
"""
import hashlib
from pathlib import Path
from typing import Optional, Union

from .exceptions import CacheInitializationException
from .logger import Logger


log = Logger.bind(__name__)

SUFFIX = '.cache'


class SimpleDiskCache:

    def __init__(self, cache_dir: Union[str, Path]):
        self.cache_dir = Path(cache_dir)
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheInitializationException(f"Failed to create cache directory: {self.cache_dir}") from e

    @staticmethod
    def hash_key(key: str) -> str:
        return hashlib.md5(key.encode('utf-8')).hexdigest()

    def path_for(self, key: str) -> Path:
        return self.cache_dir / f"{self.hash_key(key)}{SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            log.warn(f"cache read fail key={key} error={e}")
            # drop the unreadable entry so the next call refetches
            try:
                path.unlink(missing_ok=True)
            except OSError as unlink_error:
                log.debug(f"cache entry delete fail path={path} error={unlink_error}")
            return None

    def put(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            path.write_text(value, encoding='utf-8')
        except OSError as e:
            log.warn(f"cache write fail key={key} error={e}")

    def remove(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            if not path.exists():
                return False
            path.unlink()
            return True
        except OSError as e:
            log.warn(f"cache remove fail key={key} error={e}")
            return False

    def clear(self) -> int:
        """Delete every cache entry. Returns the number of files removed."""
        removed = 0
        try:
            entries = list(self.cache_dir.glob(f"*{SUFFIX}"))
        except OSError as e:
            log.warn(f"cache clear fail dir={self.cache_dir} error={e}")
            return 0
        for entry in entries:
            try:
                entry.unlink()
                removed += 1
            except OSError as e:
                log.warn(f"cache file delete fail path={entry} error={e}")
        log.debug(f"cache cleared dir={self.cache_dir} removed={removed}")
        return removed

    def __contains__(self, key: str) -> bool:
        return self.path_for(key).exists()
