from __future__ import annotations
"""Client configuration.

Defaults live on the dataclass; an optional ``config.json`` (CWD first, then
project root) overrides them, e.g.::

    {"use_cache": false, "read_timeout": 60, "cache_dir": "/tmp/wattpad"}
"""
import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import BASE_URL, DEFAULT_CACHE_DIR, DEFAULT_USER_AGENT
from .logger import Logger


log = Logger.bind(__name__)

CONFIG_JSON_NAME = 'config.json'


@dataclass
class WattpadClientConfig:
    base_url: str = BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    use_cache: bool = True
    cache_dir: str = DEFAULT_CACHE_DIR
    connect_timeout: float = 10.0
    read_timeout: float = 30.0
    max_retries: int = 3
    backoff_factor: float = 0.5
    page_delay: float = 1.0  # between search result pages

    @property
    def timeout(self) -> tuple[float, float]:
        """(connect, read) pair as requests expects it."""
        return (self.connect_timeout, self.read_timeout)

    def merged(self, overrides: Dict[str, Any]) -> "WattpadClientConfig":
        """Copy with ``overrides`` applied.

        Values are coerced to the type of the field's current value; unknown
        keys and values that cannot be coerced are logged and skipped.
        """
        known = {f.name for f in fields(self)}
        accepted = {}
        for key, value in overrides.items():
            if key not in known:
                log.debug(f"config key ignored key={key}")
                continue
            try:
                accepted[key] = _coerce(value, type(getattr(self, key)))
            except (TypeError, ValueError) as e:
                log.warn(f"config value ignored key={key} value={value!r} error={e}")
        return replace(self, **accepted)


_TRUE_WORDS = ('true', 'yes', 'on', '1')
_FALSE_WORDS = ('false', 'no', 'off', '0')


def _coerce(value: Any, target: type) -> Any:
    if target is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in _TRUE_WORDS + _FALSE_WORDS:
            return value.strip().lower() in _TRUE_WORDS
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        raise ValueError("expected a boolean")
    if target in (int, float):
        if isinstance(value, bool):
            raise ValueError(f"expected {target.__name__}, got a boolean")
        coerced = target(value)
        if coerced < 0:
            raise ValueError("must not be negative")
        return coerced
    if target is str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("expected a non-empty string")
        return value
    return value


def _candidate_paths() -> list[Path]:
    return [
        Path.cwd() / CONFIG_JSON_NAME,
        Path(__file__).resolve().parent.parent / CONFIG_JSON_NAME,
    ]


def load_config(path: Optional[Path] = None) -> WattpadClientConfig:
    """Build a config from defaults plus the first readable config.json."""
    config = WattpadClientConfig()
    for p in ([Path(path)] if path else _candidate_paths()):
        if not p.is_file():
            continue
        try:
            with p.open('r', encoding='utf-8') as f:
                data = json.load(f) or {}
        except (OSError, ValueError) as e:
            log.warn(f"config.json load fail path={p} error={e}")
            continue
        if not isinstance(data, dict):
            log.warn(f"config.json ignored, top level is not an object path={p}")
            continue
        log.debug(f"config loaded path={p}")
        return config.merged(data)
    return config


__all__ = ["WattpadClientConfig", "load_config"]
