"""Wattpad API client.

Submodules are loaded lazily so ``import wattpad`` stays cheap for scripts
that only need constants or the logger. Typical use::

	from wattpad import WattpadClient, Story
"""
from .constants import __title__, __version__

__all__ = [
    "WattpadClient",
    "WattpadClientConfig",
    "load_config",
    "Story",
    "Part",
    "User",
    "RenderedPage",
    "HTMLContent",
    "HTMLWord",
    "HTMLStyle",
    "HTMLType",
    "WattpadException",
    "__title__",
    "__version__",
]

_LAZY = {
    'WattpadClient': 'client',
    'WattpadClientConfig': 'config',
    'load_config': 'config',
    'Story': 'models',
    'Part': 'models',
    'User': 'models',
    'RenderedPage': 'models',
    'HTMLContent': 'html',
    'HTMLWord': 'html',
    'HTMLStyle': 'html',
    'HTMLType': 'html',
    'WattpadException': 'exceptions',
}


def __getattr__(name: str):
    if name in _LAZY:
        from importlib import import_module
        return getattr(import_module(f".{_LAZY[name]}", __name__), name)
    raise AttributeError(name)
