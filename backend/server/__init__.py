"""HTTP front end that drives a single local checkers game."""

from __future__ import annotations

from importlib import import_module

_LAZY = {"app": ".app", "create_app": ".app", "GameSession": ".session", "Settings": ".config"}

__all__ = list(_LAZY)


def __getattr__(name: str):
    if name in _LAZY:
        module = import_module(_LAZY[name], __name__)
        return getattr(module, name)
    raise AttributeError(name)
