# classkit/runtime/namespace.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import Any, Dict, List, Tuple

from ..core.prototype import StaticMember
from .concurrency import get_lock, with_lock

logger = logging.getLogger(__name__)

_MISSING = object()


class SymbolTable:
    """
    Symbol table in which registered classes are published under dotted paths.

    ``publish("App.Model.User", cls)`` creates the intermediate containers
    ``App`` and ``App.Model`` (as SimpleNamespace objects) when they are
    missing and stores the value in the leaf slot. Root containers are also
    reachable as attributes: ``symbols.App.Model.User``.

    A name published beneath a class (``App.View.List`` after ``App.View``)
    is stored on that class as a StaticMember, so instances and subclasses
    of ``App.View`` never see it.
    """

    def __init__(self) -> None:
        self._roots: Dict[str, Any] = {}
        self._lock = get_lock()

    def publish(self, path: str, value: Any) -> Any:
        """
        Store value at the dotted path, creating intermediate containers.

        :return: value
        """
        heads, leaf = _split(path)
        with with_lock(self._lock):
            node = self._roots
            for part in heads:
                child = self._get(node, part)
                if child is _MISSING or child is None:
                    child = SimpleNamespace()
                    self._set(node, part, child)
                node = child
            self._set(node, leaf, value)
        logger.debug(f"Published symbol {path}")
        return value

    def retract(self, path: str) -> bool:
        """
        Remove the leaf slot of the dotted path. Containers are left in place,
        so sibling paths stay resolvable.

        :return: True when a value was removed.
        """
        heads, leaf = _split(path)
        with with_lock(self._lock):
            node = self._walk(heads)
            if node is _MISSING or self._get(node, leaf) is _MISSING:
                return False
            if node is self._roots:
                del self._roots[leaf]
            else:
                delattr(node, leaf)
        logger.debug(f"Retracted symbol {path}")
        return True

    def resolve(self, path: str) -> Any:
        """
        Return the value stored at the dotted path.

        :raises KeyError: If any segment of the path is missing.
        """
        heads, leaf = _split(path)
        with with_lock(self._lock):
            node = self._walk(heads)
            value = _MISSING if node is _MISSING else self._get(node, leaf)
        if value is _MISSING:
            raise KeyError(path)
        return value

    def contains(self, path: str) -> bool:
        try:
            self.resolve(path)
        except KeyError:
            return False
        return True

    __contains__ = contains

    def remove_root(self, segment: str) -> None:
        """Drop a root container and everything published beneath it."""
        with with_lock(self._lock):
            self._roots.pop(segment, None)
        logger.debug(f"Removed root namespace {segment}")

    def roots(self) -> List[str]:
        with with_lock(self._lock):
            return list(self._roots)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._roots[name]
        except KeyError:
            raise AttributeError(f"No root namespace '{name}'") from None

    def _walk(self, parts: List[str]) -> Any:
        node = self._roots
        for part in parts:
            node = self._get(node, part)
            if node is _MISSING:
                return _MISSING
        return node

    def _get(self, node: Any, part: str) -> Any:
        if node is self._roots:
            return self._roots.get(part, _MISSING)
        if isinstance(node, type):
            # Only names published onto a class count; its members do not.
            slot = vars(node).get(part)
            return slot.value if isinstance(slot, StaticMember) else _MISSING
        return getattr(node, part, _MISSING)

    def _set(self, node: Any, part: str, value: Any) -> None:
        if node is self._roots:
            self._roots[part] = value
        elif isinstance(node, type):
            setattr(node, part, StaticMember(part, value, node))
        else:
            setattr(node, part, value)


def _split(path: str) -> Tuple[List[str], str]:
    if not isinstance(path, str) or not path:
        raise ValueError("Namespace path must be a non-empty string")
    parts = path.split(".")
    if not all(parts):
        raise ValueError(f"Namespace path '{path}' has an empty segment")
    return parts[:-1], parts[-1]
