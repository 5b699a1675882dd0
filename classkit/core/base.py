# classkit/core/base.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Set

from ..types import TypeUtility
from .dispatch import call_parent
from .prototype import StaticMember

logger = logging.getLogger(__name__)

ROOT_NAMESPACE = "ClassKit"
ROOT_CLASS_NAME = f"{ROOT_NAMESPACE}.BaseClass"


class _DestroyCascade(threading.local):
    """
    Per-thread set of instance ids already destroyed by the running cascade.
    Shared by every nested destroy() so reference cycles terminate.
    """

    def __init__(self) -> None:
        self.visited: Optional[Set[int]] = None


_cascade = _DestroyCascade()


@contextmanager
def _destroy_scope(instance: "BaseClass") -> Iterator[Set[int]]:
    outermost = _cascade.visited is None
    if outermost:
        _cascade.visited = set()
    _cascade.visited.add(id(instance))
    try:
        yield _cascade.visited
    finally:
        if outermost:
            _cascade.visited = None


class BaseClass:
    """
    Root of every class defined through a ClassRegistry.

    Instances are created by calling the class; __init__ hands the captured
    arguments to the overridable ``constructor`` member. Instance state lives
    in the instance ``__dict__`` and is emptied by ``destroy()``.
    """

    class_name = ROOT_CLASS_NAME
    alias: Optional[str] = None
    singleton = False
    mixins: Mapping[str, type] = MappingProxyType({})

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self.constructor(*args, **kwargs)

    def constructor(self, *args: Any, **kwargs: Any) -> None:
        """Initialization hook; no-op by default."""

    def init_config(self, config: Optional[Mapping[str, Any]]) -> None:
        """
        Shallow-copy every key of config onto the instance. Last write wins;
        nothing is defaulted.
        """
        TypeUtility.apply(self, config)

    def destroy(self) -> None:
        """
        Destroy every instance attribute that is itself a BaseClass instance,
        then delete all instance attributes.

        The instance stays usable as an object afterwards, only emptied.
        Within one cascade every instance is destroyed at most once, so
        reference cycles between instances are safe.
        """
        with _destroy_scope(self) as visited:
            for name, value in list(vars(self).items()):
                if isinstance(value, BaseClass) and id(value) not in visited:
                    visited.add(id(value))
                    value.destroy()
                delattr(self, name)
        logger.debug(f"Destroyed instance of {self.class_name}")

    def call_parent(self, *args: Any, **kwargs: Any) -> Any:
        """
        Invoke the ancestor implementation of the member currently running.

        Called without arguments, the running member's own arguments are
        forwarded.
        """
        return call_parent(self, args, kwargs)

    def __repr__(self) -> str:
        return f"<{self.class_name} object at {hex(id(self))}>"


BaseClass.superclass = StaticMember("superclass", None, BaseClass)
