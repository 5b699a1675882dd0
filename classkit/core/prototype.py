# classkit/core/prototype.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Delegation primitives the class registry builds inheritance on.

A registered class doubles as its own prototype: reads fall through to the
parent class for any name the class does not define, writes stay on the
class. The helpers here create and re-point such links and enumerate members
the way the composition engine needs them (dunder names and statics are
never members).
"""

from __future__ import annotations

import types
from collections import ChainMap
from typing import Any, Dict, Mapping, Optional

from .errors import DefinitionError

_MISSING = object()


class StaticMember:
    """
    Class attribute readable from its owning class only.

    Instances of the owner and subclasses of the owner get an AttributeError,
    which keeps statics off the prototype chain.
    """

    __slots__ = ("name", "value", "owner")

    def __init__(self, name: str, value: Any, owner: type) -> None:
        self.name = name
        self.value = value
        self.owner = owner

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is not None or owner is not self.owner:
            raise AttributeError(f"'{self.name}' is a static member of {self.owner.__qualname__}")
        return self.value

    def __repr__(self) -> str:
        return f"StaticMember({self.name!r}, {self.value!r})"


def chain(parent: type, name: str) -> type:
    """
    Return a new, empty subclass of parent named after the dotted name.

    No initializer of parent runs; the new class only delegates lookups.
    """
    module, _, leaf = name.rpartition(".")

    def body(namespace: Dict[str, Any]) -> None:
        namespace["__module__"] = module or "classkit"
        namespace["__qualname__"] = leaf

    cls = types.new_class(leaf, (parent,), exec_body=body)
    _record_superclass(cls, parent)
    return cls


def link(cls: type, parent: type) -> None:
    """
    Point cls at a new parent and record it as cls.superclass.

    :raises DefinitionError: If the host rejects the link, e.g. because it
        would make cls its own ancestor.
    """
    if cls.__bases__ != (parent,):
        try:
            cls.__bases__ = (parent,)
        except TypeError as exc:
            raise DefinitionError(
                f"Cannot link {cls.__qualname__} to {getattr(parent, '__qualname__', parent)}: {exc}",
                {"class": cls.__qualname__},
            ) from exc
    _record_superclass(cls, parent)


def chain_table(table: Optional[Mapping[str, Any]]) -> ChainMap:
    """
    Return a mapping whose reads fall through to table and whose writes
    never reach it.
    """
    if table is None:
        return ChainMap()
    if isinstance(table, ChainMap):
        return table.new_child()
    return ChainMap({}, table)


def lookup(cls: type, name: str, default: Any = _MISSING) -> Any:
    """
    Resolve a member along the class chain, skipping statics.

    Returns the raw stored value (functions stay unbound).
    """
    for klass in cls.__mro__:
        value = vars(klass).get(name, _MISSING)
        if value is not _MISSING and not isinstance(value, StaticMember):
            return value
    return default


def has_member(cls: type, name: str) -> bool:
    return lookup(cls, name) is not _MISSING


def own_members(cls: type) -> Dict[str, Any]:
    """Members defined directly on cls."""
    return {name: value for name, value in vars(cls).items() if _is_member(name, value)}


def enumerable_members(cls: type) -> Dict[str, Any]:
    """
    Own and inherited members of cls, nearest definition first.

    Members of ``object`` are not enumerable.
    """
    members: Dict[str, Any] = {}
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, value in vars(klass).items():
            if name not in members and _is_member(name, value):
                members[name] = value
    return members


def _record_superclass(cls: type, parent: type) -> None:
    cls.superclass = StaticMember("superclass", parent, cls)


def _is_member(name: str, value: Any) -> bool:
    if name.startswith("__") and name.endswith("__"):
        return False
    return not isinstance(value, StaticMember)
