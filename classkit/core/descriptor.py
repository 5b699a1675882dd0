# classkit/core/descriptor.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from .errors import DefinitionError

# Keys of a flat definition mapping that configure the class rather than
# becoming members of it.
RESERVED_KEYS = ("extend", "mixins", "statics", "singleton", "alias")

# Attributes owned by the registry on every class.
_PROTECTED_NAMES = ("superclass", "mixins")


@dataclass
class ClassDescriptor:
    """
    Declarative description of a class handed to ClassRegistry.define().

    :param extend: Name of the parent class; the registry's default parent
        when omitted.
    :param mixins: Names of registered classes to merge in, most significant first.
    :param statics: Attributes readable on the class only.
    :param members: Instance members, including an optional ``constructor``.
    :param singleton: Collapse the class into one eagerly created instance.
    :param alias: Secondary lookup key for create_by_alias().
    """

    extend: Optional[str] = None
    mixins: Sequence[str] = ()
    statics: Dict[str, Any] = field(default_factory=dict)
    members: Dict[str, Any] = field(default_factory=dict)
    singleton: bool = False
    alias: Optional[str] = None

    def __post_init__(self) -> None:
        if self.extend is not None and (not isinstance(self.extend, str) or not self.extend):
            raise DefinitionError("Descriptor 'extend' must be a non-empty class name", {"extend": self.extend})

        if not isinstance(self.mixins, (list, tuple)) or not all(isinstance(m, str) and m for m in self.mixins):
            raise DefinitionError("Descriptor 'mixins' must be a sequence of class names", {"mixins": self.mixins})
        self.mixins = tuple(self.mixins)

        for label in ("statics", "members"):
            if not isinstance(getattr(self, label), Mapping):
                raise DefinitionError(f"Descriptor '{label}' must be a mapping")

        if self.alias is not None and (not isinstance(self.alias, str) or not self.alias):
            raise DefinitionError("Descriptor 'alias' must be a non-empty string", {"alias": self.alias})

        self.singleton = bool(self.singleton)
        self._check_names()

    def _check_names(self) -> None:
        clashes = set(self.statics) & set(self.members)
        if clashes:
            raise DefinitionError(
                f"Names declared both as static and member: {sorted(clashes)}", {"names": sorted(clashes)}
            )
        for name in list(self.statics) + list(self.members):
            if name in _PROTECTED_NAMES:
                raise DefinitionError(f"'{name}' is reserved by the registry", {"name": name})
        for name in self.statics:
            if name.startswith("__") and name.endswith("__"):
                raise DefinitionError(f"Static '{name}' may not be a special name", {"name": name})

    @classmethod
    def from_mapping(cls, definition: Mapping[str, Any]) -> "ClassDescriptor":
        """
        Build a descriptor from a flat definition mapping: the reserved keys
        configure the class, every other key becomes a member.
        """
        members = {key: value for key, value in definition.items() if key not in RESERVED_KEYS}
        return cls(
            extend=definition.get("extend"),
            mixins=definition.get("mixins") or (),
            statics=definition.get("statics") or {},
            members=members,
            singleton=definition.get("singleton", False),
            alias=definition.get("alias"),
        )

    @classmethod
    def coerce(cls, value: Any) -> "ClassDescriptor":
        """
        Accept a ClassDescriptor or a flat definition mapping.

        :raises DefinitionError: For any other value.
        """
        if isinstance(value, ClassDescriptor):
            return value
        if isinstance(value, Mapping):
            return cls.from_mapping(value)
        raise DefinitionError(
            f"Expected a ClassDescriptor or mapping, got {type(value).__name__}", {"descriptor": repr(value)}
        )
