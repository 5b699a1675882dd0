# classkit/core/registry.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Union

from ..runtime.concurrency import NullLock, ReadWriteLock
from ..runtime.namespace import SymbolTable
from .base import ROOT_CLASS_NAME, ROOT_NAMESPACE, BaseClass
from .config import RegistryConfig
from .descriptor import ClassDescriptor
from .dispatch import bind_member, is_member
from .errors import ClassLookupError, DefinitionError, LifecycleError
from .mixins import apply_mixin, mixes_in
from .prototype import StaticMember, chain, link, own_members

logger = logging.getLogger(__name__)

Definition = Union[ClassDescriptor, Mapping, Callable[[type], Any]]


class ClassRegistry:
    """
    Owns the classes defined at runtime and the aliases pointing at them.

    ``classes`` maps each dotted name to its class, or to the single instance
    of a singleton class; ``aliases`` maps alias strings to the same values.
    Every entry of ``classes`` is also published in the registry's
    SymbolTable under its dotted name.

    The root class ``ClassKit.BaseClass`` is registered on construction.
    """

    def __init__(self, config: Optional[RegistryConfig] = None, symbols: Optional[SymbolTable] = None) -> None:
        """
        :param config: Behavioural switches; defaults to RegistryConfig().
        :param symbols: Symbol table to publish names into; a private one is
            created when omitted.
        """
        self._config = config or RegistryConfig()
        self._symbols = symbols if symbols is not None else SymbolTable()
        self._lock = ReadWriteLock() if self._config.thread_safe else NullLock()
        self.classes: Dict[str, Any] = {}
        self.aliases: Dict[str, Any] = {}
        self.register(ROOT_CLASS_NAME, BaseClass)

    @property
    def config(self) -> RegistryConfig:
        return self._config

    @property
    def symbols(self) -> SymbolTable:
        return self._symbols

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(self, name: str, value: Any) -> Any:
        """Store value under name in both the registry and the symbol table."""
        with self._lock.write_locked():
            self.classes[name] = self._symbols.publish(name, value)
        logger.debug(f"Registered {name}")
        return value

    def unregister(self, name: str) -> None:
        """Remove name from both the registry and the symbol table."""
        with self._lock.write_locked():
            self._symbols.retract(name)
            self.classes.pop(name, None)
        logger.debug(f"Unregistered {name}")

    def register_alias(self, alias: str, value: Any) -> None:
        with self._lock.write_locked():
            self.aliases[alias] = value

    def unregister_alias(self, alias: str) -> None:
        with self._lock.write_locked():
            self.aliases.pop(alias, None)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get(self, name: str) -> Any:
        """
        Return the class, or singleton instance, registered under name.

        :raises ClassLookupError: If name is not registered.
        """
        with self._lock.read_locked():
            try:
                return self.classes[name]
            except KeyError:
                raise ClassLookupError(f"No class registered as '{name}'", {"name": name}) from None

    def get_by_alias(self, alias: str) -> Any:
        """
        Return the class, or singleton instance, registered under alias.

        :raises ClassLookupError: If alias is not registered.
        """
        with self._lock.read_locked():
            try:
                return self.aliases[alias]
            except KeyError:
                raise ClassLookupError(f"No class registered with alias '{alias}'", {"alias": alias}) from None

    def __contains__(self, name: str) -> bool:
        with self._lock.read_locked():
            return name in self.classes

    def ensure(self, cls: Union[str, type]) -> type:
        """
        Resolve a registered name to its class; classes pass through.

        :raises ClassLookupError: If a name is not registered.
        :raises LifecycleError: If the entry is a singleton instance.
        """
        if isinstance(cls, str):
            cls = self.get(cls)
        if not isinstance(cls, type):
            raise LifecycleError(
                f"{cls!r} is a singleton instance, not a class", {"class": getattr(cls, "class_name", None)}
            )
        return cls

    def mixes_in(self, target: Any, mixin_id: str) -> bool:
        """Whether the named class, class or instance has mixin_id mixed in."""
        if isinstance(target, str):
            target = self.get(target)
        return mixes_in(target, mixin_id)

    # -------------------------------------------------------------------------
    # Definition
    # -------------------------------------------------------------------------

    def define(self, name: str, definition: Definition) -> Any:
        """
        Define and register a class.

        :param name: Dotted name, e.g. ``"App.Model.User"``.
        :param definition: A ClassDescriptor, a flat definition mapping, or a
            factory called with the new (not yet linked) class that returns
            either of those.
        :return: The new class, or its instance when the class is a singleton.
        :raises DefinitionError: On a malformed name or descriptor, an unknown
            or singleton parent or mixin, or a forbidden redefinition.
        """
        _check_name(name)

        with self._lock.write_locked():
            if name in self.classes:
                if not self._config.allow_redefinition:
                    raise DefinitionError(f"Class '{name}' is already defined", {"name": name})
                logger.warning(f"Redefining class {name}; the previous definition is replaced")

            if callable(definition) and not isinstance(definition, (ClassDescriptor, Mapping)):
                cls = chain(BaseClass, name)
                cls.class_name = name
                descriptor = ClassDescriptor.coerce(definition(cls))
                link(cls, self._resolve_parent(name, descriptor))
            else:
                descriptor = ClassDescriptor.coerce(definition)
                cls = chain(self._resolve_parent(name, descriptor), name)

            self.add_statics(cls, descriptor.statics)
            self.add_members(cls, descriptor.members)
            cls.class_name = name
            cls.alias = descriptor.alias
            cls.singleton = descriptor.singleton

            for mixin_name in descriptor.mixins:
                self.mixin(cls, self._resolve_mixin(name, mixin_name))

            value = cls() if descriptor.singleton else cls

            if descriptor.alias:
                self.register_alias(descriptor.alias, value)

            self.register(name, value)

        logger.debug(f"Defined {name} extending {cls.superclass.class_name}")
        return value

    def extend(self, sub: Union[str, type], parent: Union[str, type]) -> None:
        """Re-point sub at parent."""
        with self._lock.write_locked():
            link(self.ensure(sub), self.ensure(parent))

    def mixin(self, sub: Union[str, type], mixin: Union[str, type]) -> None:
        """Merge mixin into sub; see apply_mixin() for precedence rules."""
        with self._lock.write_locked():
            apply_mixin(self.ensure(sub), self.ensure(mixin))

    def add_statics(self, cls: Union[str, type], statics: Optional[Mapping]) -> None:
        """Attach attributes readable on cls only, not on its instances or subclasses."""
        with self._lock.write_locked():
            cls = self.ensure(cls)
            for name, value in (statics or {}).items():
                setattr(cls, name, StaticMember(name, value, cls))

    def add_members(self, cls: Union[str, type], members: Optional[Mapping]) -> None:
        """
        Write instance members onto cls. Plain functions are bound for
        call_parent() dispatch under the name they are written to.
        """
        with self._lock.write_locked():
            cls = self.ensure(cls)
            for name, value in (members or {}).items():
                if inspect.isfunction(value):
                    value = bind_member(cls, name, value)
                setattr(cls, name, value)

    def _resolve_parent(self, name: str, descriptor: ClassDescriptor) -> type:
        parent_name = descriptor.extend or self._config.default_parent
        parent = self.classes.get(parent_name)
        if parent is None:
            raise DefinitionError(
                f"Cannot define '{name}': unknown parent class '{parent_name}'", {"name": name, "parent": parent_name}
            )
        if not isinstance(parent, type):
            raise DefinitionError(
                f"Cannot define '{name}': parent '{parent_name}' is a singleton instance",
                {"name": name, "parent": parent_name},
            )
        return parent

    def _resolve_mixin(self, name: str, mixin_name: str) -> type:
        mixin = self.classes.get(mixin_name)
        if mixin is None:
            raise DefinitionError(
                f"Cannot define '{name}': unknown mixin '{mixin_name}'", {"name": name, "mixin": mixin_name}
            )
        if not isinstance(mixin, type):
            raise DefinitionError(
                f"Cannot define '{name}': mixin '{mixin_name}' is a singleton instance",
                {"name": name, "mixin": mixin_name},
            )
        return mixin

    # -------------------------------------------------------------------------
    # Instantiation
    # -------------------------------------------------------------------------

    def create(self, name: str, /, *args: Any, **kwargs: Any) -> BaseClass:
        """
        Instantiate the class registered under name with the given arguments.

        :raises ClassLookupError: If name is unknown or is a singleton.
        """
        with self._lock.read_locked():
            entry = self.classes.get(name)
        return _instantiate(entry, "name", name, args, kwargs)

    def create_by_alias(self, alias: str, /, *args: Any, **kwargs: Any) -> BaseClass:
        """
        Instantiate the class registered under alias with the given arguments.

        :raises ClassLookupError: If alias is unknown or is a singleton.
        """
        with self._lock.read_locked():
            entry = self.aliases.get(alias)
        return _instantiate(entry, "alias", alias, args, kwargs)

    # -------------------------------------------------------------------------
    # Teardown
    # -------------------------------------------------------------------------

    def destroy_instance(self, instance: Any) -> None:
        """Destroy instance if it is a BaseClass instance; ignore anything else."""
        if isinstance(instance, BaseClass):
            instance.destroy()

    def destroy_class(self, cls: Union[str, type], name: Optional[str] = None) -> None:
        """
        Unregister a class and its alias, and drop the ``member_of`` tag of
        every member function it owns.

        :param name: Registered name; defaults to cls.class_name.
        """
        with self._lock.write_locked():
            cls = self.ensure(cls)
            for value in own_members(cls).values():
                if is_member(value):
                    vars(value).pop("member_of", None)

            if cls.alias:
                self.unregister_alias(cls.alias)
            self.unregister(name or cls.class_name)

    def destroy(self) -> None:
        """
        Tear the whole registry down: destroy and unregister singleton
        instances, then unregister every class and alias, then remove every
        root namespace a registered name touched, except ClassKit.

        Running it again on the emptied registry does nothing.
        """
        with self._lock.write_locked():
            namespaces = set()

            for name, entry in list(self.classes.items()):
                namespaces.add(name.split(".")[0])
                if isinstance(entry, BaseClass):
                    alias = type(entry).alias
                    entry.destroy()
                    if alias and self.aliases.get(alias) is entry:
                        self.unregister_alias(alias)
                    self.unregister(name)

            for name, entry in list(self.classes.items()):
                self.destroy_class(entry, name)

            namespaces.discard(ROOT_NAMESPACE)
            for namespace in namespaces:
                self._symbols.remove_root(namespace)

        logger.debug("Class registry destroyed")


def _instantiate(entry: Any, kind: str, key: str, args: tuple, kwargs: Dict[str, Any]) -> BaseClass:
    if entry is None:
        raise ClassLookupError(f"No class registered under {kind} '{key}'", {kind: key})
    if not isinstance(entry, type):
        raise ClassLookupError(f"'{key}' is a singleton instance and cannot be created", {kind: key})
    return entry(*args, **kwargs)


def _check_name(name: Any) -> None:
    if not isinstance(name, str) or not name:
        raise DefinitionError("Class name must be a non-empty string", {"name": name})
    if not all(name.split(".")):
        raise DefinitionError(f"Class name '{name}' has an empty segment", {"name": name})
