# classkit/core/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from dataclasses import dataclass

from .base import ROOT_CLASS_NAME


@dataclass(frozen=True)
class RegistryConfig:
    """
    Behavioural switches of a ClassRegistry.

    :param allow_redefinition: When True, defining an already registered name
        replaces the previous entry (a warning is logged). When False, it
        raises DefinitionError.
    :param default_parent: Parent used by descriptors that do not name one.
    :param thread_safe: Guard registry mutation with a ReadWriteLock. Turn off
        for registries confined to a single thread.
    """

    allow_redefinition: bool = True
    default_parent: str = ROOT_CLASS_NAME
    thread_safe: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.default_parent, str) or not self.default_parent:
            raise ValueError("default_parent must be a non-empty class name")
