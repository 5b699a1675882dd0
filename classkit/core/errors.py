# classkit/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Dict, Optional


class ClassKitError(Exception):
    """
    Base exception class for errors raised by the class registry and its
    composition engine.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """
        :param message: Human-readable description of the failure.
        :param details: Optional structured context (class names, aliases...).
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class DefinitionError(ClassKitError):
    """
    Raised when a class cannot be defined: malformed name or descriptor,
    unknown parent or mixin, or a link the host class model rejects.
    """


class ClassLookupError(ClassKitError, LookupError):
    """
    Raised when a name or alias is absent from the registry, or when the
    registered entry is a singleton instance rather than an instantiable class.
    """


class DispatchError(ClassKitError):
    """
    Raised when call_parent() runs outside a registered member function or
    when no ancestor implements the member being overridden.
    """


class LifecycleError(ClassKitError):
    """
    Raised when an instance or class is used in a way its lifecycle does not allow.
    """
