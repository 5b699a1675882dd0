"""classkit: runtime class definition with mixins, statics and singletons

This package lets callers declare named classes at runtime from plain
descriptors, then instantiate, introspect and tear them down uniformly.

Responsibilities:
    - Class definition with single inheritance
    - Mixin composition (first writer wins)
    - Static members visible on the class only
    - Singleton collapse and alias lookup
    - Parent-method dispatch from member functions
    - Cascading instance teardown and whole-registry teardown

Interactions:
    - Client code through ClassRegistry
    - SymbolTable for dotted-name publication
    - TypeUtility for property copy and type coercion
    - Logging system for diagnostics

Cross-cutting Concerns:
    Thread Safety:
        - Registry mutation serialized by a read/write lock
        - Lookups and instantiation run concurrently

    Error Handling:
        - Structured error hierarchy rooted at ClassKitError
        - Errors raised at the call site, never retried

    Logging:
        - Module level loggers, no handlers installed
"""

from .core import (
    BaseClass,
    ClassDescriptor,
    ClassKitError,
    ClassLookupError,
    ClassRegistry,
    DefinitionError,
    DispatchError,
    LifecycleError,
    RegistryConfig,
)
from .runtime import SymbolTable
from .types import TypeTag, TypeUtility

__version__ = "0.1.0"

__all__ = [
    "BaseClass",
    "ClassDescriptor",
    "ClassKitError",
    "ClassLookupError",
    "ClassRegistry",
    "DefinitionError",
    "DispatchError",
    "LifecycleError",
    "RegistryConfig",
    "SymbolTable",
    "TypeTag",
    "TypeUtility",
]
