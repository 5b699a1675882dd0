"""
Core package providing the class registry and its composition engine.

Architecture:
- Links defined classes to their parents without running initializers
- Merges mixins once, at definition time
- Binds member functions for call_parent() dispatch
- Tracks classes, singletons and aliases in a ClassRegistry

Cross-cutting:
- Error handling through the ClassKitError hierarchy
- Registry mutation serialized by a read/write lock
"""

# Import order matters to avoid circular dependencies
from .errors import ClassKitError, ClassLookupError, DefinitionError, DispatchError, LifecycleError
from .prototype import StaticMember, chain, chain_table, link
from .base import ROOT_CLASS_NAME, ROOT_NAMESPACE, BaseClass
from .descriptor import ClassDescriptor
from .config import RegistryConfig
from .mixins import apply_mixin, mixes_in
from .registry import ClassRegistry

__all__ = [
    # Errors
    "ClassKitError",
    "ClassLookupError",
    "DefinitionError",
    "DispatchError",
    "LifecycleError",
    # Prototype chain
    "StaticMember",
    "chain",
    "chain_table",
    "link",
    # Instance contract
    "ROOT_CLASS_NAME",
    "ROOT_NAMESPACE",
    "BaseClass",
    # Registry
    "ClassDescriptor",
    "RegistryConfig",
    "ClassRegistry",
    "apply_mixin",
    "mixes_in",
]
