"""
Types package for value classification and structural helpers.

Architecture:
- Defines the type tags the runtime reasons about
- Provides coercion, cloning, equality and property copy

Cross-cutting:
- Stateless, thread safe
"""

from .base import TypeTag, TypeUtility

__all__ = ["TypeTag", "TypeUtility"]
