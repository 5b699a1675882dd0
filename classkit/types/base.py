"""
Type tagging, coercion and structural copy helpers.

Architecture:
- Classifies Python values into a small, host-neutral set of type tags
- Coerces values between tags (string, integer, float, boolean, date)
- Clones and compares plain data structures structurally
- Copies properties between mappings and objects

Responsibilities:
1. Type Tags
   - Tag detection
   - Tag comparison with plain strings

2. Structural Operations
   - Deep clone of plain containers
   - Structural equality
   - Property copy with and without overwrite

Cross-cutting:
- Stateless; safe to call from any thread

Dependencies:
- core/base.py: config application on instances
- core/mixins.py: mixin table merging
"""

import copy
import datetime
import json
import numbers
import re
from collections.abc import Mapping, MutableMapping
from enum import Enum
from typing import Any, Iterable, Tuple


class TypeTag(str, Enum):
    """Defines the type tags reported by TypeUtility.tag().

    Members compare equal to their plain string value, so callers may use
    either ``TypeTag.ARRAY`` or ``"array"``.
    """

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    DATE = "date"
    FUNCTION = "function"
    REGEXP = "regexp"


class TypeUtility:
    """
    Stateless collection of type helpers used by the registry and the
    instance contract. All methods are static.
    """

    @staticmethod
    def tag(value: Any) -> TypeTag:
        """
        Return the type tag of a value.

        Booleans are checked before numbers since ``bool`` is an ``int``
        subclass; tuples report as arrays and any mapping as an object.
        """
        if value is None:
            return TypeTag.NULL
        if isinstance(value, bool):
            return TypeTag.BOOLEAN
        if isinstance(value, numbers.Number):
            return TypeTag.NUMBER
        if isinstance(value, str):
            return TypeTag.STRING
        if isinstance(value, (list, tuple)):
            return TypeTag.ARRAY
        if isinstance(value, Mapping):
            return TypeTag.OBJECT
        if isinstance(value, datetime.date):
            return TypeTag.DATE
        if isinstance(value, re.Pattern):
            return TypeTag.REGEXP
        if callable(value):
            return TypeTag.FUNCTION
        return TypeTag.OBJECT

    @staticmethod
    def cast(value: Any, target: str) -> Any:
        """
        Coerce a value to the target tag.

        Supported targets are ``string``, ``integer``, ``float``, ``boolean``
        and ``date``; any other target returns the value untouched. A value
        already carrying the target tag is returned as-is.

        :param value: The value to coerce.
        :param target: Target tag name.
        """
        value_tag = TypeUtility.tag(value)
        if value_tag == target:
            return value

        if target == "string":
            return "" if value is None else str(value)
        if target == "integer":
            return _to_int(value)
        if target == "float":
            return 0.0 if value is None else _to_float(value)
        if target == "boolean":
            if value is None:
                return False
            if value_tag is TypeTag.NUMBER:
                return bool(float(value))
            return True
        if target == "date":
            return _to_date(value)
        return value

    @staticmethod
    def clone(item: Any, plain: bool = False) -> Any:
        """
        Clone a value structurally.

        Lists, tuples and plain dicts are copied recursively, dates are
        copied, anything else (including class instances) is shared.

        :param item: The value to clone.
        :param plain: Round-trip through JSON instead; only JSON-serializable
            data survives.
        """
        if item is None:
            return item

        if plain:
            return json.loads(json.dumps(item))

        if isinstance(item, datetime.date):
            return copy.copy(item)

        if isinstance(item, list):
            return [TypeUtility.clone(value) for value in item]

        if isinstance(item, tuple):
            return tuple(TypeUtility.clone(value) for value in item)

        if type(item) is dict:
            return {key: TypeUtility.clone(value) for key, value in item.items()}

        return item

    @staticmethod
    def equal(a: Any, b: Any) -> bool:
        """
        Return True when a and b have the same structure and values, even if
        they are not the same objects.
        """
        a_tag = TypeUtility.tag(a)
        if a_tag != TypeUtility.tag(b):
            return False

        if a_tag is TypeTag.OBJECT and isinstance(a, Mapping) and isinstance(b, Mapping):
            if a.keys() != b.keys():
                return False
            return all(TypeUtility.equal(a[key], b[key]) for key in a)

        if a_tag is TypeTag.ARRAY:
            if len(a) != len(b):
                return False
            return all(TypeUtility.equal(x, y) for x, y in zip(a, b))

        return a is b or a == b

    @staticmethod
    def apply(target: Any, config: Any, defaults: Any = None) -> Any:
        """
        Copy every property of config onto target, overwriting existing ones.

        :param target: A mutable mapping or any object accepting setattr.
        :param config: A mapping, or an object whose __dict__ is copied.
        :param defaults: Applied before config when given.
        :return: target
        """
        if defaults:
            TypeUtility.apply(target, defaults)

        for key, value in _properties(config):
            _set_property(target, key, value)

        return target

    @staticmethod
    def apply_if_not(target: Any, config: Any) -> Any:
        """
        Copy the properties of config that target does not already have.

        :return: target
        """
        for key, value in _properties(config):
            if not _has_property(target, key):
                _set_property(target, key, value)

        return target


def _properties(source: Any) -> Iterable[Tuple[str, Any]]:
    if source is None:
        return ()
    if isinstance(source, Mapping):
        return list(source.items())
    return list(vars(source).items())


def _has_property(target: Any, key: str) -> bool:
    if isinstance(target, Mapping):
        return key in target
    return hasattr(target, key)


def _set_property(target: Any, key: str, value: Any) -> None:
    if isinstance(target, MutableMapping):
        target[key] = value
    else:
        setattr(target, key, value)


def _to_int(value: Any) -> int:
    if value is None:
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float("nan")


def _to_date(value: Any) -> datetime.datetime:
    if value is None:
        return datetime.datetime.fromtimestamp(0, tz=datetime.timezone.utc)
    if isinstance(value, numbers.Number):
        return datetime.datetime.fromtimestamp(value, tz=datetime.timezone.utc)
    if isinstance(value, str):
        return datetime.datetime.fromisoformat(value)
    raise ValueError(f"Cannot cast {type(value).__name__} to date")
