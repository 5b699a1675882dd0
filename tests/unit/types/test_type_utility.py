# tests/unit/types/test_type_utility.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import datetime
import math
import re
from collections import OrderedDict
from types import SimpleNamespace

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from classkit.types import TypeTag, TypeUtility

# -----------------------------------------------------------------------------
# TAG
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, TypeTag.NULL),
        (True, TypeTag.BOOLEAN),
        (0, TypeTag.NUMBER),
        (1.5, TypeTag.NUMBER),
        ("text", TypeTag.STRING),
        ([1], TypeTag.ARRAY),
        ((1,), TypeTag.ARRAY),
        ({"a": 1}, TypeTag.OBJECT),
        (OrderedDict(), TypeTag.OBJECT),
        (datetime.date(2024, 1, 1), TypeTag.DATE),
        (datetime.datetime(2024, 1, 1), TypeTag.DATE),
        (re.compile("a+"), TypeTag.REGEXP),
        (len, TypeTag.FUNCTION),
        (lambda: None, TypeTag.FUNCTION),
        (object(), TypeTag.OBJECT),
    ],
)
def test_tag(value, expected):
    assert TypeUtility.tag(value) is expected


def test_tags_compare_with_strings():
    assert TypeUtility.tag([]) == "array"
    assert TypeTag.NUMBER == "number"


# -----------------------------------------------------------------------------
# CAST
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "value,target,expected",
    [
        (None, "string", ""),
        (12, "string", "12"),
        ("abc", "string", "abc"),
        ("42", "integer", 42),
        ("4.7", "integer", 4),
        (3.9, "integer", 3),
        ("nope", "integer", 0),
        (None, "integer", 0),
        ("2.5", "float", 2.5),
        (None, "float", 0.0),
        (None, "boolean", False),
        (0, "boolean", False),
        (2, "boolean", True),
        ("", "boolean", True),
        (False, "boolean", False),
        ("kept", "unknown", "kept"),
    ],
)
def test_cast(value, target, expected):
    result = TypeUtility.cast(value, target)
    assert result == expected
    assert type(result) is type(expected)


def test_cast_unparseable_float_is_nan():
    assert math.isnan(TypeUtility.cast("nope", "float"))


def test_cast_same_tag_returns_value():
    value = [1, 2]
    assert TypeUtility.cast(value, "array") is value


def test_cast_date():
    epoch = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
    assert TypeUtility.cast(None, "date") == epoch
    assert TypeUtility.cast(86400, "date") == epoch + datetime.timedelta(days=1)
    assert TypeUtility.cast("2024-05-01T10:00:00", "date") == datetime.datetime(2024, 5, 1, 10)

    today = datetime.date(2024, 5, 1)
    assert TypeUtility.cast(today, "date") is today

    with pytest.raises(ValueError):
        TypeUtility.cast(["2024"], "date")
    with pytest.raises(ValueError):
        TypeUtility.cast("not a date", "date")


# -----------------------------------------------------------------------------
# CLONE / EQUAL
# -----------------------------------------------------------------------------


def test_clone_is_deep_for_plain_containers():
    original = {"list": [1, {"nested": [2, 3]}], "tuple": (4, [5]), "when": datetime.date(2024, 1, 1)}
    copied = TypeUtility.clone(original)

    assert copied == original
    assert copied is not original
    assert copied["list"] is not original["list"]
    assert copied["list"][1] is not original["list"][1]
    assert copied["tuple"][1] is not original["tuple"][1]

    copied["list"][1]["nested"].append(4)
    assert original["list"][1]["nested"] == [2, 3]


def test_clone_shares_objects():
    shared = SimpleNamespace(value=1)
    assert TypeUtility.clone([shared])[0] is shared
    assert TypeUtility.clone(None) is None


def test_clone_plain():
    assert TypeUtility.clone({"a": (1, 2)}, plain=True) == {"a": [1, 2]}
    with pytest.raises(TypeError):
        TypeUtility.clone({"a": object()}, plain=True)


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ({"a": [1, 2]}, {"a": [1, 2]}, True),
        ({"a": [1, 2]}, {"a": [2, 1]}, False),
        ({"a": 1}, {"a": 1, "b": 2}, False),
        ([1, 2], (1, 2), True),
        ([1], [1, 2], False),
        (1, "1", False),
        (1, 1.0, True),
        (True, 1, False),
        (None, None, True),
        ("x", "x", True),
    ],
)
def test_equal(a, b, expected):
    assert TypeUtility.equal(a, b) is expected


plain_data = st.recursive(
    st.none() | st.booleans() | st.integers() | st.text(max_size=5),
    lambda children: st.lists(children, max_size=4) | st.dictionaries(st.text(max_size=3), children, max_size=4),
    max_leaves=20,
)


@pytest.mark.property
@settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(plain_data)
def test_clone_is_structurally_equal(value):
    assert TypeUtility.equal(TypeUtility.clone(value), value)


# -----------------------------------------------------------------------------
# APPLY
# -----------------------------------------------------------------------------


def test_apply_overwrites():
    target = {"a": 1, "b": 2}
    assert TypeUtility.apply(target, {"b": 3, "c": 4}) is target
    assert target == {"a": 1, "b": 3, "c": 4}


def test_apply_with_defaults():
    target = SimpleNamespace()
    TypeUtility.apply(target, {"size": 2}, defaults={"size": 1, "color": "red"})
    assert target.size == 2
    assert target.color == "red"


def test_apply_from_object():
    target = {}
    TypeUtility.apply(target, SimpleNamespace(a=1))
    assert target == {"a": 1}


def test_apply_if_not():
    target = {"a": 1}
    TypeUtility.apply_if_not(target, {"a": 2, "b": 3})
    assert target == {"a": 1, "b": 3}

    obj = SimpleNamespace(a=1)
    TypeUtility.apply_if_not(obj, {"a": 2, "b": 3})
    assert (obj.a, obj.b) == (1, 3)


def test_apply_none_config():
    target = {"a": 1}
    TypeUtility.apply(target, None)
    TypeUtility.apply_if_not(target, None)
    assert target == {"a": 1}
