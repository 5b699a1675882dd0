# classkit/core/mixins.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any

from ..types import TypeUtility
from .prototype import chain_table, enumerable_members, has_member, lookup

logger = logging.getLogger(__name__)


def mixin_identity(mixin: type) -> str:
    """
    Key under which a mixin is recorded: its ``mixin_id`` member when it
    declares one, otherwise its class name.
    """
    return lookup(mixin, "mixin_id", None) or mixin.class_name


def apply_mixin(target: type, mixin: type) -> None:
    """
    Merge the members of mixin into target without displacing anything
    target already resolves, whether defined on it, inherited, or brought in
    by an earlier mixin.

    The mixin's own mixins table is merged into target's with the same
    copy-if-absent rule, then the mixin is recorded under its identity.

    :param target: Class receiving the members.
    :param mixin: Class whose own and inherited members are copied.
    """
    if "mixins" not in vars(target):
        target.mixins = chain_table(lookup(target, "mixins", None))

    table = target.mixins
    for name, value in enumerable_members(mixin).items():
        if name == "mixin_id":
            continue
        if name == "mixins":
            TypeUtility.apply_if_not(table, value)
        elif not has_member(target, name):
            setattr(target, name, value)

    table[mixin_identity(mixin)] = mixin
    logger.debug(f"Mixed {mixin.class_name} into {target.class_name}")


def mixes_in(target: Any, mixin_id: str) -> bool:
    """
    Whether a class, or the class of an instance, has the mixin recorded
    under mixin_id, directly or through its ancestors and mixins.
    """
    cls = target if isinstance(target, type) else type(target)
    return mixin_id in lookup(cls, "mixins", {})
