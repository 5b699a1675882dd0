# classkit/core/dispatch.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import functools
import inspect
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generator, List, Tuple

from .errors import DispatchError
from .prototype import lookup


@dataclass(frozen=True)
class _Frame:
    """Internal record of one running member call."""

    member: Callable[..., Any]
    args: Tuple[Any, ...]
    kwargs: Dict[str, Any]


class _DispatchStack(threading.local):
    """
    Per-thread stack of running member calls. call_parent() reads the top
    frame to find which member it was called from.
    """

    def __init__(self) -> None:
        self.frames: List[_Frame] = []


_stack = _DispatchStack()


def bind_member(owner: type, name: str, fn: Callable[..., Any]) -> Callable[..., Any]:
    """
    Wrap fn as the member of owner registered under name.

    The ancestor implementation of name is looked up once, here, through
    owner.superclass. The wrapper carries three tags:

    - member_of: the owning class
    - method_name: the name the member was registered under
    - parent_method: the ancestor implementation, or None

    Generator functions get a wrapper that keeps their frame on the stack
    each time the generator resumes, not only while the call returns it.

    :param owner: Class the member is being written onto. Must already be linked.
    :param name: Member name.
    :param fn: Plain function taking the instance as first argument.
    """
    superclass = owner.superclass
    parent_method = None if superclass is None else lookup(superclass, name, None)

    if inspect.isgeneratorfunction(fn):

        @functools.wraps(fn)
        def member(instance, /, *args, **kwargs):
            return _resume(fn(instance, *args, **kwargs), _Frame(member, args, kwargs))

    else:

        @functools.wraps(fn)
        def member(instance, /, *args, **kwargs):
            frames = _stack.frames
            frames.append(_Frame(member, args, kwargs))
            try:
                return fn(instance, *args, **kwargs)
            finally:
                frames.pop()

    member.member_of = owner
    member.method_name = name
    member.parent_method = parent_method
    return member


def _resume(gen: Generator, frame: _Frame) -> Generator:
    """
    Drive a generator member, keeping its frame on the stack for every
    resume (next, send, throw and close) and off it while suspended.
    """
    value: Any = None
    error: Any = None
    while True:
        frames = _stack.frames
        frames.append(frame)
        try:
            item = gen.send(value) if error is None else gen.throw(error)
        except StopIteration as stop:
            return stop.value
        finally:
            frames.pop()

        value, error = None, None
        try:
            value = yield item
        except GeneratorExit:
            frames = _stack.frames
            frames.append(frame)
            try:
                gen.close()
            finally:
                frames.pop()
            raise
        except BaseException as exc:
            error = exc


def is_member(value: Any) -> bool:
    """Whether value is a function produced by bind_member()."""
    return callable(value) and hasattr(value, "method_name") and hasattr(value, "parent_method")


def call_parent(instance: Any, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
    """
    Invoke the ancestor implementation of the member currently running.

    When neither args nor kwargs are given, the arguments the running member
    received are forwarded unchanged.

    :raises DispatchError: If no member is running, or no ancestor defines it.
    """
    frames = _stack.frames
    if not frames:
        raise DispatchError("call_parent() must be called from within a registered member function")

    frame = frames[-1]
    member = frame.member
    parent = member.parent_method
    if parent is None or not callable(parent):
        raise DispatchError(
            f"No ancestor implements member '{member.method_name}'",
            {"member": member.method_name, "class": getattr(instance, "class_name", None)},
        )

    if not args and not kwargs:
        args, kwargs = frame.args, frame.kwargs

    if hasattr(parent, "__get__"):
        parent = parent.__get__(instance, type(instance))
        return parent(*args, **kwargs)
    return parent(instance, *args, **kwargs)
