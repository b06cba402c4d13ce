#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

"""Boxed value classes for primitive kinds Python has no class of its own for.

Python's int, float and bool box the long, double and boolean kinds. The
narrower kinds get int, float and str subclasses so every primitive has a
distinct run-time type.
"""

import struct

from .Err import ArgErr


def _integral(cls, val):
    # bool is an int subclass but never a numeric argument
    if isinstance(val, bool) or not isinstance(val, int):
        raise ArgErr.make(f"Cannot convert {type(val).__name__} to {cls.__name__}: {val!r}")
    return int(val)


class _BoundedInt(int):
    """Fixed width two's complement integer"""

    MIN = 0
    MAX = 0

    def __new__(cls, val=0):
        v = _integral(cls, val)
        if v < cls.MIN or v > cls.MAX:
            raise ArgErr.make(f"{cls.__name__} out of range: {v}")
        return int.__new__(cls, v)

    def __repr__(self):
        return f"{type(self).__name__}({int(self)})"


class Byte(_BoundedInt):
    MIN = -0x80
    MAX = 0x7f


class Short(_BoundedInt):
    MIN = -0x8000
    MAX = 0x7fff


class Integer(_BoundedInt):
    MIN = -0x80000000
    MAX = 0x7fffffff


class Float(float):
    """Single precision float: value is rounded through a 32-bit pack"""

    def __new__(cls, val=0.0):
        if isinstance(val, bool) or not isinstance(val, (int, float)):
            raise ArgErr.make(f"Cannot convert {type(val).__name__} to Float: {val!r}")
        try:
            v = struct.unpack("<f", struct.pack("<f", float(val)))[0]
        except OverflowError:
            raise ArgErr.make(f"Float out of range: {val}")
        return float.__new__(cls, v)

    def __repr__(self):
        return f"Float({float(self)!r})"


class Character(str):
    """Single character"""

    def __new__(cls, val="\0"):
        if not isinstance(val, str) or len(val) != 1:
            raise ArgErr.make(f"Cannot convert to Character: {val!r}")
        return str.__new__(cls, val)

    def __repr__(self):
        return f"Character({str(self)!r})"


def _to_long(val):
    return _integral(int, val)


def _to_double(val):
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        raise ArgErr.make(f"Cannot convert {type(val).__name__} to float: {val!r}")
    return float(val)


def _to_bool(val):
    if not isinstance(val, bool):
        raise ArgErr.make(f"Cannot convert {type(val).__name__} to bool: {val!r}")
    return val


_COERCERS = {int: _to_long, float: _to_double, bool: _to_bool}


def coerce(boxed, val):
    """Convert `val` into an instance of the boxed class `boxed`.

    Raises ArgErr when the value has the wrong kind or is out of range.
    """
    fn = _COERCERS.get(boxed)
    if fn is not None:
        return fn(val)
    return boxed(val)
