#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from abc import ABC, abstractmethod

from .Obj import Obj
from .Type import Type


class Marker(Obj, ABC):
    """Argument annotated with an explicit static type.

    Markers only steer overload resolution. They are stripped before the
    target runs, see unwrap().
    """

    __slots__ = ("_type",)

    def __init__(self, t):
        self._type = Type.to_type(t)
        if self._type is None:
            from .Err import NullErr
            raise NullErr.make("Marker type must not be None")

    def type(self):
        """Static type used for overload resolution"""
        return self._type

    @abstractmethod
    def val(self):
        """Value actually passed to the target"""

    @staticmethod
    def type_of(arg):
        """Static type of an argument: tagged type for a marker, run-time type otherwise"""
        if arg is None:
            from .Err import NullErr
            raise NullErr.make("No nulls allowed, use null_value(type)")
        if isinstance(arg, Marker):
            return arg._type
        return Type.of(arg)

    @staticmethod
    def unwrap(arg):
        """Value actually passed to the target"""
        if isinstance(arg, Marker):
            return arg.val()
        return arg


class NullMarker(Marker):
    """Pass None, but resolve as if the argument had the given static type"""

    __slots__ = ()

    def val(self):
        return None

    def to_str(self):
        return f"null({self._type})"


class TypeMarker(Marker):
    """Pass `val`, but resolve using the given static type instead of its run-time type"""

    __slots__ = ("_val",)

    def __init__(self, t, val):
        super().__init__(t)
        self._val = val

    def val(self):
        return self._val

    def to_str(self):
        return f"typed({self._val!r}, {self._type})"
