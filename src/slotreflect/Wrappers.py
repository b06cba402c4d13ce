#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from types import MappingProxyType

from .Obj import Obj
from .Num import Byte, Short, Integer, Float, Character
from .Type import Type, byte_, short_, int_, long_, float_, double_, boolean_, char_


class Wrappers(Obj):
    """Immutable bidirectional map between primitive types and boxed types"""

    def __init__(self, pairs):
        """Build the table from (primitive, boxed) pairs.

        Raises ArgErr if a primitive or a boxed type appears twice.
        """
        super().__init__()
        boxed = {}
        unboxed = {}
        for prim, box in pairs:
            prim = Type.to_type(prim)
            box = Type.to_type(box)
            if prim in boxed or box in unboxed:
                from .Err import ArgErr
                raise ArgErr.make(f"Duplicate wrapper entry: {prim} -> {box}")
            boxed[prim] = box
            unboxed[box] = prim
        self._boxed = MappingProxyType(boxed)
        self._unboxed = MappingProxyType(unboxed)

    def box(self, t):
        """Boxed type for primitive `t`, None if `t` is not in the table"""
        return self._boxed.get(t)

    def unbox(self, t):
        """Primitive type for boxed `t`, None if `t` is not in the table"""
        return self._unboxed.get(t)

    def primitives(self):
        return list(self._boxed.keys())

    def __contains__(self, t):
        return t in self._boxed or t in self._unboxed

    def __len__(self):
        return len(self._boxed)

    def to_str(self):
        return "{" + ", ".join(f"{p}: {b}" for p, b in self._boxed.items()) + "}"


WRAPPERS = Wrappers([
    (long_, int),
    (int_, Integer),
    (short_, Short),
    (byte_, Byte),
    (boolean_, bool),
    (double_, float),
    (float_, Float),
    (char_, Character),
])
