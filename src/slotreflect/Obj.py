#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

class Obj:
    """Base class for all slotreflect runtime objects"""

    _hash_counter = 0

    def __init__(self):
        Obj._hash_counter += 1
        self._hash = Obj._hash_counter

    def equals(self, that):
        return self is that

    def hash(self):
        # Subclasses using __slots__ or skipping super().__init__() get one lazily
        if not hasattr(self, '_hash'):
            Obj._hash_counter += 1
            self._hash = Obj._hash_counter
        return self._hash

    def to_str(self):
        return f"{type(self).__name__}@{self.hash()}"

    def typeof(self):
        """Return the Type of this object"""
        from .Type import Type
        return Type.of(self)

    def trap(self, name, args=None):
        """Dynamic slot access by name.

        With no args, a declared field named `name` is read; otherwise the
        method `name` is resolved against the args and invoked.

        Args:
            name: Field or method name
            args: List of arguments, may contain markers (default None)
        """
        from .ReflectionHelper import ReflectionHelper
        if args is None:
            field = ReflectionHelper.get_field(self.typeof(), name, instance=self)
            if field is not None:
                return ReflectionHelper.get_property(None, self, name)
            args = []
        return ReflectionHelper.call(self, name, *args)

    def __repr__(self):
        return self.to_str()
