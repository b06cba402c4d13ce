#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class Param(Obj):
    """Method parameter metadata for reflection.

    Represents a single positional parameter of a method:
    - name: Parameter name
    - type: Parameter static Type
    """

    def __init__(self, name, param_type):
        """Create a Param object.

        Args:
            name: Parameter name
            param_type: Type, Python class or qualified type name
        """
        super().__init__()
        self._name = name
        self._type = param_type

    def name(self):
        """Get parameter name."""
        return self._name

    def type(self):
        """Get parameter type - lazily resolves from a class or name if needed."""
        from .Type import Type
        if not isinstance(self._type, Type):
            self._type = Type.to_type(self._type)
        return self._type

    def to_str(self):
        return f"{self.type().signature()} {self._name}"

    def __repr__(self):
        return f"Param({self._name}, {self._type})"
