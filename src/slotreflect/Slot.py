#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class FConst:
    """Slot and type flag constants."""
    Public = 0x00000001
    Private = 0x00000002
    Internal = 0x00000008
    Mixin = 0x00000040
    Static = 0x00000800
    Property = 0x00010000


def visibility(name):
    """Visibility flag implied by a declared slot name"""
    if name.startswith("__") and name.endswith("__"):
        return FConst.Public
    if name.startswith("__"):
        return FConst.Private
    if name.startswith("_"):
        return FConst.Internal
    return FConst.Public


def demangle(cls_name, attr):
    """Map a Python attribute name to its declared slot name and visibility flag.

    '_Foo__x' declared in Foo is the private slot '__x', '_x' is internal,
    anything else is public.
    """
    prefix = "_" + cls_name.lstrip("_") + "__"
    if cls_name.strip("_") and attr.startswith(prefix) and not attr.endswith("__"):
        return "__" + attr[len(prefix):], FConst.Private
    if attr.startswith("__") and not attr.endswith("__"):
        # Unmangled private name only shows up for classes named all underscores
        return attr, FConst.Internal
    return attr, visibility(attr)


def mangle(cls_name, name):
    """Inverse of demangle: Python attribute name for slot `name` of cls_name"""
    if name.startswith("__") and not name.endswith("__") and cls_name.strip("_"):
        return "_" + cls_name.lstrip("_") + name
    return name


class Slot(Obj):
    """Base class for Field and Method reflection."""

    def __init__(self, parent=None, name="", flags=0):
        super().__init__()
        self._parent = parent
        self._name = name
        self._flags = flags
        # Private and internal slots must be opened with set_accessible()
        self._accessible = not (flags & (FConst.Private | FConst.Internal))

    def parent(self):
        """Get declaring type."""
        return self._parent

    def name(self):
        """Get slot name."""
        return self._name

    def flags(self):
        """Get raw flags value."""
        return self._flags

    def qname(self):
        """Get qualified name (Type.slotName)."""
        if self._parent:
            return f"{self._parent.qname()}.{self._name}"
        return self._name

    def is_field(self):
        return False

    def is_method(self):
        return False

    def is_public(self):
        return (self._flags & FConst.Public) != 0

    def is_private(self):
        return (self._flags & FConst.Private) != 0

    def is_internal(self):
        return (self._flags & FConst.Internal) != 0

    def is_static(self):
        return (self._flags & FConst.Static) != 0

    def is_accessible(self):
        return self._accessible

    def set_accessible(self, flag):
        """Open (or close) this slot for get, set and invoke."""
        self._accessible = bool(flag)
        return self

    def _check_access(self):
        if not self._accessible:
            from .Err import AccessErr
            raise AccessErr.make(f"Slot not accessible: {self.qname()}")

    def to_str(self):
        return self.qname()
