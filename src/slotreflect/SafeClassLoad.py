#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class SafeClassLoad(Obj):
    """Deferred lookup of a type by qualified name.

    Nothing is imported until load(), try_load() or get() is called, so a
    handle can be created for a type that may not be installed.
    """

    def __init__(self, class_name):
        super().__init__()
        self._class_name = class_name
        self._loaded = None

    def name(self):
        return self._class_name

    def is_loaded(self):
        return self._loaded is not None

    def load(self):
        """Resolve the type now; raises if it cannot be found"""
        from .ReflectionHelper import ReflectionHelper
        self._loaded = ReflectionHelper.get_class(self._class_name)
        return self._loaded

    def try_load(self):
        """Resolve the type now, tolerating absence.

        Returns:
            True if the type was found
        """
        from .Err import Err
        from .Log import Log
        try:
            self.load()
            return self._loaded is not None
        except Err as e:
            Log.get("slotreflect").debug(f"Cannot load {self._class_name}", e)
            return False

    def get(self):
        """Loaded type, loading it on first use"""
        if self._loaded is None:
            self.load()
        return self._loaded

    def to_str(self):
        return f"SafeClassLoad({self._class_name})"
