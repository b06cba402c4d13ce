#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Slot import Slot


def overload(name):
    """Declare the decorated function as an overload of method `name`.

    Python keeps one attribute per name, so same-named overloads live
    under distinct attribute names and are declared under `name`:

        class Shape:
            @overload("scale")
            def scale_int(self, factor: Integer): ...

            @overload("scale")
            def scale_float(self, factor: float): ...
    """
    def decorate(fn):
        target = fn.__func__ if isinstance(fn, (staticmethod, classmethod)) else fn
        target._slot_name_ = name
        return fn
    return decorate


class Method(Slot):
    """Method reflection - one declared method of a Type.

    Methods are created either:
    1. By Type discovery of functions, staticmethods and classmethods
    2. From metadata registered via Type.am_()
    """

    def __init__(self, parent=None, name="", flags=0, returns=None, params=None, func=None, storage=None):
        """Create a Method reflection object.

        Args:
            parent: Declaring Type
            name: Declared method name
            flags: Slot flags (FConst values)
            returns: Return Type, Python class or qualified type name
            params: List of Param objects
            func: function, staticmethod, classmethod or any callable
            storage: Python attribute name of the implementation
        """
        super().__init__(parent, name, flags)
        self._returns = returns
        self._params = list(params) if params is not None else []
        self._func = func
        self._storage = storage if storage is not None else name

    def is_method(self):
        return True

    def storage(self):
        return self._storage

    def returns(self):
        """Get return type - lazily resolves from a class or name if needed."""
        from .Type import Type
        if not isinstance(self._returns, Type):
            self._returns = Type.to_type(self._returns) if self._returns is not None else Type.obj()
        return self._returns

    def params(self):
        """Get parameter list (read-only copy)"""
        return tuple(self._params)

    def param_types(self):
        return tuple(p.type() for p in self._params)

    def matches(self, types):
        """True if `types` is exactly this method's parameter-type list.

        No widening, no boxing, no varargs expansion.
        """
        mine = self.param_types()
        if len(mine) != len(types):
            return False
        return all(a == b for a, b in zip(mine, types))

    def func(self):
        return self._func

    def call(self, *args):
        """Call method with variable args.

        For static methods: call(arg1, arg2, ...)
        For instance methods: call(target, arg1, arg2, ...)
        """
        if self.is_static():
            return self.call_on(None, list(args))
        if not args:
            from .Err import ArgErr
            raise ArgErr.make(f"Instance method {self.qname()} requires target object")
        return self.call_on(args[0], list(args[1:]))

    def call_on(self, target, args=None):
        """Call method on a specific target object.

        The declared implementation is invoked directly, overrides in the
        target's class are not consulted.

        Args:
            target: Object to call method on (None for static methods)
            args: List of arguments (method args, NOT including target)
        """
        self._check_access()
        if args is None:
            args = []

        fn = self._func
        if isinstance(fn, classmethod):
            owner = type(target) if target is not None else self._parent.py_class()
            return fn.__func__(owner, *args)
        if isinstance(fn, staticmethod):
            return fn.__func__(*args)
        if self.is_static():
            return fn(*args)

        if target is None:
            from .Err import ArgErr
            raise ArgErr.make(f"Instance method {self.qname()} requires target object")
        return fn(target, *args)

    def signature(self):
        params = ", ".join(p.to_str() for p in self._params)
        return f"{self.returns().signature()} {self._name}({params})"
