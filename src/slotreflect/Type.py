#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import abc
import builtins
import importlib
import inspect
import types
import typing
import weakref

from .Obj import Obj
from .Slot import FConst, demangle, mangle, visibility


# Class attributes that are bookkeeping, not fields
_IGNORED_ATTRS = {"_abc_impl", "_is_protocol", "_is_runtime_protocol"}


def _is_dunder(name):
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


# Bases every ABC or Protocol carries; they declare nothing of their own
_HIDDEN_BASES = (abc.ABC, typing.Protocol, typing.Generic)


def _only_abstract(cls):
    """True if every member cls declares is abstract"""
    if any(not _is_dunder(a) for a in inspect.get_annotations(cls)):
        return False
    for attr, val in cls.__dict__.items():
        if _is_dunder(attr) or attr in _IGNORED_ATTRS:
            continue
        if isinstance(val, (staticmethod, classmethod)):
            val = val.__func__
        elif isinstance(val, property):
            val = val.fget
        if not getattr(val, "__isabstractmethod__", False):
            return False
    return True


class Type(Obj):
    """Type reflection - host type descriptor.

    A Type wraps either a Python class or one of the eight primitive kinds.
    Handles are interned per class, but declared slots are discovered anew
    on every query so the class body is always the source of truth.
    """

    # Interned handles by Python class
    _by_class = weakref.WeakKeyDictionary()
    # Primitive handles by kind name
    _primitives = {}

    def __init__(self, qname, cls=None):
        super().__init__()
        self._qname = qname
        self._name = qname.rsplit(".", 1)[-1]
        # Weak so the interning table does not keep classes alive
        self._cls_ref = weakref.ref(cls) if cls is not None else None
        # Type metadata registered via tf_
        self._type_flags = 0
        self._mixin_types = []
        # Slot metadata registered via af_/am_, kept as specs not Slots
        self._slots_info = []

    @staticmethod
    def of(obj):
        """Get run-time type of object"""
        if obj is None:
            return None
        return Type.of_class(type(obj))

    @staticmethod
    def of_class(cls):
        """Get the interned Type for a Python class"""
        t = Type._by_class.get(cls)
        if t is None:
            t = Type(f"{cls.__module__}.{cls.__qualname__}", cls)
            Type._by_class[cls] = t
        return t

    @staticmethod
    def obj():
        """Type of builtins.object, the root of every hierarchy"""
        return Type.of_class(object)

    @staticmethod
    def to_type(x):
        """Coerce a Type, Python class or qualified name to a Type"""
        if x is None or isinstance(x, Type):
            return x
        if isinstance(x, type):
            return Type.of_class(x)
        if isinstance(x, str):
            return Type.find(x)
        from .Err import ArgErr
        raise ArgErr.make(f"Not a type: {x!r}")

    @staticmethod
    def find(qname, checked=True):
        """Find type by qualified name.

        Primitive kinds use their bare name ('int', 'long', ...). Classes
        use 'package.module.Qual.Name', builtins included ('builtins.int').

        Args:
            qname: Qualified type name
            checked: If True, raise UnknownTypeErr if not found

        Returns:
            Type instance or None (if checked=False and not found)
        """
        t = Type._primitives.get(qname)
        if t is not None:
            return t

        cls = Type._load(qname) if qname else None
        if cls is not None:
            return Type.of_class(cls)

        if checked:
            from .Err import UnknownTypeErr
            raise UnknownTypeErr.make(qname)
        from .Log import Log
        Log.get("slotreflect").debug(f"Type not found: {qname}")
        return None

    @staticmethod
    def _load(qname):
        """Import the longest module prefix of qname and walk the rest as attributes"""
        parts = qname.split(".")
        for i in range(len(parts) - 1, 0, -1):
            modname = ".".join(parts[:i])
            try:
                obj = importlib.import_module(modname)
            except ModuleNotFoundError as e:
                # Only a missing prefix means "try shorter"; a missing dependency is fatal
                if e.name is None or not (modname == e.name or modname.startswith(e.name + ".")):
                    raise
                continue
            for attr in parts[i:]:
                obj = getattr(obj, attr, None)
                if obj is None:
                    return None
            return obj if isinstance(obj, type) else None
        return None

    @staticmethod
    def of_annotation(ann):
        """Map an annotation to its static Type; unannotated means Obj"""
        if ann is inspect.Parameter.empty:
            return Type.obj()
        if ann is None:
            return Type.of_class(type(None))
        if isinstance(ann, Type):
            return ann
        if isinstance(ann, type) and not isinstance(ann, types.GenericAlias):
            return Type.of_class(ann)
        if isinstance(ann, str):
            cls = getattr(builtins, ann, None)
            if isinstance(cls, type):
                return Type.of_class(cls)
            return Type.find(ann, False) or Type.obj()
        origin = typing.get_origin(ann)
        if origin is typing.ClassVar:
            args = typing.get_args(ann)
            return Type.of_annotation(args[0]) if args else Type.obj()
        if isinstance(origin, type) and origin is not types.UnionType:
            return Type.of_class(origin)
        return Type.obj()

    def name(self):
        return self._name

    def qname(self):
        return self._qname

    def signature(self):
        return self._qname

    def py_class(self):
        """Python class this type describes, None for primitives"""
        return self._cls_ref() if self._cls_ref is not None else None

    def is_primitive(self):
        return False

    def is_obj(self):
        return self.py_class() is object

    def is_mixin(self):
        """True for interface-like types.

        A class is a mixin when it derives directly from typing.Protocol,
        derives directly from abc.ABC and declares only abstract members,
        or was flagged FConst.Mixin via tf_().
        """
        if self._type_flags & FConst.Mixin:
            return True
        cls = self.py_class()
        if cls is None:
            return False
        bases = cls.__bases__
        if typing.Protocol in bases:
            return True
        return abc.ABC in bases and _only_abstract(cls)

    #########################################################################
    # Hierarchy
    #########################################################################

    def base(self):
        """Single-inheritance superclass: first base that is not a mixin"""
        cls = self.py_class()
        if cls is None or cls is object:
            return None
        for b in cls.__bases__:
            t = Type.of_class(b)
            if not t.is_mixin():
                return t
        return Type.obj()

    def mixins(self):
        """Mixins declared directly by this type"""
        result = []
        cls = self.py_class()
        if cls is not None:
            for b in cls.__bases__:
                t = Type.of_class(b)
                if t.is_mixin():
                    result.append(t)
        for m in self._mixin_types:
            t = Type.to_type(m)
            if t not in result:
                result.append(t)
        return result

    def ancestors(self):
        """This type followed by every class of its MRO that is not a mixin.

        This is the chain member lookups walk, most derived first.
        """
        cls = self.py_class()
        if cls is None:
            return [self]
        result = [self]
        for c in cls.__mro__[1:]:
            if c in _HIDDEN_BASES:
                continue
            t = Type.of_class(c)
            if not t.is_mixin():
                result.append(t)
        return result

    #########################################################################
    # Slot Reflection - Metadata Registration
    #########################################################################

    def af_(self, name, flags, type_sig, storage=None):
        """Add field metadata.

        Declares a field the class body cannot express, such as an
        instance attribute only assigned in __init__:
          Type.of_class(Foo).af_('count', FConst.Private, 'builtins.int')

        Args:
            name: Declared field name
            flags: Slot flags (FConst values); visibility derived from name if 0
            type_sig: Type, Python class or qualified type name
            storage: Python attribute name (default: name, mangled if private)

        Returns:
            self for method chaining
        """
        if storage is None:
            cls = self.py_class()
            storage = mangle(cls.__name__, name) if cls is not None else name
        self._slots_info.append(("field", name, flags or visibility(name), type_sig, storage))
        return self

    def am_(self, name, flags, returns_sig, params=None, func=None):
        """Add method metadata.

        Declares an overload backed by any callable. Instance methods
        receive the target as first argument:
          Type.of_class(Foo).am_('f', 0, 'builtins.str', [Param('x', int_)], impl)

        Args:
            name: Declared method name
            flags: Slot flags (FConst values); visibility derived from name if 0
            returns_sig: Return Type, Python class or qualified type name
            params: List of Param objects (or None for no params)
            func: Implementation callable

        Returns:
            self for method chaining
        """
        self._slots_info.append(("method", name, flags or visibility(name), returns_sig, list(params or []), func))
        return self

    def tf_(self, flags=0, mixins=None):
        """Add type-level metadata.

        Args:
            flags: Type flags (FConst.Mixin marks an interface)
            mixins: Additional mixin types

        Returns:
            self for method chaining
        """
        self._type_flags = flags
        self._mixin_types = list(mixins or [])
        return self

    #########################################################################
    # Slot Reflection - Discovery
    #########################################################################

    def declared_fields(self):
        """Fields declared by this type itself, in declaration order"""
        from .Field import Field

        fields = {}
        cls = self.py_class()
        if cls is not None:
            cname = cls.__name__
            for attr, ann in self._own_annotations().items():
                if _is_dunder(attr):
                    continue
                name, flags = demangle(cname, attr)
                if ann is typing.ClassVar or typing.get_origin(ann) is typing.ClassVar:
                    flags |= FConst.Static
                fields[name] = Field(self, name, flags, Type.of_annotation(ann), attr)

            slots = cls.__dict__.get("__slots__", ())
            if isinstance(slots, str):
                slots = (slots,)
            for attr in slots:
                if _is_dunder(attr) or attr in ("__dict__", "__weakref__"):
                    continue
                # __slots__ keeps the source spelling, the descriptor is mangled
                attr = mangle(cname, attr)
                name, flags = demangle(cname, attr)
                if name not in fields:
                    fields[name] = Field(self, name, flags, None, attr)

            for attr, val in cls.__dict__.items():
                if _is_dunder(attr) or attr in _IGNORED_ATTRS:
                    continue
                name, flags = demangle(cname, attr)
                if isinstance(val, property):
                    fields[name] = Field(self, name, flags | FConst.Property, self._prop_type(val), attr, val)
                    continue
                if name in fields or callable(val) or hasattr(type(val), "__get__"):
                    continue
                # Class-level default, shadowed per instance once assigned
                fields[name] = Field(self, name, flags, type(val), attr)

        for info in self._slots_info:
            if info[0] == "field":
                _, name, flags, type_sig, storage = info
                fields[name] = Field(self, name, flags, type_sig, storage)

        return list(fields.values())

    def declared_field(self, name):
        """Find field declared by this type itself, None if not found"""
        for f in self.declared_fields():
            if f.name() == name:
                return f
        return None

    def instance_fields(self, instance, start=False):
        """Fields carried only by `instance`, attributed to this type.

        Attributes assigned outside the class body (typically in __init__)
        live in the instance __dict__. A mangled '_Cls__x' belongs to Cls;
        any other name belongs to the type a lookup starts from, so those
        are only returned when `start` is True.
        """
        from .Field import Field

        cls = self.py_class()
        attrs = getattr(instance, "__dict__", None)
        if cls is None or not attrs or isinstance(instance, type):
            return []

        cname = cls.__name__
        # Mangling prefixes of the other classes the instance derives from
        others = ["_" + c.__name__.lstrip("_") + "__" for c in type(instance).__mro__ if c is not cls and c.__name__.strip("_")]
        fields = []
        for attr in attrs:
            if _is_dunder(attr):
                continue
            name, flags = demangle(cname, attr)
            if name != attr:
                fields.append(Field(self, name, flags, None, attr))
            elif start and not any(attr.startswith(p) for p in others):
                fields.append(Field(self, name, flags, None, attr))
        return fields

    def instance_field(self, instance, name, start=False):
        """Find a field of `instance` attributed to this type, None if not found"""
        for f in self.instance_fields(instance, start):
            if f.name() == name:
                return f
        return None

    def declared_methods(self):
        """Methods declared by this type itself, overloads included"""
        from .Method import Method
        from .Param import Param

        methods = []
        cls = self.py_class()
        if cls is not None:
            for attr, val in cls.__dict__.items():
                if isinstance(val, (staticmethod, classmethod)):
                    fn = val.__func__
                elif isinstance(val, types.FunctionType):
                    fn = val
                else:
                    continue
                methods.append(self._method_from_function(attr, val, fn))

        for info in self._slots_info:
            if info[0] == "method":
                _, name, flags, returns_sig, params, func = info
                methods.append(Method(self, name, flags, returns_sig, [p if isinstance(p, Param) else Param(f"arg{i}", p) for i, p in enumerate(params)], func))

        return methods

    def declared_method(self, name, param_types):
        """Find method declared by this type with exactly `param_types`"""
        param_types = tuple(param_types)
        for m in self.declared_methods():
            if m.name() == name and m.matches(param_types):
                return m
        return None

    def _method_from_function(self, attr, val, fn):
        from .Method import Method
        from .Param import Param

        slot_name = getattr(fn, "_slot_name_", None)
        if slot_name is not None:
            name, flags = slot_name, visibility(slot_name)
        else:
            name, flags = demangle(self.py_class().__name__, attr)
        if isinstance(val, (staticmethod, classmethod)):
            flags |= FConst.Static

        sig = self._signature(fn)
        params = list(sig.parameters.values())
        # Drop self / cls
        if not isinstance(val, staticmethod) and params:
            params = params[1:]
        positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        plist = [Param(p.name, Type.of_annotation(p.annotation)) for p in params if p.kind in positional]

        return Method(self, name, flags, Type.of_annotation(sig.return_annotation), plist, val, attr)

    @staticmethod
    def _signature(fn):
        try:
            return inspect.signature(fn, eval_str=True)
        except (NameError, AttributeError, SyntaxError, TypeError):
            return inspect.signature(fn)

    def _own_annotations(self):
        cls = self.py_class()
        try:
            return inspect.get_annotations(cls, eval_str=True)
        except (NameError, AttributeError, SyntaxError, TypeError):
            return inspect.get_annotations(cls)

    def _prop_type(self, prop):
        if prop.fget is None:
            return Type.obj()
        return Type.of_annotation(self._signature(prop.fget).return_annotation)

    #########################################################################
    # Slot Reflection - Lookup across the ancestor chain
    #########################################################################

    def fields(self):
        """Declared fields of this type and every ancestor, most derived first"""
        result = []
        for t in self.ancestors():
            result.extend(t.declared_fields())
        return result

    def methods(self):
        """Declared methods of this type and every ancestor, most derived first"""
        result = []
        for t in self.ancestors():
            result.extend(t.declared_methods())
        return result

    #########################################################################
    # Identity
    #########################################################################

    def equals(self, other):
        return self == other

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, Type):
            return False
        a, b = self.py_class(), other.py_class()
        return a is not None and a is b

    def __hash__(self):
        return hash(self._qname)

    def to_str(self):
        return self._qname

    def __repr__(self):
        return self._qname


class PrimitiveType(Type):
    """One of the eight primitive kinds; has no class, base or slots"""

    def __init__(self, name):
        super().__init__(name)

    def is_primitive(self):
        return True

    def base(self):
        return None

    def mixins(self):
        return []

    def declared_fields(self):
        return []

    def declared_methods(self):
        return []

    def __eq__(self, other):
        return self is other

    def __hash__(self):
        return hash(self._qname)


def _primitive(name):
    t = PrimitiveType(name)
    Type._primitives[name] = t
    return t


byte_ = _primitive("byte")
short_ = _primitive("short")
int_ = _primitive("int")
long_ = _primitive("long")
float_ = _primitive("float")
double_ = _primitive("double")
boolean_ = _primitive("boolean")
char_ = _primitive("char")
