#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Slot import Slot


class Field(Slot):
    """Field reflection - one declared field of a Type.

    Fields are created either:
    1. By Type discovery from a class body (annotations, __slots__,
       class attributes, properties)
    2. From metadata registered via Type.af_()
    """

    def __init__(self, parent=None, name="", flags=0, type_=None, storage=None, prop=None):
        """Create a Field reflection object.

        Args:
            parent: Declaring Type
            name: Declared field name ('__x' for a private field)
            flags: Slot flags (FConst values)
            type_: Field Type, Python class or qualified type name
            storage: Python attribute name holding the value (default: name)
            prop: property object when the field is backed by one
        """
        super().__init__(parent, name, flags)
        self._type = type_
        self._storage = storage if storage is not None else name
        self._prop = prop

    def is_field(self):
        return True

    def is_property(self):
        return self._prop is not None

    def storage(self):
        """Python attribute name the value lives under."""
        return self._storage

    def type(self):
        """Get field type - lazily resolves from a class or name if needed."""
        from .Type import Type
        if not isinstance(self._type, Type):
            self._type = Type.to_type(self._type) if self._type is not None else Type.obj()
        return self._type

    def get(self, obj=None):
        """Get field value from object.

        Static fields, and any field read with the class itself as `obj`,
        come from the declaring class. Otherwise the instance attribute is
        read, so a value assigned on the instance shadows a class default.

        Args:
            obj: Object to get field from (ignored for static fields)

        Returns:
            Field value
        """
        self._check_access()

        if self.is_static() or self._is_class_target(obj):
            return getattr(self._parent.py_class(), self._storage)

        if obj is None:
            from .Err import ArgErr
            raise ArgErr.make(f"Instance field {self.qname()} requires target object")

        if self._prop is not None:
            if self._prop.fget is None:
                from .Err import ReadonlyErr
                raise ReadonlyErr.make(f"Property {self.qname()} is write-only")
            return self._prop.fget(obj)

        return getattr(obj, self._storage)

    def set_(self, obj, val):
        """Set field value on object.

        The value is coerced to the field type first: primitive fields box
        the value through their boxed class, other typed fields only accept
        instances of their class.

        Args:
            obj: Object to set field on (ignored for static fields)
            val: Value to set
        """
        self._check_access()
        val = self._coerce(val)

        if self.is_static() or self._is_class_target(obj):
            setattr(self._parent.py_class(), self._storage, val)
            return

        if obj is None:
            from .Err import ArgErr
            raise ArgErr.make(f"Instance field {self.qname()} requires target object")

        if self._prop is not None:
            if self._prop.fset is None:
                from .Err import ReadonlyErr
                raise ReadonlyErr.make(f"Property {self.qname()} has no setter")
            self._prop.fset(obj, val)
            return

        # Bypass __setattr__ overrides such as frozen dataclasses
        object.__setattr__(obj, self._storage, val)

    def _is_class_target(self, obj):
        """True if `obj` is a class and this field has a class-level value"""
        if not isinstance(obj, type):
            return False
        attrs = vars(self._parent.py_class())
        if self._storage not in attrs or hasattr(type(attrs[self._storage]), "__get__"):
            from .Err import ArgErr
            raise ArgErr.make(f"Instance field {self.qname()} requires target object")
        return True

    def _coerce(self, val):
        from .Err import ArgErr, NullErr
        from .Num import coerce
        from .Wrappers import WRAPPERS

        field_type = self.type()
        if field_type.is_primitive():
            if val is None:
                raise NullErr.make(f"Cannot set primitive field {self.qname()} to None")
            return coerce(WRAPPERS.box(field_type).py_class(), val)

        cls = field_type.py_class()
        if val is None or cls is None or cls is object:
            return val
        if not isinstance(val, cls):
            raise ArgErr.make(f"Cannot set {self.qname()}: {type(val).__name__} does not fit {field_type}")
        return val
