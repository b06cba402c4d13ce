#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Err import Err, NullErr, UnknownSlotErr
from .Marker import Marker, NullMarker, TypeMarker
from .Type import Type, byte_, short_, int_, long_, float_, double_, boolean_, char_
from .Wrappers import WRAPPERS


def _names(names):
    if isinstance(names, str):
        return (names,)
    return tuple(names)


class ReflectionHelper:
    """Name-based access to fields and methods anywhere in a type hierarchy.

    Lookups accept several candidate names, tried in order. Each name is
    searched through the whole ancestor chain before the next one is tried.
    Resolved slots are opened with set_accessible(True), so private and
    internal members are reachable.

    Arguments whose run-time type is ambiguous for overload resolution are
    wrapped with null_value(), typed() or one of the primitive_*() helpers.
    """

    WRAPPERS = WRAPPERS

    #########################################################################
    # Value markers
    #########################################################################

    @staticmethod
    def null_value(t):
        return NullMarker(t)

    @staticmethod
    def typed(value, t):
        return TypeMarker(t, value)

    @staticmethod
    def primitive_byte(value):
        return TypeMarker(byte_, value)

    @staticmethod
    def primitive_short(value):
        return TypeMarker(short_, value)

    @staticmethod
    def primitive_int(value):
        return TypeMarker(int_, value)

    @staticmethod
    def primitive_long(value):
        return TypeMarker(long_, value)

    @staticmethod
    def primitive_float(value):
        return TypeMarker(float_, value)

    @staticmethod
    def primitive_double(value):
        return TypeMarker(double_, value)

    @staticmethod
    def primitive_boolean(value):
        return TypeMarker(boolean_, value)

    @staticmethod
    def primitive_char(value):
        return TypeMarker(char_, value)

    #########################################################################
    # Fields
    #########################################################################

    @staticmethod
    def get_property(klazz, instance, *fields):
        """Read the first field matching `fields`.

        Args:
            klazz: Type, class or qualified name to start from; None for
                the instance's own type
            instance: Object to read from (None or the class for static fields)
            fields: Candidate field names

        Returns:
            Field value
        """
        field = ReflectionHelper.get_field(ReflectionHelper._start(klazz, instance), *fields, instance=instance)
        if field is None:
            raise UnknownSlotErr.make_names("Fields", fields)
        try:
            return field.get(instance)
        except Exception as e:
            Err.propagate(e)

    @staticmethod
    def set_property(klazz, instance, value, *fields):
        """Write `value` into the first field matching `fields`.

        `value` may be a marker; the wrapped value is what gets stored.
        """
        field = ReflectionHelper.get_field(ReflectionHelper._start(klazz, instance), *fields, instance=instance)
        if field is None:
            raise UnknownSlotErr.make_names("Fields", fields)
        try:
            field.set_(instance, Marker.unwrap(value))
        except Exception as e:
            Err.propagate(e)

    @staticmethod
    def get_field(klazz, *fields, instance=None):
        """Find the first field matching `fields`, None if none does.

        At each ancestor the class body is searched first, then the
        attributes `instance` carries for that ancestor (see
        Type.instance_fields).
        """
        klazz = Type.to_type(klazz)
        if klazz is None:
            return None
        chain = klazz.ancestors()
        for name in fields:
            for i, current in enumerate(chain):
                f = current.declared_field(name)
                if f is None and instance is not None:
                    f = current.instance_field(instance, name, i == 0)
                if f is not None:
                    f.set_accessible(True)
                    return f
        return None

    #########################################################################
    # Methods
    #########################################################################

    @staticmethod
    def call(instance, method_names, *args):
        """Invoke a method on `instance`, resolved against its own type"""
        if instance is None:
            raise NullErr.make("Instance required, use call_static")
        return ReflectionHelper.call_on(Type.of(instance), instance, method_names, *args)

    @staticmethod
    def call_static(klazz, method_names, *args):
        """Invoke a static method or classmethod of `klazz`"""
        return ReflectionHelper.call_on(klazz, None, method_names, *args)

    @staticmethod
    def call_on(klazz, instance, method_names, *args):
        """Resolve and invoke a method.

        Args:
            klazz: Type, class or qualified name to start resolving from
            instance: Target object, None for static methods
            method_names: Candidate method name or names
            args: Positional arguments, each optionally a marker

        Returns:
            Method return value
        """
        names = _names(method_names)
        m = ReflectionHelper.get_method(ReflectionHelper._start(klazz, instance), names, *args)
        if m is None:
            raise UnknownSlotErr.make_names("Method", names)

        args = list(args)
        for i, arg in enumerate(args):
            args[i] = Marker.unwrap(arg)

        m.set_accessible(True)
        try:
            return m.call_on(instance, args)
        except Exception as e:
            Err.propagate(e)

    @staticmethod
    def get_method(klazz, method_names, *args):
        """Find a method whose parameter types exactly match the args.

        Markers contribute their tagged type, other values their run-time
        type. A bare None raises NullErr.
        """
        klazz = Type.to_type(klazz)
        if klazz is None:
            return None
        arg_types = [Marker.type_of(arg) for arg in args]
        return ReflectionHelper.get_method_by_types(klazz, method_names, *arg_types)

    @staticmethod
    def get_method_by_types(klazz, method_names, *types):
        """Find a method whose parameter types are exactly `types`"""
        klazz = Type.to_type(klazz)
        if klazz is None:
            return None
        types = [Type.to_type(t) for t in types]
        for name in _names(method_names):
            result = ReflectionHelper.get_declared_method(klazz, name, types)
            if result is not None:
                return result
        return None

    @staticmethod
    def get_declared_method(klazz, name, arg_types):
        """Walk the ancestor chain for a method named `name` taking `arg_types`"""
        for current in Type.to_type(klazz).ancestors():
            m = current.declared_method(name, arg_types)
            if m is not None:
                return m
        return None

    @staticmethod
    def get_all_methods(klazz):
        """Every declared method of every ancestor, most derived first"""
        return Type.to_type(klazz).methods()

    @staticmethod
    def get_all_interfaces(klazz):
        """Mixins declared anywhere in the ancestor chain, without duplicates"""
        result = {}
        for current in Type.to_type(klazz).ancestors():
            for m in current.mixins():
                result.setdefault(m, None)
        return list(result)

    #########################################################################
    # Types
    #########################################################################

    @staticmethod
    def get_class(class_name):
        """Resolve a qualified class name; None for an empty name.

        Primitive kind names ('int', 'long', ...) are not classes and raise
        UnknownTypeErr like any other unknown name.
        """
        if not class_name:
            return None
        try:
            t = Type.find(class_name)
            if t.is_primitive():
                from .Err import UnknownTypeErr
                raise UnknownTypeErr.make(f"Not a class: {class_name}")
            return t
        except Exception as e:
            Err.propagate(e)

    @staticmethod
    def compare_types(left, right):
        """True if both denote the same type once primitives are boxed"""
        left = Type.to_type(left)
        right = Type.to_type(right)
        if left.is_primitive():
            left = WRAPPERS.box(left)
        if right.is_primitive():
            right = WRAPPERS.box(right)
        return left == right

    @staticmethod
    def safe_load(class_name):
        from .SafeClassLoad import SafeClassLoad
        return SafeClassLoad(class_name)

    @staticmethod
    def _start(klazz, instance):
        if klazz is None:
            if instance is None:
                raise NullErr.make("Either a type or an instance is required")
            # A class stands in for itself when reading static fields
            if isinstance(instance, type):
                return Type.of_class(instance)
            return Type.of(instance)
        if isinstance(klazz, str):
            return ReflectionHelper.get_class(klazz)
        return Type.to_type(klazz)
