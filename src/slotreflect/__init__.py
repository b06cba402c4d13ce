#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

# slotreflect - name-based field and method access across type hierarchies

# Base types
from .Obj import Obj

# Errors
from .Err import (
    Err, ParseErr, NullErr, ArgErr, NameErr, ReadonlyErr,
    UnknownTypeErr, UnknownSlotErr, AccessErr, ReflectErr,
)

# Reflection
from .Type import (
    Type, PrimitiveType,
    byte_, short_, int_, long_, float_, double_, boolean_, char_,
)
from .Slot import Slot, FConst
from .Param import Param
from .Field import Field
from .Method import Method, overload

# Primitives
from .Num import Byte, Short, Integer, Float, Character
from .Wrappers import Wrappers, WRAPPERS
from .Marker import Marker, NullMarker, TypeMarker

# Access
from .ReflectionHelper import ReflectionHelper
from .SafeClassLoad import SafeClassLoad

# Environment
from .Env import Env
from .Log import Log, LogLevel, LogRec

null_value = ReflectionHelper.null_value
typed = ReflectionHelper.typed
primitive_byte = ReflectionHelper.primitive_byte
primitive_short = ReflectionHelper.primitive_short
primitive_int = ReflectionHelper.primitive_int
primitive_long = ReflectionHelper.primitive_long
primitive_float = ReflectionHelper.primitive_float
primitive_double = ReflectionHelper.primitive_double
primitive_boolean = ReflectionHelper.primitive_boolean
primitive_char = ReflectionHelper.primitive_char

get_property = ReflectionHelper.get_property
set_property = ReflectionHelper.set_property
call = ReflectionHelper.call
call_on = ReflectionHelper.call_on
call_static = ReflectionHelper.call_static
get_field = ReflectionHelper.get_field
get_method = ReflectionHelper.get_method
get_class = ReflectionHelper.get_class
compare_types = ReflectionHelper.compare_types
safe_load = ReflectionHelper.safe_load
