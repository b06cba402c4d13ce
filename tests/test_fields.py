"""
Unit Tests for field resolution and access

Covers get_field, get_property and set_property across hierarchies,
visibility levels, static fields, slots, properties and value coercion.
"""

import pytest

from slotreflect import (
    AccessErr, ArgErr, Integer, NullErr, ReadonlyErr, ReflectErr, Type,
    UnknownSlotErr, get_field, get_property, int_, long_, set_property, typed,
)
from slotreflect.Field import Field
from slotreflect.Slot import FConst
from sample_types import (
    Animal, Base, Defaulted, Dog, Gauge, Meter, Multi, Packet, Plain, Point,
    Puppy, Square, SubPlain, Thermo,
)


class TestFieldResolution:
    """Tests for walking the ancestor chain by field name."""

    def test_get_when_field_declared_in_ancestor_then_reads_from_subclass_instance(self):
        """A field declared two levels up is readable from the most derived instance."""
        assert get_property(None, Puppy(), "legs") == 4

    def test_get_when_private_field_then_visibility_is_bypassed(self):
        """Private (mangled) fields resolve by their declared name."""
        assert get_property(None, Dog(), "__secret") == "ball"

    def test_get_when_same_private_name_at_two_levels_then_start_type_decides(self):
        """Each class keeps its own private slot; the walk starts at klazz."""
        dog = Dog()
        assert get_property(Dog, dog, "__secret") == "ball"
        assert get_property(Animal, dog, "__secret") == "steak"

    def test_get_when_wrong_names_then_raises_unknown_slot(self):
        """A wrong name list fails resolution instead of returning a wrong field."""
        with pytest.raises(UnknownSlotErr) as exc:
            get_property(None, Dog(), "secret", "_secret")
        assert exc.value.names() == ("secret", "_secret")

    def test_get_when_several_names_then_first_name_wins_over_shallower_match(self):
        """Names are tried outer-to-inner: 'kingdom' (in Animal) beats '__secret' (in Dog)."""
        assert get_property(None, Dog(), "kingdom", "__secret") == "animalia"

    def test_get_when_first_name_missing_then_falls_back_to_next(self):
        assert get_property(None, Dog(), "paws", "legs") == 4

    def test_get_field_when_found_then_accessible(self):
        field = get_field(Dog, "__secret")
        assert isinstance(field, Field)
        assert field.is_private()
        assert field.is_accessible()
        assert field.parent() == Type.of_class(Dog)

    def test_get_field_when_missing_then_none(self):
        assert get_field(Dog, "nope") is None

    def test_get_field_when_qualified_name_then_resolves_type(self):
        assert get_field("sample_types.Puppy", "legs").parent() == Type.of_class(Animal)

    def test_get_when_type_given_by_name_then_resolves(self):
        assert get_property("sample_types.Animal", Dog(), "__secret") == "steak"

    def test_declared_field_when_not_opened_then_access_err(self):
        """Slots that are not public must be opened before use."""
        field = Type.of_class(Dog).declared_field("__secret")
        assert not field.is_accessible()
        with pytest.raises(AccessErr):
            field.get(Dog())
        assert field.set_accessible(True).get(Dog()) == "ball"


class TestStaticFields:
    """Tests for class-level fields."""

    def test_get_when_class_var_then_reads_from_class(self):
        assert get_property(Animal, None, "kingdom") == "animalia"

    def test_get_when_class_passed_as_instance_then_reads_from_class(self):
        assert get_property(None, Puppy, "kingdom") == "animalia"

    def test_get_when_internal_class_attribute_then_class_default_field(self):
        field = get_field(Animal, "_registry")
        assert not field.is_static()
        assert field.is_internal()
        assert field.type() == Type.of_class(int)
        assert get_property(None, Animal, "_registry") == 0

    def test_field_when_annotated_with_default_then_instance_field(self):
        """Without ClassVar an annotated default declares an instance field."""
        class Config:
            retries: int = 3
        assert not get_field(Config, "retries").is_static()
        with pytest.raises(ArgErr):
            set_property(Config, None, 5, "retries")

    def test_set_when_class_passed_as_instance_then_written_on_declaring_class(self):
        class Tally:
            count = 0
        set_property(None, Tally, 7, "count")
        assert Tally.count == 7

    def test_set_when_class_default_and_no_instance_then_arg_err(self):
        class Tally:
            count = 0
        with pytest.raises(ArgErr):
            set_property(Tally, None, 7, "count")
        assert Tally.count == 0

    def test_get_when_class_passed_for_field_without_class_value_then_arg_err(self):
        with pytest.raises(ArgErr):
            get_property(None, Gauge, "note")


class TestSetProperty:
    """Tests for writing fields."""

    def test_set_then_get_round_trips(self):
        dog = Dog()
        set_property(None, dog, 3, "legs")
        assert get_property(None, dog, "legs") == 3

    def test_set_when_typed_value_then_unwrapped_before_store(self):
        """A TypeMarker never leaks into the stored value."""
        dog = Dog()
        set_property(None, dog, typed(6, int), "legs")
        value = get_property(None, dog, "legs")
        assert value == 6
        assert type(value) is int

    def test_set_when_private_field_then_written(self):
        dog = Dog()
        set_property(Animal, dog, "bacon", "__secret")
        assert get_property(Animal, dog, "__secret") == "bacon"
        assert get_property(Dog, dog, "__secret") == "ball"

    def test_set_when_wrong_type_then_arg_err(self):
        with pytest.raises(ArgErr):
            set_property(None, Dog(), "four", "legs")

    def test_set_when_none_into_reference_field_then_allowed(self):
        dog = Dog()
        set_property(None, dog, None, "legs")
        assert get_property(None, dog, "legs") is None

    def test_set_when_missing_field_then_unknown_slot(self):
        with pytest.raises(UnknownSlotErr):
            set_property(None, Dog(), 1, "tail")

    def test_set_when_frozen_dataclass_then_bypasses_setattr(self):
        p = Point(1, 2)
        set_property(None, p, 5, "x")
        assert p.x == 5

    def test_set_when_slots_class_then_private_slot_written(self):
        pkt = Packet(b"abc", 3)
        assert get_property(None, pkt, "__payload") == b"abc"
        set_property(None, pkt, b"xyz", "__payload")
        assert get_property(None, pkt, "__payload") == b"xyz"
        assert get_property(None, pkt, "size") == 3


class TestPrimitiveFields:
    """Tests for fields declared with a primitive type."""

    def test_set_when_primitive_field_then_value_boxed(self):
        g = Gauge()
        set_property(None, g, 5, "level")
        value = get_property(None, g, "level")
        assert value == 5
        assert isinstance(value, Integer)

    def test_set_when_primitive_typed_value_then_round_trips(self):
        g = Gauge()
        set_property(None, g, typed(9, int_), "level")
        assert get_property(None, g, "level") == 9

    def test_set_when_out_of_range_then_arg_err(self):
        with pytest.raises(ArgErr, match="out of range"):
            set_property(None, Gauge(), 2 ** 40, "level")

    def test_set_when_none_into_primitive_then_null_err(self):
        with pytest.raises(NullErr):
            set_property(None, Gauge(), None, "level")

    def test_field_type_when_primitive_annotation_then_primitive_type(self):
        field = get_field(Gauge, "level")
        assert field.type() is int_
        assert field.type() is not long_


class TestUnderlyingFailures:
    """Tests for failures raised by the underlying attribute access."""

    def test_get_when_attribute_unset_then_reflect_err_with_cause(self):
        with pytest.raises(ReflectErr) as exc:
            get_property(None, Gauge(), "note")
        assert isinstance(exc.value.cause(), AttributeError)
        assert exc.value.__cause__ is exc.value.cause()

    def test_get_when_instance_field_without_instance_then_arg_err(self):
        with pytest.raises(ArgErr):
            get_property(Gauge, None, "note")

    def test_get_when_no_type_and_no_instance_then_null_err(self):
        with pytest.raises(NullErr):
            get_property(None, None, "note")


class TestPropertyFields:
    """Tests for property-backed fields and registered fields."""

    def test_get_when_property_then_getter_called(self):
        assert get_property(None, Thermo(), "kelvin") == pytest.approx(293.15)

    def test_set_when_property_with_setter_then_setter_called(self):
        t = Thermo()
        set_property(None, t, 25.0, "celsius")
        assert t.celsius == 25.0

    def test_set_when_property_without_setter_then_readonly_err(self):
        with pytest.raises(ReadonlyErr):
            set_property(None, Thermo(), 1.0, "kelvin")

    def test_field_when_property_then_flagged_and_typed(self):
        field = get_field(Thermo, "celsius")
        assert field.is_property()
        assert field.type() == Type.of_class(float)

    def test_get_when_attribute_only_assigned_in_init_then_read_from_instance(self):
        assert get_property(None, Thermo(), "_celsius") == 20.0
        assert get_field(Thermo, "_celsius") is None

    def test_af_when_registered_then_field_resolves(self):
        class Sensor:
            def __init__(self):
                self.__raw = 42
        Type.of_class(Sensor).af_("__raw", 0, int)

        field = Type.of_class(Sensor).declared_field("__raw")
        assert field.flags() & FConst.Private
        assert field.storage() == "_Sensor__raw"
        assert get_property(None, Sensor(), "__raw") == 42


class TestTrap:
    """Tests for Obj.trap dynamic access."""

    def test_trap_when_no_args_then_reads_field(self):
        assert Meter(3).trap("reading") == 3

    def test_trap_when_args_then_calls_method(self):
        m = Meter(3)
        assert m.trap("bump", [2]) == 5
        assert m.reading == 5


class TestMultipleInheritance:
    """Tests for fields declared by bases after the first."""

    def test_get_when_field_in_second_base_then_found(self):
        assert get_property(None, Multi(), "limit") == 10
        assert get_field(Multi, "limit").parent() == Type.of_class(Base)

    def test_get_when_abstract_base_declares_field_then_found(self):
        """An ABC with concrete members is a base class, not an interface."""
        assert get_property(None, Square(), "sides") == 4


class TestInstanceAttributes:
    """Tests for attributes assigned in __init__ without a class-body declaration."""

    def test_get_when_plain_instance_attribute_then_read(self):
        assert get_property(None, Plain(), "x") == 1

    def test_get_when_private_instance_attribute_then_read_by_declared_name(self):
        assert get_property(None, Plain(), "__hidden") == 2

    def test_get_when_private_at_two_levels_then_start_type_decides(self):
        sub = SubPlain()
        assert get_property(None, sub, "__hidden") == 3
        assert get_property(Plain, sub, "__hidden") == 2

    def test_get_when_private_of_subclass_then_invisible_from_base(self):
        with pytest.raises(UnknownSlotErr):
            get_property(Plain, SubPlain(), "_SubPlain__hidden")

    def test_field_when_private_instance_attribute_then_attributed_to_mangling_class(self):
        field = get_field(SubPlain, "__hidden", instance=SubPlain())
        assert field.parent() == Type.of_class(SubPlain)
        assert field.is_private()
        assert field.storage() == "_SubPlain__hidden"

    def test_set_then_get_when_instance_attribute_then_round_trips(self):
        p = Plain()
        set_property(None, p, "one", "x")
        set_property(None, p, 9, "__hidden")
        assert get_property(None, p, "x") == "one"
        assert get_property(None, p, "__hidden") == 9

    def test_get_when_subclass_instance_attribute_then_found(self):
        assert get_property(None, Square(3.0), "edge") == 3.0

    def test_get_field_when_no_instance_then_instance_attributes_unknown(self):
        assert get_field(Plain, "x") is None


class TestClassDefaults:
    """Tests for plain class attributes, which are per-instance defaults."""

    def test_get_when_instance_shadows_default_then_instance_value(self):
        d = Defaulted()
        d.count = 5
        assert get_property(None, d, "count") == 5

    def test_set_when_instance_given_then_only_that_instance_changes(self):
        d = Defaulted()
        set_property(None, d, 7, "count")
        assert get_property(None, d, "count") == 7
        assert Defaulted().count == 0
        assert Defaulted.count == 0

    def test_get_when_class_passed_then_class_value(self):
        d = Defaulted()
        d.count = 5
        assert get_property(None, Defaulted, "count") == 0
