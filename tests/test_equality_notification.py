"""Tests for structural equality, hashing and change notification."""
from decimal import Decimal

import pytest

from sample_objects import Address, ComplexObject, Customer, OrderLine, SimpleObject


class TestEquality:
    def test_new_instances_are_equal(self):
        assert SimpleObject() == SimpleObject()
        assert hash(SimpleObject()) == hash(SimpleObject())

    def test_equal_values(self):
        a = SimpleObject(simple_property="x", another_property="y")
        b = SimpleObject(simple_property="x", another_property="y")
        assert a == b
        assert hash(a) == hash(b)

    def test_different_values(self):
        assert SimpleObject(simple_property="x") != SimpleObject(simple_property="y")

    def test_different_types_are_never_equal(self):
        assert ComplexObject() != SimpleObject()
        assert SimpleObject() != "SimpleObject"

    def test_subclass_is_a_different_type(self):
        class Special(SimpleObject):
            pass

        assert Special() != SimpleObject()

    def test_nested_graph_equality(self, customer):
        other = Customer(
            name=customer.name,
            born=customer.born,
            active=customer.active,
            address=Address(street=customer.address.street, city=customer.address.city),
            lines=[OrderLine(sku=line.sku, quantity=line.quantity, unit_price=line.unit_price)
                   for line in customer.lines],
            created=customer.created,
            rating=customer.rating,
        )
        assert other == customer
        assert hash(other) == hash(customer)

        other.lines[1].quantity = 5
        assert other != customer

    def test_numerically_equal_decimals(self):
        assert OrderLine(unit_price=Decimal("1.5")) == OrderLine(unit_price=Decimal("1.50"))
        assert hash(OrderLine(unit_price=Decimal("1.5"))) == hash(OrderLine(unit_price=Decimal("1.50")))

    def test_hash_is_stable_between_calls(self, customer):
        assert hash(customer) == hash(customer)

    def test_usable_in_sets(self):
        items = {SimpleObject(simple_property="x"), SimpleObject(simple_property="x"), SimpleObject()}
        assert len(items) == 2


class TestNotification:
    @pytest.fixture
    def events(self):
        return []

    @pytest.fixture
    def observed(self, events):
        obj = SimpleObject()
        obj.add_property_changed_listener(lambda sender, name: events.append(("property", sender, name)))
        obj.add_validity_changed_listener(lambda sender: events.append(("validity", sender)))
        return obj

    def test_assignment_notifies_property_then_validity(self, observed, events):
        observed.simple_property = "x"
        assert events == [("property", observed, "simple_property"), ("validity", observed)]

    def test_every_assignment_notifies(self, observed, events):
        observed.simple_property = "x"
        observed.simple_property = "x"
        assert len(events) == 4

    def test_notify_many(self, observed, events):
        observed.notify_changed("simple_property", "another_property")
        assert [event[0] for event in events] == ["property", "property", "validity"]
        assert [event[2] for event in events[:2]] == ["simple_property", "another_property"]

    def test_listeners_called_in_registration_order(self):
        calls = []
        obj = SimpleObject()
        obj.add_property_changed_listener(lambda sender, name: calls.append("first"))
        obj.add_property_changed_listener(lambda sender, name: calls.append("second"))
        obj.another_property = "y"
        assert calls == ["first", "second"]

    def test_removed_listener_is_not_called(self):
        calls = []

        def listener(sender, name):
            calls.append(name)

        obj = SimpleObject()
        obj.add_property_changed_listener(listener)
        obj.remove_property_changed_listener(listener)
        obj.simple_property = "x"
        assert calls == []

    def test_collection_assignment_notifies(self):
        changed = []
        customer = Customer()
        customer.add_property_changed_listener(lambda sender, name: changed.append(name))
        customer.lines = [OrderLine(sku="A")]
        assert changed == ["lines"]

