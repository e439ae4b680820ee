"""Tests for broken-rule evaluation, error aggregation and emptiness."""
import pytest

from domainobjects import (
    AndCompositeValidator,
    BrokenRuleDetail,
    ConfigurationError,
    DelegateValidator,
    LengthValidator,
    RequiredValidator,
    ValidatedObject,
    child_property,
    data_property,
)

from sample_objects import Address, Bare, Contact, Customer, OrderLine, Parent, SimpleObject


class TestBrokenRules:
    def test_no_rules_means_valid(self, simple_object):
        assert simple_object.get_broken_rules() == ()
        assert simple_object.error is None
        assert simple_object.is_valid

    def test_new_instance_breaks_required_only(self, complex_object):
        broken = complex_object.get_broken_rules()
        assert len(broken) == 1
        assert isinstance(broken[0], RequiredValidator)
        assert broken[0].property_name == "required_property"
        assert complex_object["required_property"] is not None
        assert complex_object.error is not None
        assert not complex_object.is_valid

    def test_setting_required_value_fixes_object(self, complex_object):
        complex_object.required_property = "value"
        assert complex_object.get_broken_rules() == ()
        assert complex_object["required_property"] is None
        assert complex_object.error is None
        assert complex_object.is_valid

    def test_scoped_to_property(self, rules_object):
        rules_object.length_property = "toolong"
        assert len(rules_object.get_broken_rules()) == 2
        scoped = rules_object.get_broken_rules("length_property")
        assert len(scoped) == 1
        assert isinstance(scoped[0], LengthValidator)

    def test_empty_or_none_name_means_all(self, rules_object):
        rules_object.length_property = "toolong"
        assert rules_object.get_broken_rules("") == rules_object.get_broken_rules()
        assert rules_object.get_broken_rules(None) == rules_object.get_broken_rules()
        assert rules_object.get_broken_rules("  ") == rules_object.get_broken_rules()

    def test_unknown_property_yields_nothing(self, complex_object):
        assert complex_object.get_broken_rules("non_existing_property") == ()
        assert complex_object["non_existing_property"] is None

    def test_rule_order_is_preserved(self, rules_object):
        rules_object.length_property = "toolong"
        kinds = [type(rule) for rule in rules_object.get_broken_rules()]
        assert kinds == [LengthValidator, RequiredValidator]

    def test_rules_created_once_per_instance(self):
        calls = []

        class Counting(ValidatedObject):
            name = data_property(str)

            def create_rules(self):
                calls.append(self)
                return [RequiredValidator("name")]

        first, second = Counting(), Counting()
        first.get_broken_rules()
        first.get_broken_rules()
        assert second.error is not None
        assert calls == [first, second]

    def test_rules_evaluated_fresh_each_time(self, rules_object):
        rules_object.length_property = "toolong"
        assert rules_object["length_property"] is not None
        rules_object.length_property = "ok"
        assert rules_object["length_property"] is None

    def test_misconfigured_rule_raises_on_evaluation(self):
        class Misconfigured(ValidatedObject):
            name = data_property(str)

            def create_rules(self):
                return [RequiredValidator("nmae")]

        obj = Misconfigured()
        with pytest.raises(ConfigurationError):
            obj.get_broken_rules()


class TestErrorText:
    def test_property_error_line(self, rules_object):
        assert rules_object["required_property"] == "required_propertyrequired_property: Required."

    def test_named_lookup_prefixes_each_line(self, rules_object):
        rules_object.length_property = "toolong"
        assert rules_object["length_property"] == (
            "length_propertylength_property: Length must be between 1 and 5."
        )

    def test_own_errors_are_joined(self, rules_object):
        rules_object.length_property = "toolong"
        assert rules_object.error_for("") == (
            "length_property: Length must be between 1 and 5.\n"
            "required_property: Required."
        )

    def test_nested_child_error_is_path_qualified(self):
        parent = Parent(title="Report")
        assert parent.error == "child: Required.\nchild.name: Required."

    def test_own_errors_precede_child_errors(self):
        parent = Parent()
        assert parent.error.splitlines() == [
            "title: Required.",
            "child: Required.",
            "child.name: Required.",
        ]

    def test_fixing_child_fixes_parent(self):
        parent = Parent(title="Report")
        parent.child.name = "Appendix"
        assert parent.error is None
        assert parent.is_valid

    def test_collection_errors_are_indexed(self):
        customer = Customer(lines=[OrderLine(sku="A"), OrderLine(quantity=2)])
        customer.address.city = "London"
        assert customer.error == "lines[1].sku: Required."

    def test_child_with_content_reports_its_broken_rules(self):
        customer = Customer()
        customer.address.street = "1 Way"
        assert customer.error == "address.city: Required."

    def test_whole_object_rule_has_no_path(self):
        contact = Contact()
        assert contact.error == ": Required."
        assert contact[""] == ": Required."
        contact.email = "a@b.c"
        assert contact.is_valid


class Silent(ValidatedObject):
    note = data_property(str)

    def create_rules(self):
        return [DelegateValidator(None, "", lambda obj: obj.note is not None)]


class SilentComposite(ValidatedObject):
    note = data_property(str)

    def create_rules(self):
        return [AndCompositeValidator(None, [
            DelegateValidator(None, "", lambda obj: obj.note is not None),
            DelegateValidator(None, "", lambda obj: obj.note != "x"),
        ])]


class Holder(ValidatedObject):
    label = data_property(str, order=0)
    inner = child_property(Silent, order=1)


class TestErrorPresence:
    """``error`` is None exactly when nothing in the subtree is broken."""

    def test_whole_object_rule_without_description(self):
        obj = Silent()
        assert len(obj.get_broken_rules()) == 1
        assert obj.error == ":"
        assert not obj.is_valid

    def test_whole_object_composite_of_silent_rules(self):
        obj = SilentComposite()
        assert len(obj.get_broken_rules()) == 1
        assert obj.error is not None
        assert not obj.is_valid
        obj.note = "ok"
        assert obj.error is None
        assert obj.is_valid

    def test_only_children_broken(self):
        holder = Holder(label="x")
        assert holder.error_for("") is None
        assert holder.error == "inner.:"
        assert not holder.is_valid
        holder.inner.note = "set"
        assert holder.error is None
        assert holder.is_valid

    def test_named_rule_without_description(self):
        class Named(ValidatedObject):
            code = data_property(str)

            def create_rules(self):
                return [DelegateValidator("code", "", lambda obj: False)]

        obj = Named()
        assert obj["code"] == "codecode:"
        assert obj.error == "code:"

    @pytest.mark.parametrize("factory", [Silent, SilentComposite, Holder, Contact, Parent])
    def test_error_tracks_report(self, factory):
        obj = factory()
        assert (obj.error is None) == (obj.validation_report() == [])
        assert obj.is_valid == (obj.error is None)


class TestValidationReport:
    def test_report_matches_error_lines(self):
        customer = Customer(lines=[OrderLine()])
        customer.address.street = "1 Way"
        report = customer.validation_report()
        assert all(isinstance(detail, BrokenRuleDetail) for detail in report)
        assert [detail.line for detail in report] == customer.error.splitlines()
        assert [detail.path for detail in report] == ["address.city", "lines[0].sku"]

    def test_report_detail_as_dict(self):
        detail = Parent(title="x").validation_report()[0]
        assert detail.to_dict() == {"path": "child", "description": "Required.", "rule": "RequiredValidator"}

    def test_valid_object_has_empty_report(self):
        assert SimpleObject().validation_report() == []


class TestEmptiness:
    def test_new_instance_is_empty(self, simple_object):
        assert simple_object.is_empty()

    def test_type_without_properties_is_empty(self):
        assert Bare().is_empty()

    def test_any_text_value_makes_non_empty(self, simple_object):
        simple_object.simple_property = "x"
        assert not simple_object.is_empty()

    def test_empty_text_is_empty(self, simple_object):
        simple_object.simple_property = ""
        assert simple_object.is_empty()

    def test_child_emptiness_propagates(self):
        customer = Customer()
        assert customer.is_empty()
        customer.address.city = "London"
        assert not customer.is_empty()

    def test_collection_with_elements_is_not_empty(self):
        assert not Customer(lines=[OrderLine()]).is_empty()

    def test_non_text_scalar_counts_when_set(self):
        assert not Customer(active=False).is_empty()
        assert not OrderLine(quantity=0).is_empty()

    def test_address_empty_after_clearing(self):
        address = Address(city="London")
        address.city = None
        assert address.is_empty()
