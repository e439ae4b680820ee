"""Rule-based validation for ValidatedObject types.

Usage:
    from domainobjects.validation import RequiredValidator, LengthValidator

    class Customer(ValidatedObject):
        name = data_property(str, order=0)

        def create_rules(self):
            return [RequiredValidator("name"), LengthValidator("name", 1, 40)]
"""
from .validators import (
    REQUIRED_MESSAGE,
    Validator,
    RequiredValidator,
    LengthValidator,
    RegexValidator,
    DomainValidator,
    DelegateValidator,
    AndCompositeValidator,
    XorRequiredValidator,
)
from .report import BrokenRuleDetail

__all__ = [
    "REQUIRED_MESSAGE",
    "Validator",
    "RequiredValidator",
    "LengthValidator",
    "RegexValidator",
    "DomainValidator",
    "DelegateValidator",
    "AndCompositeValidator",
    "XorRequiredValidator",
    "BrokenRuleDetail",
]
