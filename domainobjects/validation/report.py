"""Structured Broken-Rule Report

The ``error`` text of a ValidatedObject is the human-readable surface.
``BrokenRuleDetail`` carries the same information as data: one record per
broken rule anywhere in the object graph, with the dotted path leading
from the root object to the failing property and the exact line it
contributes to the error text.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .validators import Validator


@dataclass(frozen=True, slots=True)
class BrokenRuleDetail:
    """A broken rule located in the object graph.

    - path: dotted path to the failing property (e.g. "address.city",
      "orders[1].sku"); the rule's own property name at the root
    - description: the rule's description at evaluation time
    - validator: the broken rule itself
    - line: "<scope><rule property>: <description>", qualified by the
      holding properties; never empty, even for a whole-object rule
      with no description (": ")
    """
    path: str
    description: str
    validator: Validator
    line: str

    @classmethod
    def for_rule(cls, rule: Validator, scope: str = "") -> BrokenRuleDetail:
        description = rule.description or ""
        return cls(
            path=rule.property_name,
            description=description,
            validator=rule,
            line=f"{scope}{rule.property_name}: {description}",
        )

    def with_prefix(self, prefix: str) -> BrokenRuleDetail:
        """Qualify the path and line with the name of the property that holds it."""
        path = f"{prefix}.{self.path}" if self.path else prefix
        return BrokenRuleDetail(
            path=path,
            description=self.description,
            validator=self.validator,
            line=f"{prefix}.{self.line}",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "description": self.description,
            "rule": type(self.validator).__name__,
        }
