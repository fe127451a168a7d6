"""
Abstract Base Class for Tax Rules

Defines the interface that every per-category tax rule implements.
A rule takes a validated TaxInput and produces a RuleOutcome (tax amount,
message key, breakdown). Turning the outcome into a TaxResult, including
applying the rule's polarity, is the engine's job.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Type

from modules.tax.tax_models import TaxCategory, TaxInput, TaxPolarity


@dataclass(frozen=True)
class RuleOutcome:
    """
    What a rule computed, before polarity and message rendering.

    message_params holds raw values: keys ending in "rate" are fractional
    rates, "rates" is a list of them, everything else is an amount.
    """

    tax_amount: Decimal
    message_key: str
    message_params: Dict[str, Any] = field(default_factory=dict)
    breakdown: Dict[str, Decimal] = field(default_factory=dict)


class TaxRule(ABC):
    """
    Abstract base class for category-specific tax rules.

    Each subclass implements one TaxCategory. Rates and thresholds are
    class constants so a rate change touches exactly one line.
    """

    CATEGORY: TaxCategory
    POLARITY: TaxPolarity = TaxPolarity.ADDITIVE

    @abstractmethod
    def evaluate(self, tax_input: TaxInput) -> RuleOutcome:
        """
        Compute the tax for a validated input.

        Args:
            tax_input: Input with Decimal amounts and normalized enums

        Returns:
            RuleOutcome with a non-negative tax amount
        """
        pass

    def describe(self) -> str:
        """Human-readable rule name for logs."""
        return f"{type(self).__name__} ({self.CATEGORY.value}, {self.POLARITY.value})"


class FlatRateRule(TaxRule):
    """Rule of the form tax = amount * RATE."""

    RATE: Decimal
    MESSAGE_KEY: str

    def evaluate(self, tax_input: TaxInput) -> RuleOutcome:
        return RuleOutcome(
            tax_amount=tax_input.amount * self.RATE,
            message_key=self.MESSAGE_KEY,
            message_params={"rate": self.RATE},
        )


# Registry of available rules
_RULE_REGISTRY: Dict[TaxCategory, Type[TaxRule]] = {}


def register_rule(category: TaxCategory):
    """
    Decorator to register a tax rule class for a category.

    Usage:
        @register_rule(TaxCategory.VALUE_ADDED)
        class ValueAddedTaxRule(FlatRateRule):
            ...

    Raises:
        ValueError: If the category already has a rule
    """
    def decorator(cls: Type[TaxRule]):
        if category in _RULE_REGISTRY:
            raise ValueError(
                f"Tax rule for '{category.value}' already registered: "
                f"{_RULE_REGISTRY[category].__name__}"
            )
        cls.CATEGORY = category
        _RULE_REGISTRY[category] = cls
        return cls
    return decorator


def get_rule(category: TaxCategory) -> TaxRule:
    """
    Factory method to get a rule instance.

    Args:
        category: Tax category

    Returns:
        Instance of the registered TaxRule subclass

    Raises:
        ValueError: If no rule is registered for the category
    """
    if category not in _RULE_REGISTRY:
        available = ", ".join(c.value for c in list_registered_categories())
        raise ValueError(
            f"Tax rule for '{category}' not found. "
            f"Available: {available}"
        )

    return _RULE_REGISTRY[category]()


def list_registered_categories() -> List[TaxCategory]:
    """
    Get all categories that have a registered rule.

    Returns:
        Categories in TaxCategory declaration order
    """
    return [category for category in TaxCategory if category in _RULE_REGISTRY]


def missing_categories() -> List[TaxCategory]:
    """Categories without a registered rule (should always be empty)."""
    return [category for category in TaxCategory if category not in _RULE_REGISTRY]
