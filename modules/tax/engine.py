"""
Tax Engine - Rule Dispatcher

This is the single entry point for tax computations. It:
1. Validates and normalizes a TaxInput (pure predicate, no state)
2. Dispatches to the rule registered for the category
3. Applies the rule's declared polarity (added vs. withheld)
4. Renders the result message in the display locale

The engine is deterministic and side-effect free apart from DEBUG logging:
no I/O, no clock, no shared mutable state. One instance can serve any
number of threads or Streamlit sessions.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Any, Dict, FrozenSet, Optional, Union

from lib.config import get_settings
from lib.formatting import format_amount, format_rate
from lib.utils.logging_config import setup_logger
from modules.tax import messages
from modules.tax.rules import RuleOutcome, get_rule, missing_categories
from modules.tax.tax_models import (
    ExciseSubtype,
    InvalidAmountError,
    MissingCostError,
    NegativeAmountError,
    TaxCategory,
    TaxInput,
    TaxPolarity,
    TaxResult,
    TaxValidationError,
)

logger = setup_logger(__name__)


# Conditional fields a caller must collect, per category
_REQUIRED_FIELDS: Dict[TaxCategory, FrozenSet[str]] = {
    TaxCategory.CAPITAL_GAINS: frozenset({"cost"}),
    TaxCategory.EXCISE: frozenset({"subtype"}),
}


def required_fields(category: Union[TaxCategory, str]) -> FrozenSet[str]:
    """
    Conditional input fields required by a category, beyond category and amount.

    Forms use this to decide which extra inputs to show and require.

    Raises:
        UnsupportedCategoryError: If the category is unknown
    """
    return _REQUIRED_FIELDS.get(TaxCategory.normalize(category), frozenset())


def _to_decimal(value: Any, field: str) -> Decimal:
    if value is None or isinstance(value, bool):
        raise InvalidAmountError(value, field=field)

    if isinstance(value, Decimal):
        number = value
    else:
        try:
            number = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise InvalidAmountError(value, field=field)

    if not number.is_finite():
        raise InvalidAmountError(value, field=field)
    # -0 would pass the sign check and echo as "-0" in results
    if number.is_zero():
        return number.copy_abs()
    return number


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_input(tax_input: TaxInput) -> TaxInput:
    """
    Validate a request and return it normalized.

    Checks run in order: category, amount, then the category's conditional
    field. The returned TaxInput carries enum members and Decimal amounts;
    cost and subtype are dropped for categories that do not use them.

    Raises:
        UnsupportedCategoryError: Unknown category
        InvalidAmountError: Amount or cost is not a finite number
        NegativeAmountError: Amount or cost below zero
        MissingCostError: Capital gains without cost
        InvalidExciseSubtypeError: Excise without a known subtype
    """
    category = TaxCategory.normalize(tax_input.category)

    amount = _to_decimal(tax_input.amount, "amount")
    if amount < 0:
        raise NegativeAmountError(amount)

    cost = None
    subtype = None

    if category == TaxCategory.CAPITAL_GAINS:
        if _is_blank(tax_input.cost):
            raise MissingCostError()
        cost = _to_decimal(tax_input.cost, "cost")
        if cost < 0:
            raise NegativeAmountError(cost, field="cost")

    elif category == TaxCategory.EXCISE:
        subtype = ExciseSubtype.normalize(tax_input.subtype)

    return TaxInput(category=category, amount=amount, cost=cost, subtype=subtype)


class TaxEngine:
    """
    Main entry point for tax calculations.
    Routes each category to its registered rule.
    """

    def __init__(self, locale: Optional[str] = None, currency_symbol: Optional[str] = None):
        """
        Args:
            locale: Message language ("es" or "en"). Defaults to TAX_MESSAGE_LOCALE
            currency_symbol: Symbol used in messages. Defaults to TAX_CURRENCY_SYMBOL

        Raises:
            ValueError: If the locale has no message catalog
            RuntimeError: If a TaxCategory has no registered rule
        """
        settings = get_settings()

        self.locale = (locale or settings.message_locale).lower()
        if self.locale not in messages.MESSAGES:
            raise ValueError(
                f"Unsupported message locale '{self.locale}'. "
                f"Available: {', '.join(sorted(messages.MESSAGES))}"
            )

        self.currency_symbol = settings.currency_symbol if currency_symbol is None else currency_symbol

        missing = missing_categories()
        if missing:
            raise RuntimeError(
                "No tax rule registered for: " + ", ".join(c.value for c in missing)
            )

        self._rules = {category: get_rule(category) for category in TaxCategory}

    def compute(self, tax_input: TaxInput) -> TaxResult:
        """
        Compute the tax for one input.

        Args:
            tax_input: Caller request (amounts in any numeric form)

        Returns:
            TaxResult with exact Decimal amounts

        Raises:
            TaxValidationError: If the input is rejected (see validate_input)
        """
        try:
            validated = validate_input(tax_input)
        except TaxValidationError as e:
            logger.debug(f"Rejected input ({e.code}): {e}")
            raise

        rule = self._rules[validated.category]
        outcome = rule.evaluate(validated)

        if outcome.tax_amount < 0:
            raise AssertionError(f"{rule.describe()} produced negative tax {outcome.tax_amount}")

        base = validated.amount
        tax = outcome.tax_amount
        total = self._apply_polarity(base, tax, rule.POLARITY)

        logger.debug(f"{rule.describe()}: base={base} tax={tax} total={total}")

        return TaxResult(
            base_amount=base,
            tax_amount=tax,
            total_amount=total,
            message=self.render_message(outcome),
            category=validated.category,
            polarity=rule.POLARITY,
            breakdown=dict(outcome.breakdown),
            subtype=validated.subtype,
        )

    def polarity_of(self, category: Union[TaxCategory, str]) -> TaxPolarity:
        """Declared polarity of a category's rule."""
        return self._rules[TaxCategory.normalize(category)].POLARITY

    def render_message(self, outcome: RuleOutcome) -> str:
        """Render a rule outcome's message in this engine's locale."""
        params = {"currency": self.currency_symbol}

        for key, value in outcome.message_params.items():
            if key == "rates":
                params[key] = messages.join_rates((format_rate(r) for r in value), self.locale)
            elif key.endswith("rate"):
                params[key] = format_rate(value)
            else:
                params[key] = format_amount(value)

        return messages.render(outcome.message_key, self.locale, **params)

    @staticmethod
    def _apply_polarity(base: Decimal, tax: Decimal, polarity: TaxPolarity) -> Decimal:
        if polarity == TaxPolarity.WITHHELD:
            return base - tax
        return base + tax


@lru_cache(maxsize=None)
def get_engine(locale: Optional[str] = None) -> TaxEngine:
    """Shared engine per locale (engines are immutable)."""
    return TaxEngine(locale=locale)


def compute(
    category: Union[TaxCategory, str],
    amount: Any,
    cost: Any = None,
    subtype: Union[ExciseSubtype, str, None] = None,
    locale: Optional[str] = None,
) -> TaxResult:
    """
    Convenience wrapper around TaxEngine.compute.

    Example:
        >>> compute(TaxCategory.VALUE_ADDED, 1000).total_amount
        Decimal('1180.00')
    """
    return get_engine(locale).compute(
        TaxInput(category=category, amount=amount, cost=cost, subtype=subtype)
    )
