"""
Patrimony Taxes (Constitución, IPI, Activos)

- Company formation: 1% of share capital, minimum RD$1,000
- IPI (net worth / real-estate patrimony): 1% of the excess over the
  exemption threshold of RD$10,190,833
- Asset tax: 1% of assets (creditable against ISR)

All three are added on top of the base amount.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from decimal import Decimal

from modules.tax.tax_models import TaxCategory, TaxInput, TaxPolarity
from modules.tax.rules.base import FlatRateRule, RuleOutcome, TaxRule, register_rule


@register_rule(TaxCategory.CORPORATE_FORMATION)
class CorporateFormationTaxRule(TaxRule):
    """1% of share capital with a fixed minimum."""

    POLARITY = TaxPolarity.ADDITIVE

    RATE = Decimal("0.01")
    MINIMUM_TAX = Decimal("1000")

    def evaluate(self, tax_input: TaxInput) -> RuleOutcome:
        rate_based = tax_input.amount * self.RATE
        return RuleOutcome(
            tax_amount=max(rate_based, self.MINIMUM_TAX),
            message_key="corporate_formation",
            message_params={"rate": self.RATE, "minimum": self.MINIMUM_TAX},
            breakdown={"rate_based_tax": rate_based, "minimum_tax": self.MINIMUM_TAX},
        )


@register_rule(TaxCategory.NET_WORTH)
class NetWorthTaxRule(TaxRule):
    """
    IPI on patrimony above the exemption threshold.

    The threshold itself is exempt: amount == threshold pays nothing.
    """

    POLARITY = TaxPolarity.ADDITIVE

    RATE = Decimal("0.01")
    EXEMPT_THRESHOLD = Decimal("10190833")

    def evaluate(self, tax_input: TaxInput) -> RuleOutcome:
        amount = tax_input.amount

        if amount <= self.EXEMPT_THRESHOLD:
            return RuleOutcome(
                tax_amount=Decimal(0),
                message_key="net_worth_exempt",
                message_params={"threshold": self.EXEMPT_THRESHOLD},
                breakdown={"taxable_excess": Decimal(0)},
            )

        excess = amount - self.EXEMPT_THRESHOLD
        return RuleOutcome(
            tax_amount=excess * self.RATE,
            message_key="net_worth",
            message_params={"rate": self.RATE, "threshold": self.EXEMPT_THRESHOLD},
            breakdown={"taxable_excess": excess},
        )


@register_rule(TaxCategory.ASSET)
class AssetTaxRule(FlatRateRule):
    """1% asset tax."""

    POLARITY = TaxPolarity.ADDITIVE
    RATE = Decimal("0.01")
    MESSAGE_KEY = "asset"
