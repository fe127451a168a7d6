"""
Transfer Taxes

Added on top of the amount:
- Bank transfers and cheques: 0.15%
- Real-estate property transfers: 3%

Withheld from the amount received:
- Inheritance (sucesiones): 3% of the estate
- Gifts (donaciones): 27%
- Capital gains: 25% of (sale price - acquisition cost), individuals only;
  no tax when the sale does not produce a gain

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from decimal import Decimal

from modules.tax.tax_models import TaxCategory, TaxInput, TaxPolarity
from modules.tax.rules.base import FlatRateRule, RuleOutcome, TaxRule, register_rule


@register_rule(TaxCategory.BANK_TRANSFER)
class BankTransferTaxRule(FlatRateRule):
    POLARITY = TaxPolarity.ADDITIVE
    RATE = Decimal("0.0015")
    MESSAGE_KEY = "bank_transfer"


@register_rule(TaxCategory.PROPERTY_TRANSFER)
class PropertyTransferTaxRule(FlatRateRule):
    POLARITY = TaxPolarity.ADDITIVE
    RATE = Decimal("0.03")
    MESSAGE_KEY = "property_transfer"


@register_rule(TaxCategory.INHERITANCE)
class InheritanceTaxRule(FlatRateRule):
    POLARITY = TaxPolarity.WITHHELD
    RATE = Decimal("0.03")
    MESSAGE_KEY = "inheritance"


@register_rule(TaxCategory.GIFT)
class GiftTaxRule(FlatRateRule):
    """Taxed at the corporate income tax rate."""

    POLARITY = TaxPolarity.WITHHELD
    RATE = Decimal("0.27")
    MESSAGE_KEY = "gift"


@register_rule(TaxCategory.CAPITAL_GAINS)
class CapitalGainsTaxRule(TaxRule):
    """
    Capital gains for individuals.

    Key Rules:
    - gain = sale amount - acquisition cost
    - gain <= 0: no tax, the full amount is kept
    - gain > 0: 25% of the gain is withheld from the sale amount
    """

    POLARITY = TaxPolarity.WITHHELD

    RATE = Decimal("0.25")

    def evaluate(self, tax_input: TaxInput) -> RuleOutcome:
        gain = tax_input.amount - tax_input.cost
        breakdown = {"acquisition_cost": tax_input.cost, "gain": gain}

        if gain <= 0:
            return RuleOutcome(
                tax_amount=Decimal(0),
                message_key="capital_gains_none",
                breakdown=breakdown,
            )

        return RuleOutcome(
            tax_amount=gain * self.RATE,
            message_key="capital_gains",
            message_params={"rate": self.RATE},
            breakdown=breakdown,
        )
