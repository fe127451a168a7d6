"""
Income Taxes (ISR, Regalía Pascual, Dividendos)

Implements the personal income tax schedule:
- Annual income up to RD$416,220 is exempt
- 15% on the portion between RD$416,220.01 and RD$624,329
- 20% on the portion between RD$624,329.01 and RD$867,123
- 25% on the portion above RD$867,123

The schedule is progressive: each rate applies only to the income inside
its band, so the tax is continuous at every threshold.

Also covers:
- Regalía pascual (year-end bonus): not subject to ISR
- Dividends: 10% single withholding

Income tax and dividend tax are withheld from the base amount.

References:
- Ley 11-92, Art. 296 (escala ISR personas físicas)
- Ley 11-92, Art. 308 (retención sobre dividendos)

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from decimal import Decimal
from typing import List, Optional, Tuple

from modules.tax.tax_models import TaxCategory, TaxInput, TaxPolarity
from modules.tax.rules.base import FlatRateRule, RuleOutcome, TaxRule, register_rule


# (upper bound of band, marginal rate); None = no upper bound
IncomeBracket = Tuple[Optional[Decimal], Decimal]


@register_rule(TaxCategory.INCOME)
class IncomeTaxRule(TaxRule):
    """
    Progressive ISR schedule.

    Key Rules:
    - Bands are evaluated in order; amounts above a band's upper bound
      spill into the next band
    - Zero-rate bands never appear in the breakdown
    """

    POLARITY = TaxPolarity.WITHHELD

    BRACKETS: List[IncomeBracket] = [
        (Decimal("416220"), Decimal("0")),
        (Decimal("624329"), Decimal("0.15")),
        (Decimal("867123"), Decimal("0.20")),
        (None, Decimal("0.25")),
    ]

    @property
    def exempt_threshold(self) -> Decimal:
        return self.BRACKETS[0][0]

    def evaluate(self, tax_input: TaxInput) -> RuleOutcome:
        amount = tax_input.amount

        total_tax = Decimal(0)
        breakdown = {}
        applied_rates = []
        lower = Decimal(0)

        for upper, rate in self.BRACKETS:
            if amount <= lower:
                break

            band_top = amount if upper is None else min(amount, upper)
            taxable_in_band = band_top - lower

            if rate > 0 and taxable_in_band > 0:
                tax_in_band = taxable_in_band * rate
                total_tax += tax_in_band
                breakdown[f"bracket_{int(rate * 100)}pct"] = tax_in_band
                applied_rates.append(rate)

            if upper is None:
                break
            lower = upper

        if not applied_rates:
            return RuleOutcome(
                tax_amount=Decimal(0),
                message_key="income_exempt",
                message_params={"threshold": self.exempt_threshold},
            )

        if len(applied_rates) == 1:
            return RuleOutcome(
                tax_amount=total_tax,
                message_key="income_first_bracket",
                message_params={"rate": applied_rates[0], "threshold": self.exempt_threshold},
                breakdown=breakdown,
            )

        return RuleOutcome(
            tax_amount=total_tax,
            message_key="income_brackets",
            message_params={"rates": applied_rates},
            breakdown=breakdown,
        )


@register_rule(TaxCategory.YEAR_END_BONUS)
class YearEndBonusRule(TaxRule):
    """Regalía pascual: informational only, no tax."""

    POLARITY = TaxPolarity.ADDITIVE

    def evaluate(self, tax_input: TaxInput) -> RuleOutcome:
        return RuleOutcome(tax_amount=Decimal(0), message_key="year_end_bonus")


@register_rule(TaxCategory.DIVIDENDS)
class DividendTaxRule(FlatRateRule):
    """10% single withholding on dividends."""

    POLARITY = TaxPolarity.WITHHELD
    RATE = Decimal("0.10")
    MESSAGE_KEY = "dividends"
