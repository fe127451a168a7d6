"""
Consumption Taxes (ITBIS and ISC)

- ITBIS: 18% value-added tax on the transaction amount
- ISC (Impuesto Selectivo al Consumo), by subtype:
  - vehicle: 17% ISC stacked with 18% ITBIS
  - telecom: 10%
  - insurance: 8%
  - cigarettes: flat RD$50 per pack, independent of the amount

Both are added on top of the base amount.

References:
- Código Tributario, Título III (ITBIS) and Título IV (ISC)

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from decimal import Decimal

from modules.tax.tax_models import ExciseSubtype, TaxCategory, TaxInput, TaxPolarity
from modules.tax.rules.base import FlatRateRule, RuleOutcome, TaxRule, register_rule


# Shared with the vehicle excise branch, which stacks ITBIS on top of ISC
ITBIS_RATE = Decimal("0.18")


@register_rule(TaxCategory.VALUE_ADDED)
class ValueAddedTaxRule(FlatRateRule):
    """ITBIS at a flat 18%."""

    POLARITY = TaxPolarity.ADDITIVE
    RATE = ITBIS_RATE
    MESSAGE_KEY = "vat"


@register_rule(TaxCategory.EXCISE)
class ExciseTaxRule(TaxRule):
    """
    ISC selective consumption tax.

    Key Rules:
    - The subtype picks the sub-rule; the engine guarantees it is present
    - Vehicles pay ISC and ITBIS, reported separately in the breakdown
    - Cigarettes pay a flat amount per pack, not a rate
    """

    POLARITY = TaxPolarity.ADDITIVE

    VEHICLE_RATE = Decimal("0.17")
    VEHICLE_ITBIS_RATE = ITBIS_RATE
    TELECOM_RATE = Decimal("0.10")
    INSURANCE_RATE = Decimal("0.08")
    CIGARETTE_FLAT_TAX = Decimal("50")

    def evaluate(self, tax_input: TaxInput) -> RuleOutcome:
        amount = tax_input.amount
        subtype = tax_input.subtype

        if subtype == ExciseSubtype.VEHICLE:
            excise = amount * self.VEHICLE_RATE
            itbis = amount * self.VEHICLE_ITBIS_RATE
            return RuleOutcome(
                tax_amount=excise + itbis,
                message_key="excise_vehicle",
                message_params={
                    "excise_rate": self.VEHICLE_RATE,
                    "vat_rate": self.VEHICLE_ITBIS_RATE,
                },
                breakdown={"excise": excise, "itbis": itbis},
            )

        if subtype == ExciseSubtype.TELECOM:
            return self._rated(amount, self.TELECOM_RATE, "excise_telecom")

        if subtype == ExciseSubtype.INSURANCE:
            return self._rated(amount, self.INSURANCE_RATE, "excise_insurance")

        if subtype == ExciseSubtype.CIGARETTES:
            return RuleOutcome(
                tax_amount=self.CIGARETTE_FLAT_TAX,
                message_key="excise_cigarettes",
                message_params={"flat": self.CIGARETTE_FLAT_TAX},
                breakdown={"excise": self.CIGARETTE_FLAT_TAX},
            )

        # validate_input() rejects anything else before dispatch
        raise AssertionError(f"Unhandled excise subtype: {subtype!r}")

    @staticmethod
    def _rated(amount: Decimal, rate: Decimal, message_key: str) -> RuleOutcome:
        excise = amount * rate
        return RuleOutcome(
            tax_amount=excise,
            message_key=message_key,
            message_params={"rate": rate},
            breakdown={"excise": excise},
        )
