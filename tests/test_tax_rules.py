"""
Unit Tests for Tax Rule System

Tests the rule registry and every category-specific rule.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

import pytest
from decimal import Decimal

from modules.tax.engine import TaxEngine
from modules.tax.rules import (
    CapitalGainsTaxRule,
    ExciseTaxRule,
    IncomeTaxRule,
    NetWorthTaxRule,
    TaxRule,
    ValueAddedTaxRule,
    get_rule,
    list_registered_categories,
    missing_categories,
)
from modules.tax.rules.base import register_rule
from modules.tax.tax_models import ExciseSubtype, TaxCategory, TaxInput, TaxPolarity


@pytest.fixture
def engine():
    """Spanish engine with the default currency symbol."""
    return TaxEngine(locale="es", currency_symbol="RD$")


def compute(engine, category, amount, **kwargs):
    return engine.compute(TaxInput(category=category, amount=Decimal(amount), **kwargs))


class TestRuleRegistry:
    """Test the rule factory and registration system."""

    def test_every_category_has_a_rule(self):
        """Test that no category is left without a rule."""
        assert missing_categories() == []
        assert list_registered_categories() == list(TaxCategory)

    def test_get_rule_returns_registered_class(self):
        rule = get_rule(TaxCategory.VALUE_ADDED)
        assert isinstance(rule, ValueAddedTaxRule)
        assert isinstance(rule, TaxRule)
        assert rule.CATEGORY == TaxCategory.VALUE_ADDED

    def test_duplicate_registration_raises_error(self):
        """Test that a category cannot get a second rule."""
        with pytest.raises(ValueError, match="already registered"):
            @register_rule(TaxCategory.VALUE_ADDED)
            class AnotherVatRule(ValueAddedTaxRule):
                pass

        assert isinstance(get_rule(TaxCategory.VALUE_ADDED), ValueAddedTaxRule)
        assert type(get_rule(TaxCategory.VALUE_ADDED)) is ValueAddedTaxRule

    @pytest.mark.parametrize("category,polarity", [
        (TaxCategory.VALUE_ADDED, TaxPolarity.ADDITIVE),
        (TaxCategory.EXCISE, TaxPolarity.ADDITIVE),
        (TaxCategory.CORPORATE_FORMATION, TaxPolarity.ADDITIVE),
        (TaxCategory.NET_WORTH, TaxPolarity.ADDITIVE),
        (TaxCategory.ASSET, TaxPolarity.ADDITIVE),
        (TaxCategory.BANK_TRANSFER, TaxPolarity.ADDITIVE),
        (TaxCategory.PROPERTY_TRANSFER, TaxPolarity.ADDITIVE),
        (TaxCategory.INCOME, TaxPolarity.WITHHELD),
        (TaxCategory.DIVIDENDS, TaxPolarity.WITHHELD),
        (TaxCategory.INHERITANCE, TaxPolarity.WITHHELD),
        (TaxCategory.GIFT, TaxPolarity.WITHHELD),
        (TaxCategory.CAPITAL_GAINS, TaxPolarity.WITHHELD),
    ])
    def test_declared_polarity(self, category, polarity):
        assert get_rule(category).POLARITY == polarity


class TestValueAddedTax:

    def test_itbis_on_1000(self, engine):
        """
        Scenario:
        - RD$1,000 sale
        - ITBIS: 1,000 * 18% = 180
        - Total: 1,180
        """
        result = compute(engine, TaxCategory.VALUE_ADDED, "1000")

        assert result.base_amount == Decimal("1000")
        assert result.tax_amount == Decimal("180")
        assert result.total_amount == Decimal("1180")
        assert result.message == "ITBIS calculado al 18%."

    def test_zero_amount(self, engine):
        result = compute(engine, TaxCategory.VALUE_ADDED, "0")
        assert result.tax_amount == 0
        assert result.total_amount == 0


class TestIncomeTax:
    """Test the progressive ISR schedule."""

    def test_exempt_up_to_threshold(self, engine):
        result = compute(engine, TaxCategory.INCOME, "416220")

        assert result.tax_amount == Decimal("0")
        assert result.total_amount == Decimal("416220")
        assert result.message == "Exento de ISR (ingreso anual ≤ RD$416,220)."
        assert result.breakdown == {}

    def test_one_cent_over_threshold(self, engine):
        """0.01 over the exemption pays 15% of 0.01."""
        result = compute(engine, TaxCategory.INCOME, "416220.01")

        assert result.tax_amount == Decimal("0.0015")
        assert result.message == "ISR calculado al 15% sobre el exceso de RD$416,220."

    def test_first_bracket_upper_bound(self, engine):
        """
        Scenario:
        - RD$624,329 (top of 15% band)
        - Tax: (624,329 - 416,220) * 15% = 31,216.35
        """
        result = compute(engine, TaxCategory.INCOME, "624329")

        assert result.tax_amount == Decimal("31216.35")
        assert result.message == "ISR calculado al 15% sobre el exceso de RD$416,220."

    def test_second_bracket(self, engine):
        """
        Scenario:
        - RD$700,000 annual income
        - 15% band: 208,109 * 15% = 31,216.35
        - 20% band: 75,671 * 20% = 15,134.20
        - Tax: 46,350.55, net: 653,649.45
        """
        result = compute(engine, TaxCategory.INCOME, "700000")

        assert result.tax_amount == Decimal("46350.55")
        assert result.total_amount == Decimal("653649.45")
        assert result.breakdown == {
            "bracket_15pct": Decimal("31216.35"),
            "bracket_20pct": Decimal("15134.20"),
        }
        assert result.message == "ISR calculado al 15% y 20% según tramos."

    def test_second_bracket_upper_bound(self, engine):
        result = compute(engine, TaxCategory.INCOME, "867123")
        assert result.tax_amount == Decimal("79775.15")

    def test_top_bracket(self, engine):
        """
        Scenario:
        - RD$1,000,000 annual income
        - 15% band: 31,216.35
        - 20% band: 242,794 * 20% = 48,558.80
        - 25% band: 132,877 * 25% = 33,219.25
        - Tax: 112,994.40
        """
        result = compute(engine, TaxCategory.INCOME, "1000000")

        assert result.tax_amount == Decimal("112994.40")
        assert result.breakdown["bracket_25pct"] == Decimal("33219.25")
        assert result.message == "ISR calculado al 15%, 20% y 25% según tramos."

    @pytest.mark.parametrize("threshold,lower_formula,upper_formula", [
        (
            Decimal("624329"),
            (Decimal("624329") - Decimal("416220")) * Decimal("0.15"),
            (Decimal("624329") - Decimal("416220")) * Decimal("0.15")
            + (Decimal("624329") - Decimal("624329")) * Decimal("0.20"),
        ),
        (
            Decimal("867123"),
            (Decimal("624329") - Decimal("416220")) * Decimal("0.15")
            + (Decimal("867123") - Decimal("624329")) * Decimal("0.20"),
            (Decimal("624329") - Decimal("416220")) * Decimal("0.15")
            + (Decimal("867123") - Decimal("624329")) * Decimal("0.20")
            + (Decimal("867123") - Decimal("867123")) * Decimal("0.25"),
        ),
    ])
    def test_continuous_at_thresholds(self, engine, threshold, lower_formula, upper_formula):
        """Both adjacent bracket formulas agree with the engine at the threshold."""
        result = engine.compute(TaxInput(TaxCategory.INCOME, threshold))
        assert lower_formula == upper_formula == result.tax_amount

    def test_brackets_are_ordered(self):
        bounds = [upper for upper, _ in IncomeTaxRule.BRACKETS if upper is not None]
        assert bounds == sorted(bounds)
        assert IncomeTaxRule.BRACKETS[-1][0] is None


class TestYearEndBonus:

    def test_bonus_is_not_taxed(self, engine):
        result = compute(engine, TaxCategory.YEAR_END_BONUS, "45000")

        assert result.tax_amount == 0
        assert result.total_amount == Decimal("45000")
        assert "no gravada con ISR" in result.message


class TestExciseTax:
    """Test ISC sub-rules."""

    def test_vehicle_stacks_excise_and_itbis(self, engine):
        """
        Scenario:
        - RD$1,000 vehicle
        - ISC: 17% = 170, ITBIS: 18% = 180
        - Tax: 350, total: 1,350
        """
        result = compute(engine, TaxCategory.EXCISE, "1000", subtype=ExciseSubtype.VEHICLE)

        assert result.tax_amount == Decimal("350")
        assert result.total_amount == Decimal("1350")
        assert result.breakdown == {"excise": Decimal("170"), "itbis": Decimal("180")}
        assert result.message == "Impuesto a vehículos: 17% ISC + 18% ITBIS."

    def test_telecom(self, engine):
        result = compute(engine, TaxCategory.EXCISE, "2500", subtype=ExciseSubtype.TELECOM)
        assert result.tax_amount == Decimal("250")
        assert result.total_amount == Decimal("2750")
        assert result.message == "ISC calculado al 10% para telecomunicaciones."

    def test_insurance(self, engine):
        result = compute(engine, TaxCategory.EXCISE, "12000", subtype=ExciseSubtype.INSURANCE)
        assert result.tax_amount == Decimal("960")
        assert result.message == "ISC calculado al 8% para seguros."

    @pytest.mark.parametrize("amount", ["0", "1", "300", "1000000"])
    def test_cigarettes_flat_regardless_of_amount(self, engine, amount):
        result = compute(engine, TaxCategory.EXCISE, amount, subtype=ExciseSubtype.CIGARETTES)

        assert result.tax_amount == ExciseTaxRule.CIGARETTE_FLAT_TAX == Decimal("50")
        assert result.total_amount == Decimal(amount) + 50
        assert result.message == "ISC fijo de RD$50 por cajetilla de cigarrillos."


class TestDividendTax:

    def test_withheld_from_dividend(self, engine):
        result = compute(engine, TaxCategory.DIVIDENDS, "80000")
        assert result.tax_amount == Decimal("8000")
        assert result.total_amount == Decimal("72000")


class TestCorporateFormationTax:

    def test_minimum_applies_to_small_capital(self, engine):
        """1% of 50,000 is 500, below the RD$1,000 minimum."""
        result = compute(engine, TaxCategory.CORPORATE_FORMATION, "50000")

        assert result.tax_amount == Decimal("1000")
        assert result.total_amount == Decimal("51000")
        assert result.breakdown["rate_based_tax"] == Decimal("500")
        assert result.message == (
            "Impuesto a la constitución de empresas al 1% del capital social (mínimo RD$1,000)."
        )

    def test_rate_applies_above_minimum(self, engine):
        result = compute(engine, TaxCategory.CORPORATE_FORMATION, "200000")
        assert result.tax_amount == Decimal("2000")

    def test_minimum_for_zero_capital(self, engine):
        result = compute(engine, TaxCategory.CORPORATE_FORMATION, "0")
        assert result.tax_amount == Decimal("1000")


class TestNetWorthTax:

    def test_threshold_is_exempt(self, engine):
        result = compute(engine, TaxCategory.NET_WORTH, "10190833")

        assert result.tax_amount == 0
        assert result.total_amount == Decimal("10190833")
        assert result.message == "Exento de IPI (patrimonio ≤ RD$10,190,833)."

    def test_excess_over_threshold(self, engine):
        """
        Scenario:
        - RD$11,190,833 patrimony
        - Excess: 1,000,000 * 1% = 10,000
        """
        result = compute(engine, TaxCategory.NET_WORTH, "11190833")

        assert result.tax_amount == Decimal("10000")
        assert result.total_amount == Decimal("11200833")
        assert result.breakdown["taxable_excess"] == Decimal("1000000")
        assert result.message == "IPI calculado al 1% sobre el exceso de RD$10,190,833."

    def test_threshold_constant(self):
        assert NetWorthTaxRule.EXEMPT_THRESHOLD == Decimal("10190833")


class TestFlatRateTaxes:
    """Asset, transfer, inheritance and gift taxes."""

    @pytest.mark.parametrize("category,amount,tax,total", [
        (TaxCategory.ASSET, "2000000", "20000", "2020000"),
        (TaxCategory.BANK_TRANSFER, "150000", "225", "150225"),
        (TaxCategory.PROPERTY_TRANSFER, "4500000", "135000", "4635000"),
        (TaxCategory.INHERITANCE, "3000000", "90000", "2910000"),
        (TaxCategory.GIFT, "500000", "135000", "365000"),
    ])
    def test_flat_rates(self, engine, category, amount, tax, total):
        result = compute(engine, category, amount)
        assert result.tax_amount == Decimal(tax)
        assert result.total_amount == Decimal(total)

    def test_bank_transfer_message(self, engine):
        result = compute(engine, TaxCategory.BANK_TRANSFER, "1000")
        assert result.message == "Impuesto a transferencias bancarias/cheques calculado al 0.15%."


class TestCapitalGainsTax:

    def test_gain_is_taxed(self, engine):
        """
        Scenario:
        - Sold for 900,000, bought for 600,000
        - Gain: 300,000 * 25% = 75,000
        - Net proceeds: 825,000
        """
        result = compute(engine, TaxCategory.CAPITAL_GAINS, "900000", cost=Decimal("600000"))

        assert result.tax_amount == Decimal("75000")
        assert result.total_amount == Decimal("825000")
        assert result.breakdown["gain"] == Decimal("300000")
        assert result.message == "Impuesto a la ganancia de capital calculado al 25% sobre la ganancia."

    def test_loss_is_not_taxed(self, engine):
        result = compute(engine, TaxCategory.CAPITAL_GAINS, "500", cost=Decimal("700"))

        assert result.tax_amount == 0
        assert result.total_amount == Decimal("500")
        assert result.breakdown["gain"] == Decimal("-200")
        assert result.message == "No hay ganancia de capital (precio de venta ≤ costo de adquisición)."

    def test_break_even_is_not_taxed(self, engine):
        result = compute(engine, TaxCategory.CAPITAL_GAINS, "700", cost=Decimal("700"))
        assert result.tax_amount == 0
        assert result.total_amount == Decimal("700")

    def test_rate_constant(self):
        assert CapitalGainsTaxRule.RATE == Decimal("0.25")
