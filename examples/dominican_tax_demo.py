"""
Dominican Tax Calculator - Usage Example

Runs one sample computation per tax category and prints the breakdown.

Usage:
    python examples/dominican_tax_demo.py [es|en]

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from decimal import Decimal

from lib.formatting import format_currency
from modules.tax.engine import TaxEngine
from modules.tax.tax_models import ExciseSubtype, TaxCategory, TaxInput, TaxValidationError


SAMPLES = [
    TaxInput(TaxCategory.VALUE_ADDED, Decimal("1000")),
    TaxInput(TaxCategory.INCOME, Decimal("350000")),
    TaxInput(TaxCategory.INCOME, Decimal("700000")),
    TaxInput(TaxCategory.INCOME, Decimal("1200000")),
    TaxInput(TaxCategory.YEAR_END_BONUS, Decimal("45000")),
    TaxInput(TaxCategory.EXCISE, Decimal("1000"), subtype=ExciseSubtype.VEHICLE),
    TaxInput(TaxCategory.EXCISE, Decimal("2500"), subtype=ExciseSubtype.TELECOM),
    TaxInput(TaxCategory.EXCISE, Decimal("12000"), subtype=ExciseSubtype.INSURANCE),
    TaxInput(TaxCategory.EXCISE, Decimal("300"), subtype=ExciseSubtype.CIGARETTES),
    TaxInput(TaxCategory.DIVIDENDS, Decimal("80000")),
    TaxInput(TaxCategory.CORPORATE_FORMATION, Decimal("50000")),
    TaxInput(TaxCategory.NET_WORTH, Decimal("11190833")),
    TaxInput(TaxCategory.ASSET, Decimal("2000000")),
    TaxInput(TaxCategory.BANK_TRANSFER, Decimal("150000")),
    TaxInput(TaxCategory.PROPERTY_TRANSFER, Decimal("4500000")),
    TaxInput(TaxCategory.INHERITANCE, Decimal("3000000")),
    TaxInput(TaxCategory.GIFT, Decimal("500000")),
    TaxInput(TaxCategory.CAPITAL_GAINS, Decimal("900000"), cost=Decimal("600000")),
    TaxInput(TaxCategory.CAPITAL_GAINS, Decimal("500"), cost=Decimal("700")),
    # Rejected: capital gains without cost
    TaxInput(TaxCategory.CAPITAL_GAINS, Decimal("500")),
]


def main():
    """Demonstrate the tax engine on every category."""
    locale = sys.argv[1] if len(sys.argv) > 1 else None
    engine = TaxEngine(locale=locale)

    print("=" * 78)
    print(f"Dominican Tax Calculator - Demo (messages: {engine.locale})")
    print("=" * 78)

    for tax_input in SAMPLES:
        label = tax_input.category.label
        if tax_input.subtype:
            label += f" / {tax_input.subtype.label}"
        print()
        print(label)

        try:
            result = engine.compute(tax_input)
        except TaxValidationError as e:
            print(f"  Rejected ({e.code}): {e}")
            continue

        print(f"  Base:   {format_currency(result.base_amount):>20}")
        print(f"  Tax:    {format_currency(result.tax_amount):>20}  ({result.polarity.value})")
        print(f"  Total:  {format_currency(result.total_amount):>20}")
        for name, value in result.breakdown.items():
            print(f"    {name:<18}{format_currency(value):>20}")
        print(f"  {result.message}")

    print()
    print("=" * 78)


if __name__ == "__main__":
    main()
