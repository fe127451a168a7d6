"""
Tax Module

Deterministic tax computation engine for Dominican taxes.

Features:
- Closed set of tax categories with one registered rule each
- Rates and thresholds as named constants on the rule classes
- Explicit polarity per category (tax added to or withheld from the base)
- Exact Decimal arithmetic, typed validation errors

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

__all__ = ['engine', 'rules', 'tax_models', 'messages']
