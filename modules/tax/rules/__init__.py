"""
Tax Rule System

Per-category rule implementations. Importing this package registers every
rule with the registry in base.py.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from .base import TaxRule, RuleOutcome, get_rule, list_registered_categories, missing_categories
from .consumption import ValueAddedTaxRule, ExciseTaxRule
from .income import IncomeTaxRule, YearEndBonusRule, DividendTaxRule
from .patrimony import CorporateFormationTaxRule, NetWorthTaxRule, AssetTaxRule
from .transfers import (
    BankTransferTaxRule,
    PropertyTransferTaxRule,
    InheritanceTaxRule,
    GiftTaxRule,
    CapitalGainsTaxRule,
)

__all__ = [
    "TaxRule",
    "RuleOutcome",
    "get_rule",
    "list_registered_categories",
    "missing_categories",
    "ValueAddedTaxRule",
    "ExciseTaxRule",
    "IncomeTaxRule",
    "YearEndBonusRule",
    "DividendTaxRule",
    "CorporateFormationTaxRule",
    "NetWorthTaxRule",
    "AssetTaxRule",
    "BankTransferTaxRule",
    "PropertyTransferTaxRule",
    "InheritanceTaxRule",
    "GiftTaxRule",
    "CapitalGainsTaxRule",
]
