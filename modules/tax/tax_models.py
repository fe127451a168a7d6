"""
Tax Input and Result Data Models

Defines the core data structures of the tax engine:
- TaxCategory: closed set of supported Dominican taxes
- ExciseSubtype: ISC sub-rules (vehicle, telecom, insurance, cigarettes)
- TaxPolarity: whether the tax is added to or withheld from the base
- TaxInput: one caller request
- TaxResult: one computed breakdown

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Union


# Custom exceptions
class TaxValidationError(ValueError):
    """Base class for rejected engine input. Nothing is computed when raised."""

    code = "invalid_input"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class UnsupportedCategoryError(TaxValidationError):
    """Raised when the tax category is not one of TaxCategory."""

    code = "unsupported_category"

    def __init__(self, value: Any):
        super().__init__(f"Unsupported tax category: '{value}'", field="category")
        self.value = value


class NegativeAmountError(TaxValidationError):
    """Raised when the amount (or the acquisition cost) is below zero."""

    code = "negative_amount"

    def __init__(self, value: Decimal, field: str = "amount"):
        super().__init__(f"{field} must be >= 0, got {value}", field=field)
        self.value = value


class InvalidAmountError(TaxValidationError):
    """Raised when an amount is missing, not numeric, NaN or infinite."""

    code = "invalid_amount"

    def __init__(self, value: Any, field: str = "amount"):
        super().__init__(f"{field} is not a valid number: '{value}'", field=field)
        self.value = value


class MissingCostError(TaxValidationError):
    """Raised when capital gains are requested without an acquisition cost."""

    code = "missing_cost"

    def __init__(self):
        super().__init__("Capital gains tax requires the acquisition cost", field="cost")


class InvalidExciseSubtypeError(TaxValidationError):
    """Raised when excise tax is requested with a missing or unknown subtype."""

    code = "invalid_subtype"

    def __init__(self, value: Any = None):
        if value is None or value == "":
            message = "Excise tax (ISC) requires a subtype: vehicle, telecom, insurance or cigarettes"
        else:
            message = f"Unknown excise subtype: '{value}'"
        super().__init__(message, field="subtype")
        self.value = value


def _lookup_key(value: str) -> str:
    return value.strip().upper().replace("-", "_").replace(" ", "_")


class TaxCategory(str, Enum):
    """Supported taxes. Values are the short codes used by DGII forms."""

    VALUE_ADDED = "ITBIS"
    INCOME = "ISR"
    YEAR_END_BONUS = "REGALIA"
    EXCISE = "ISC"
    DIVIDENDS = "DIVIDENDOS"
    CORPORATE_FORMATION = "CONSTITUCION"
    NET_WORTH = "IPI"
    ASSET = "ACTIVOS"
    BANK_TRANSFER = "TRANSFERENCIAS"
    PROPERTY_TRANSFER = "PROPIEDADES"
    INHERITANCE = "SUCESIONES"
    GIFT = "DONACIONES"
    CAPITAL_GAINS = "GANANCIA_CAPITAL"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]

    @classmethod
    def normalize(cls, value: Union[str, "TaxCategory"]) -> "TaxCategory":
        """Normalize a category from a member, a DGII code or a member name.

        Raises:
            UnsupportedCategoryError: If the value cannot be mapped.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            raise UnsupportedCategoryError(value)

        key = _lookup_key(value)
        for member in cls:
            if key == member.value or key == member.name:
                return member
        raise UnsupportedCategoryError(value)


CATEGORY_LABELS: Dict[TaxCategory, str] = {
    TaxCategory.VALUE_ADDED: "ITBIS",
    TaxCategory.INCOME: "ISR (Impuesto Sobre la Renta)",
    TaxCategory.YEAR_END_BONUS: "Regalía Pascual",
    TaxCategory.EXCISE: "ISC (Impuesto Selectivo al Consumo)",
    TaxCategory.DIVIDENDS: "Dividendos",
    TaxCategory.CORPORATE_FORMATION: "Constitución de Empresas",
    TaxCategory.NET_WORTH: "IPI (Patrimonio Inmobiliario)",
    TaxCategory.ASSET: "Impuesto a los Activos",
    TaxCategory.BANK_TRANSFER: "Transferencias Bancarias",
    TaxCategory.PROPERTY_TRANSFER: "Transferencia de Propiedades",
    TaxCategory.INHERITANCE: "Sucesiones",
    TaxCategory.GIFT: "Donaciones",
    TaxCategory.CAPITAL_GAINS: "Ganancia de Capital",
}


class ExciseSubtype(str, Enum):
    """ISC sub-rules selected by the excise subtype."""

    VEHICLE = "vehicle"
    TELECOM = "telecom"
    INSURANCE = "insurance"
    CIGARETTES = "cigarettes"

    @property
    def label(self) -> str:
        return EXCISE_SUBTYPE_LABELS[self]

    @classmethod
    def normalize(cls, value: Union[str, "ExciseSubtype", None]) -> "ExciseSubtype":
        """Normalize a subtype from a member, value or member name.

        Raises:
            InvalidExciseSubtypeError: If the value is missing or unknown.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            raise InvalidExciseSubtypeError(value)

        key = _lookup_key(value)
        for member in cls:
            if key == member.name:
                return member
        raise InvalidExciseSubtypeError(value)


EXCISE_SUBTYPE_LABELS: Dict[ExciseSubtype, str] = {
    ExciseSubtype.VEHICLE: "Vehículo (17% + 18% ITBIS)",
    ExciseSubtype.TELECOM: "Telecomunicaciones (10%)",
    ExciseSubtype.INSURANCE: "Seguros (8%)",
    ExciseSubtype.CIGARETTES: "Cigarrillos (RD$50 por cajetilla)",
}


class TaxPolarity(str, Enum):
    """How the tax relates to the base amount."""
    ADDITIVE = "additive"   # total = base + tax
    WITHHELD = "withheld"   # total = base - tax


@dataclass(frozen=True)
class TaxInput:
    """
    One tax computation request.

    Amounts may be Decimal, int, float or numeric strings; the engine
    converts them to Decimal. `cost` is only read for capital gains and
    `subtype` only for excise tax.
    """

    category: Union[TaxCategory, str]
    amount: Any
    cost: Any = None
    subtype: Union[ExciseSubtype, str, None] = None


@dataclass(frozen=True)
class TaxResult:
    """
    Computed tax breakdown for one TaxInput.

    Key Invariant: tax_amount >= 0, and total_amount is base_amount plus or
    minus tax_amount according to polarity.
    """

    base_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    message: str

    category: Optional[TaxCategory] = None
    polarity: TaxPolarity = TaxPolarity.ADDITIVE
    breakdown: Dict[str, Decimal] = field(default_factory=dict)
    subtype: Optional[ExciseSubtype] = None

    @property
    def effective_rate(self) -> Decimal:
        """Tax as a fraction of the base amount (0 for a zero base)."""
        if self.base_amount == 0:
            return Decimal(0)
        return self.tax_amount / self.base_amount

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-friendly representation (floats)."""
        return {
            "category": self.category.value if self.category else None,
            "subtype": self.subtype.value if self.subtype else None,
            "polarity": self.polarity.value,
            "base_amount": float(self.base_amount),
            "tax_amount": float(self.tax_amount),
            "total_amount": float(self.total_amount),
            "message": self.message,
            "breakdown": {k: float(v) for k, v in self.breakdown.items()},
        }
