"""
Result Message Catalog

Each rule reports a message key plus parameters; the engine renders the
text in its display locale. Spanish follows the wording of the DGII
calculator forms, English mirrors it.

Template parameters:
- {rate}, {rates}: formatted percentages (e.g. "18%", "15%, 20% y 25%")
- {threshold}, {minimum}, {flat}: formatted amounts without currency
- {currency}: currency symbol (TAX_CURRENCY_SYMBOL)

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from typing import Dict

MESSAGES: Dict[str, Dict[str, str]] = {
    "es": {
        "vat": "ITBIS calculado al {rate}.",
        "income_exempt": "Exento de ISR (ingreso anual ≤ {currency}{threshold}).",
        "income_first_bracket": "ISR calculado al {rate} sobre el exceso de {currency}{threshold}.",
        "income_brackets": "ISR calculado al {rates} según tramos.",
        "year_end_bonus": "Regalía pascual equivalente a un salario mensual (no gravada con ISR).",
        "excise_vehicle": "Impuesto a vehículos: {excise_rate} ISC + {vat_rate} ITBIS.",
        "excise_telecom": "ISC calculado al {rate} para telecomunicaciones.",
        "excise_insurance": "ISC calculado al {rate} para seguros.",
        "excise_cigarettes": "ISC fijo de {currency}{flat} por cajetilla de cigarrillos.",
        "dividends": "Impuesto a los dividendos calculado al {rate} (pago único).",
        "corporate_formation": (
            "Impuesto a la constitución de empresas al {rate} del capital social "
            "(mínimo {currency}{minimum})."
        ),
        "net_worth_exempt": "Exento de IPI (patrimonio ≤ {currency}{threshold}).",
        "net_worth": "IPI calculado al {rate} sobre el exceso de {currency}{threshold}.",
        "asset": "Impuesto a los activos calculado al {rate} (crédito contra ISR).",
        "bank_transfer": "Impuesto a transferencias bancarias/cheques calculado al {rate}.",
        "property_transfer": "Impuesto a la transferencia de propiedades calculado al {rate}.",
        "inheritance": "Impuesto a las sucesiones calculado al {rate} sobre la herencia.",
        "gift": "Impuesto a las donaciones calculado al {rate} (tasa ISR jurídica 2025).",
        "capital_gains_none": "No hay ganancia de capital (precio de venta ≤ costo de adquisición).",
        "capital_gains": "Impuesto a la ganancia de capital calculado al {rate} sobre la ganancia.",
    },
    "en": {
        "vat": "ITBIS (VAT) calculated at {rate}.",
        "income_exempt": "Exempt from income tax (annual income ≤ {currency}{threshold}).",
        "income_first_bracket": "Income tax calculated at {rate} on the excess over {currency}{threshold}.",
        "income_brackets": "Income tax calculated at {rates} by bracket.",
        "year_end_bonus": "Year-end bonus equal to one monthly salary (not subject to income tax).",
        "excise_vehicle": "Vehicle tax: {excise_rate} excise + {vat_rate} ITBIS.",
        "excise_telecom": "Excise tax calculated at {rate} for telecommunications.",
        "excise_insurance": "Excise tax calculated at {rate} for insurance.",
        "excise_cigarettes": "Flat excise tax of {currency}{flat} per pack of cigarettes.",
        "dividends": "Dividend tax calculated at {rate} (single payment).",
        "corporate_formation": (
            "Company formation tax at {rate} of share capital "
            "(minimum {currency}{minimum})."
        ),
        "net_worth_exempt": "Exempt from IPI (net worth ≤ {currency}{threshold}).",
        "net_worth": "IPI calculated at {rate} on the excess over {currency}{threshold}.",
        "asset": "Asset tax calculated at {rate} (credit against income tax).",
        "bank_transfer": "Bank transfer/cheque tax calculated at {rate}.",
        "property_transfer": "Property transfer tax calculated at {rate}.",
        "inheritance": "Inheritance tax calculated at {rate} on the estate.",
        "gift": "Gift tax calculated at {rate} (2025 corporate income tax rate).",
        "capital_gains_none": "No capital gain (sale price ≤ acquisition cost).",
        "capital_gains": "Capital gains tax calculated at {rate} on the gain.",
    },
}

# Joins the last two items of a rate list ("15%, 20% y 25%")
LIST_CONJUNCTIONS = {"es": "y", "en": "and"}


def join_rates(rates, locale: str) -> str:
    """Join formatted rates as a natural-language list."""
    rates = list(rates)
    if len(rates) == 1:
        return rates[0]
    return f"{', '.join(rates[:-1])} {LIST_CONJUNCTIONS[locale]} {rates[-1]}"


def render(key: str, locale: str, **params) -> str:
    """
    Render a message template.

    Raises:
        KeyError: If the locale or key is unknown
    """
    return MESSAGES[locale][key].format(**params)
