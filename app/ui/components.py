# -----------------------------------------------------------------------------
# (c) 2026 Andreas Wagner. All Rights Reserved.
#
# This code is part of the Tax Calculator project.
# Unauthorized usage or distribution is not permitted.
# -----------------------------------------------------------------------------

"""
Reusable UI Components
"""

from html import escape

from modules.tax.tax_models import TaxPolarity, TaxResult
from app.ui.utils import format_money, format_percent


def render_kpi_dashboard(metrics, title="Resultado"):
    """
    Render the KPI dashboard as a single HTML block using CSS Grid.
    metrics: List of dicts with 'label', 'value', 'delta' (opt), 'delta_color' (opt)
    """
    items_html = ""
    for m in metrics:
        delta_html = ""
        if m.get('delta'):
            color_class = f"delta-{m.get('delta_color', 'neu')}"
            # Arrows so the direction does not rely on color alone
            icon = "↑ " if m.get('delta_color') == 'pos' else "↓ " if m.get('delta_color') == 'neg' else "→ "
            delta_html = f'<div class="metric-delta {color_class}">{icon}{escape(m["delta"])}</div>'

        items_html += '<div class="kpi-item">'
        items_html += f'<div class="kpi-label">{escape(m["label"])}</div>'
        items_html += f'<div class="kpi-value-row"><div class="kpi-value">{escape(m["value"])}</div>{delta_html}</div>'
        items_html += '</div>'

    # Flatten string to avoid Markdown code block interpretation
    html = '<div class="kpi-board">'
    if title:
        html += f'<div class="kpi-header">{escape(title)}</div>'
    html += f'<div class="kpi-grid">{items_html}</div>'
    html += '</div>'

    return html


def result_metrics(result: TaxResult):
    """KPI entries for one tax result."""
    withheld = result.polarity == TaxPolarity.WITHHELD
    return [
        {"label": "Monto base", "value": format_money(result.base_amount)},
        {
            "label": "Impuesto retenido" if withheld else "Impuesto",
            "value": format_money(result.tax_amount),
            "delta": ("-" if withheld else "+") + format_money(result.tax_amount) if result.tax_amount else None,
            "delta_color": "neg" if withheld else "pos",
        },
        {"label": "Total neto" if withheld else "Total a pagar", "value": format_money(result.total_amount)},
        {"label": "Tasa efectiva", "value": format_percent(result.effective_rate)},
    ]


def render_message(message: str) -> str:
    return f'<div class="tax-message">{escape(message)}</div>'
