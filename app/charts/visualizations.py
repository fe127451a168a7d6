"""Visualization components using Plotly for interactive charts."""

from decimal import Decimal
from typing import List

import pandas as pd
import plotly.graph_objects as go

from lib.config import get_settings
from lib.utils.logging_config import setup_logger
from modules.tax.tax_models import TaxPolarity, TaxResult

logger = setup_logger(__name__)

# ========================================
# CHART STYLING CONSTANTS
# ========================================

DESKTOP_HEIGHT = 420
MOBILE_HEIGHT = 320

CHART_TITLE_FONT = dict(size=18, family="JetBrains Mono", color="#e6e6e6")

CHART_HOVER_LABEL = dict(
    bgcolor='rgba(17, 24, 39, 0.95)',
    bordercolor='#4B7DA3',
    font_size=13,
    font_family='JetBrains Mono'
)

BASE_COLOR = 'rgba(30, 58, 138, 0.65)'      # Deep Blue
ADDED_COLOR = 'rgba(245, 158, 11, 0.60)'    # Amber
WITHHELD_COLOR = 'rgba(248, 113, 113, 0.60)'  # Red
TOTAL_COLOR = 'rgba(16, 185, 129, 0.65)'    # Emerald

# Breakdown entries that describe the base rather than a tax component
_INFORMATIONAL_COMPONENTS = {"acquisition_cost", "gain", "taxable_excess", "rate_based_tax", "minimum_tax"}


def _layout(fig: go.Figure, title: str, compact_mode: bool) -> go.Figure:
    title_dict = dict(text="") if not title else dict(text=title, x=0, xref="container", font=CHART_TITLE_FONT)
    fig.update_layout(
        title=title_dict,
        showlegend=False,
        height=MOBILE_HEIGHT if compact_mode else DESKTOP_HEIGHT,
        margin=dict(t=0 if not title else 60, b=40, l=40, r=40),
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)',
        font=dict(family="Inter", color="#9CA3AF"),
        hoverlabel=CHART_HOVER_LABEL,
    )
    return fig


def _tax_components(result: TaxResult) -> List[tuple]:
    components = [
        (name, value) for name, value in result.breakdown.items()
        if name not in _INFORMATIONAL_COMPONENTS
    ]
    # A single component would only repeat the tax bar
    if len(components) < 2:
        return [("impuesto", result.tax_amount)]
    return components


def create_tax_breakdown_chart(
    result: TaxResult,
    title: str = "Desglose",
    compact_mode: bool = False
) -> go.Figure:
    """
    Waterfall from base amount to total.

    Tax components rise for taxes added to the base and fall for taxes
    withheld from it, so the last bar always equals result.total_amount.
    """
    currency = get_settings().currency_symbol
    sign = Decimal(-1) if result.polarity == TaxPolarity.WITHHELD else Decimal(1)

    labels = ["base"]
    values = [float(result.base_amount)]
    measures = ["absolute"]

    for name, value in _tax_components(result):
        labels.append(name)
        values.append(float(sign * value))
        measures.append("relative")

    labels.append("total")
    values.append(float(result.total_amount))
    measures.append("total")

    change_color = WITHHELD_COLOR if result.polarity == TaxPolarity.WITHHELD else ADDED_COLOR

    fig = go.Figure(go.Waterfall(
        x=labels,
        y=values,
        measure=measures,
        hovertemplate=f'<b>%{{x}}</b><br>{currency}%{{y:,.2f}}<extra></extra>',
        increasing=dict(marker=dict(color=change_color)),
        decreasing=dict(marker=dict(color=change_color)),
        totals=dict(marker=dict(color=TOTAL_COLOR)),
        connector=dict(line=dict(color='rgba(90, 122, 143, 0.35)', width=1)),
    ))
    fig.update_yaxes(tickprefix=currency, gridcolor='rgba(90, 122, 143, 0.15)')

    return _layout(fig, title, compact_mode)


def create_category_tax_chart(
    summary_df: pd.DataFrame,
    title: str = "Impuesto por categoría",
    compact_mode: bool = False
) -> go.Figure:
    """
    Horizontal bar chart of total tax per category.

    Args:
        summary_df: Output of lib.pipeline.summarize_by_category
    """
    if summary_df.empty:
        return go.Figure()

    currency = get_settings().currency_symbol
    df = summary_df.sort_values("Tax", ascending=True)

    fig = go.Figure(go.Bar(
        x=df["Tax"],
        y=df["Category"],
        orientation="h",
        customdata=df["Count"],
        hovertemplate=f'<b>%{{y}}</b><br>{currency}%{{x:,.2f}}<br>%{{customdata}} filas<extra></extra>',
        marker=dict(color=BASE_COLOR, line=dict(color='#0e1117', width=1)),
    ))
    fig.update_xaxes(tickprefix=currency, gridcolor='rgba(90, 122, 143, 0.15)')

    logger.debug(f"Category chart with {len(df)} categories")
    return _layout(fig, title, compact_mode)
