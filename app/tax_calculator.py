# -----------------------------------------------------------------------------
# (c) 2026 Andreas Wagner. All Rights Reserved.
#
# This code is part of the Tax Calculator project.
# Unauthorized usage or distribution is not permitted.
# -----------------------------------------------------------------------------

"""
Tax Calculator - Streamlit Application

A Dominican tax calculator with:
- Single computation form (conditional cost / ISC subtype inputs)
- Batch computation from CSV uploads with per-row errors
- Breakdown charts and CSV/JSON export

All tax logic lives in modules.tax; this file only collects input and
renders results.
"""

import sys
from pathlib import Path

# Fix module imports - add project root to path
_root = Path(__file__).parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

import json
from datetime import datetime

import pandas as pd
import streamlit as st

from lib.config import SUPPORTED_LOCALES, get_settings
from lib.pipeline import breakdown_to_dataframe, process_csv, summarize_by_category
from lib.utils.logging_config import setup_logger
from modules.tax.engine import get_engine, required_fields
from modules.tax.tax_models import ExciseSubtype, TaxCategory, TaxInput, TaxValidationError
from app.charts.visualizations import create_category_tax_chart, create_tax_breakdown_chart
from app.ui.components import render_kpi_dashboard, render_message, result_metrics
from app.ui.styles import APP_STYLE
from app.ui.utils import format_money, store_result, stored_result

logger = setup_logger(__name__)

# Page configuration
st.set_page_config(
    page_title="Calculadora de Impuestos",
    page_icon="🧾",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown(APP_STYLE, unsafe_allow_html=True)

SAMPLE_CSV = (
    "category,amount,cost,subtype\n"
    "ITBIS,1000,,\n"
    "ISR,700000,,\n"
    "ISC,1000,,vehicle\n"
    "IPI,11190833,,\n"
    "GANANCIA_CAPITAL,500,700,\n"
)


@st.cache_data(show_spinner=False, ttl=3600)
def process_csv_cached(file_content: str, locale: str) -> pd.DataFrame:
    """Cached batch computation (results only depend on content and locale)."""
    return process_csv(file_content, engine=get_engine(locale))


def render_sidebar() -> str:
    """Sidebar settings. Returns the selected message locale."""
    settings = get_settings()
    with st.sidebar:
        st.markdown("### Ajustes")
        locale = st.radio(
            "Idioma de los mensajes",
            options=list(SUPPORTED_LOCALES),
            index=SUPPORTED_LOCALES.index(settings.message_locale),
            format_func=lambda code: {"es": "Español", "en": "English"}[code],
            horizontal=True,
        )
        st.caption(f"Moneda: {settings.currency_symbol}")
    return locale


def render_single_calculation(locale: str):
    """Form for one computation plus its result."""
    # Outside the form so the conditional inputs update immediately
    category = st.selectbox(
        "Tipo de impuesto",
        options=list(TaxCategory),
        format_func=lambda c: c.label,
        key="tax_category",
    )
    needed = required_fields(category)

    with st.form("tax_form"):
        amount = st.number_input("Monto base", min_value=0.0, value=0.0, step=1000.0, format="%.2f")

        cost = None
        if "cost" in needed:
            cost = st.number_input(
                "Costo de adquisición",
                min_value=0.0,
                value=None,
                step=1000.0,
                format="%.2f",
                placeholder="Requerido para ganancia de capital",
            )

        subtype = None
        if "subtype" in needed:
            subtype = st.selectbox(
                "Tipo de ISC",
                options=list(ExciseSubtype),
                index=None,
                format_func=lambda s: s.label,
                placeholder="Seleccione el tipo de ISC",
            )

        submitted = st.form_submit_button("Calcular", type="primary")

    if submitted:
        tax_input = TaxInput(category=category, amount=amount, cost=cost, subtype=subtype)
        try:
            with st.spinner("Calculando..."):
                result = get_engine(locale).compute(tax_input)
            store_result(st.session_state, category, locale, result)
        except TaxValidationError as e:
            store_result(st.session_state, category, locale, None)
            st.error(str(e))
            logger.info(f"Form input rejected ({e.code}): {e}")
            return

    result = stored_result(st.session_state, category, locale)
    if result is None:
        return

    st.markdown(render_kpi_dashboard(result_metrics(result), title=result.category.label), unsafe_allow_html=True)
    st.markdown(render_message(result.message), unsafe_allow_html=True)

    col_chart, col_table = st.columns([3, 2])
    with col_chart:
        st.plotly_chart(create_tax_breakdown_chart(result, title=None), width='stretch')

    with col_table:
        breakdown_df = breakdown_to_dataframe(result)
        st.dataframe(
            breakdown_df,
            width='stretch',
            hide_index=True,
            column_config={"Amount": st.column_config.NumberColumn(format="%.2f")},
        )

        stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        st.download_button(
            label="📥 Descargar CSV",
            data=breakdown_df.to_csv(index=False),
            file_name=f"impuesto_{result.category.value}_{stamp}.csv",
            mime="text/csv",
            key="export_single_csv",
        )
        st.download_button(
            label="📥 Descargar JSON",
            data=json.dumps(result.to_dict(), indent=2, ensure_ascii=False),
            file_name=f"impuesto_{result.category.value}_{stamp}.json",
            mime="application/json",
            key="export_single_json",
        )


def render_batch_calculation(locale: str):
    """CSV upload, result table and per-category summary."""
    st.caption("Columnas: category/tipo, amount/monto, cost/costo (ganancia de capital), subtype/tipo_isc (ISC).")
    st.download_button(
        label="📄 Plantilla CSV",
        data=SAMPLE_CSV,
        file_name="plantilla_impuestos.csv",
        mime="text/csv",
        key="download_template",
    )

    uploaded = st.file_uploader("Archivo CSV", type=["csv", "txt"])
    if uploaded is None:
        return

    try:
        content = uploaded.getvalue().decode("utf-8-sig")
        with st.spinner("Calculando lote..."):
            results_df = process_csv_cached(content, locale)
    except (ValueError, UnicodeDecodeError) as e:
        st.error(f"No se pudo leer el CSV: {e}")
        logger.warning(f"Batch upload rejected: {e}")
        return

    ok = results_df[results_df["Error"].isna()]
    failed = len(results_df) - len(ok)

    metrics = [
        {"label": "Filas", "value": str(len(results_df))},
        {
            "label": "Con error",
            "value": str(failed),
            "delta": "revisar" if failed else None,
            "delta_color": "neg",
        },
        {"label": "Impuesto total", "value": format_money(ok["Tax"].sum())},
        {"label": "Monto base", "value": format_money(ok["Base"].sum())},
    ]
    st.markdown(render_kpi_dashboard(metrics, title="Lote"), unsafe_allow_html=True)

    number_fmt = st.column_config.NumberColumn(format="%.2f")
    st.dataframe(
        results_df,
        width='stretch',
        hide_index=True,
        height=400,
        column_config={"Base": number_fmt, "Tax": number_fmt, "Total": number_fmt},
    )

    summary_df = summarize_by_category(results_df)
    if not summary_df.empty:
        st.plotly_chart(create_category_tax_chart(summary_df), width='stretch')

    st.download_button(
        label="📥 Descargar resultados CSV",
        data=results_df.to_csv(index=False),
        file_name=f"impuestos_lote_{datetime.now().date()}.csv",
        mime="text/csv",
        key="export_batch_csv",
    )


def main():
    """Main application entry point."""
    st.title("Calculadora de Impuestos")
    locale = render_sidebar()

    tab1, tab2 = st.tabs(["Cálculo", "Lote CSV"])

    with tab1:
        try:
            render_single_calculation(locale)
        except Exception as e:
            st.error(f"Error inesperado: {e}")
            logger.error(f"Single calculation error: {e}", exc_info=True)

    with tab2:
        try:
            render_batch_calculation(locale)
        except Exception as e:
            st.error(f"Error inesperado: {e}")
            logger.error(f"Batch calculation error: {e}", exc_info=True)


if __name__ == "__main__":
    main()
