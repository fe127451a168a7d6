"""
Integration Tests for the Batch Pipeline

CSV content -> parser -> engine -> result DataFrame -> summaries.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

import pandas as pd
import pytest
from decimal import Decimal

from lib.parsers.csv_parser import TaxRequest
from lib.pipeline import (
    RESULT_COLUMNS,
    SUMMARY_COLUMNS,
    breakdown_to_dataframe,
    compute_requests,
    process_csv,
    summarize_by_category,
)
from modules.tax.engine import TaxEngine
from modules.tax.tax_models import ExciseSubtype, TaxCategory, TaxInput


@pytest.fixture
def engine():
    return TaxEngine(locale="es", currency_symbol="RD$")


@pytest.fixture
def mixed_csv():
    """Valid rows mixed with one row per validation error."""
    return (
        "category,amount,cost,subtype\n"
        "ITBIS,1000,,\n"
        "ISC,1000,,\n"
        "GANANCIA_CAPITAL,500,,\n"
        "PEAJE,10,,\n"
        "ISR,700000,,\n"
        "ITBIS,-5,,\n"
        "ITBIS,abc,,\n"
    )


class TestProcessCsv:

    def test_every_row_is_reported(self, engine, mixed_csv):
        df = process_csv(mixed_csv, engine=engine)

        assert list(df.columns) == RESULT_COLUMNS
        assert list(df["Row"]) == [1, 2, 3, 4, 5, 6, 7]
        assert df["Error"].notna().sum() == 5

    def test_valid_rows(self, engine, mixed_csv):
        df = process_csv(mixed_csv, engine=engine).set_index("Row")

        assert df.loc[1, "Tax"] == pytest.approx(180.0)
        assert df.loc[1, "Total"] == pytest.approx(1180.0)
        assert df.loc[1, "Message"] == "ITBIS calculado al 18%."
        assert df.loc[5, "Category"] == "ISR"
        assert df.loc[5, "Tax"] == pytest.approx(46350.55)

    def test_error_rows(self, engine, mixed_csv):
        df = process_csv(mixed_csv, engine=engine).set_index("Row")

        assert "requires a subtype" in df.loc[2, "Error"]
        assert "acquisition cost" in df.loc[3, "Error"]
        assert "Unsupported tax category" in df.loc[4, "Error"]
        assert ">= 0" in df.loc[6, "Error"]
        assert "not a valid number" in df.loc[7, "Error"]
        assert pd.isna(df.loc[4, "Tax"])

    def test_locale_follows_engine(self, mixed_csv):
        df = process_csv(mixed_csv, engine=TaxEngine(locale="en", currency_symbol="RD$"))
        assert df.iloc[0]["Message"] == "ITBIS (VAT) calculated at 18%."

    def test_missing_columns(self, engine):
        with pytest.raises(ValueError, match="Missing required columns"):
            process_csv("tipo\nITBIS\n", engine=engine)

    def test_compute_requests_keeps_input_order(self, engine):
        requests = [
            TaxRequest(row=10, category="DONACIONES", amount="500000"),
            TaxRequest(row=2, category="isc", amount="300", subtype="cigarettes"),
        ]
        df = compute_requests(requests, engine=engine)

        assert list(df["Row"]) == [10, 2]
        assert list(df["Category"]) == ["DONACIONES", "ISC"]
        assert df.iloc[0]["Total"] == pytest.approx(365000.0)
        assert df.iloc[1]["Tax"] == pytest.approx(50.0)

    def test_european_amount_in_comma_file(self, engine):
        df = process_csv('category,amount\nITBIS,"1.000,50"\nITBIS,"1,50"\n', engine=engine)

        assert df.iloc[0]["Base"] == pytest.approx(1000.50)
        assert df.iloc[0]["Tax"] == pytest.approx(180.09)
        assert "not a valid number" in df.iloc[1]["Error"]

    def test_subtype_column_is_consistent(self, engine):
        content = "tipo;monto;tipo_isc\nISC;1000;VEHICLE\nITBIS;500;\nISC;10;boat\n"
        df = process_csv(content, engine=engine)

        assert df["Subtype"].tolist() == ["vehicle", None, "boat"]
        assert df.to_csv(index=False).splitlines()[2].split(",")[2] == ""


class TestSummaries:

    def test_summarize_by_category(self, engine):
        content = "category,amount\nITBIS,1000\nITBIS,500\nACTIVOS,2000000\nPEAJE,1\n"
        summary = summarize_by_category(process_csv(content, engine=engine))

        assert list(summary.columns) == SUMMARY_COLUMNS
        assert list(summary["Category"]) == ["ACTIVOS", "ITBIS"]

        itbis = summary.set_index("Category").loc["ITBIS"]
        assert itbis["Count"] == 2
        assert itbis["Tax"] == pytest.approx(270.0)
        assert itbis["Total"] == pytest.approx(1770.0)

    def test_summary_of_failed_batch_is_empty(self, engine):
        summary = summarize_by_category(process_csv("category,amount\nPEAJE,1\n", engine=engine))

        assert summary.empty
        assert list(summary.columns) == SUMMARY_COLUMNS

    def test_breakdown_to_dataframe(self, engine):
        result = engine.compute(
            TaxInput(TaxCategory.EXCISE, Decimal("1000"), subtype=ExciseSubtype.VEHICLE)
        )
        df = breakdown_to_dataframe(result)

        assert list(df["Component"]) == ["base_amount", "excise", "itbis", "tax_amount", "total_amount"]
        assert list(df["Amount"]) == pytest.approx([1000.0, 170.0, 180.0, 350.0, 1350.0])

    def test_breakdown_without_components(self, engine):
        df = breakdown_to_dataframe(engine.compute(TaxInput(TaxCategory.VALUE_ADDED, Decimal("100"))))
        assert list(df["Component"]) == ["base_amount", "tax_amount", "total_amount"]
