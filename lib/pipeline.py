"""
Batch Tax Pipeline

Runs many tax requests through the engine and collects the results in a
pandas DataFrame. Invalid rows do not stop the batch: they keep their row
number and carry the validation message in the Error column.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

from typing import Iterable, List, Optional

import pandas as pd

from lib.parsers.csv_parser import TaxRequest, TaxRequestParser
from lib.utils.logging_config import get_perf_logger, log_dataframe_info, setup_logger
from modules.tax.engine import TaxEngine, get_engine
from modules.tax.tax_models import TaxResult, TaxValidationError

logger = setup_logger(__name__)

RESULT_COLUMNS = ["Row", "Category", "Subtype", "Base", "Tax", "Total", "Message", "Error"]
SUMMARY_COLUMNS = ["Category", "Count", "Base", "Tax", "Total"]


def compute_requests(
    requests: Iterable[TaxRequest],
    engine: Optional[TaxEngine] = None
) -> pd.DataFrame:
    """
    Compute every request and tabulate the outcome.

    Args:
        requests: Parsed CSV rows
        engine: Engine to use (defaults to the shared engine for the configured locale)

    Returns:
        DataFrame with RESULT_COLUMNS, one row per request, in input order
    """
    engine = engine or get_engine()
    requests = list(requests)
    records = []

    with get_perf_logger(logger, f"Computing {len(requests)} tax requests"):
        for request in requests:
            record = {
                "Row": request.row,
                "Category": request.category,
                "Subtype": request.subtype,
                "Base": None,
                "Tax": None,
                "Total": None,
                "Message": None,
                "Error": None,
            }

            try:
                result = engine.compute(request.to_tax_input())
            except TaxValidationError as e:
                record["Error"] = str(e)
                logger.warning(f"Row {request.row} rejected: {e}", extra={"tax_context": f"{{code={e.code}}}"})
            else:
                record.update(
                    Category=result.category.value,
                    Subtype=result.subtype.value if result.subtype else None,
                    Base=float(result.base_amount),
                    Tax=float(result.tax_amount),
                    Total=float(result.total_amount),
                    Message=result.message,
                )

            records.append(record)

    df = pd.DataFrame(records, columns=RESULT_COLUMNS)
    # Missing subtypes export as empty cells, never as NaN
    df["Subtype"] = df["Subtype"].astype(object).where(df["Subtype"].notna(), None)
    log_dataframe_info(logger, df, "Tax results")
    return df


def process_csv(file_content: str, engine: Optional[TaxEngine] = None) -> pd.DataFrame:
    """
    Parse CSV content and compute all rows.

    Raises:
        ValueError: If the CSV is empty or misses required columns
    """
    requests = TaxRequestParser().parse_csv(file_content)
    return compute_requests(requests, engine=engine)


def summarize_by_category(results_df: pd.DataFrame) -> pd.DataFrame:
    """
    Aggregate successful rows per category.

    Returns:
        DataFrame with SUMMARY_COLUMNS sorted by tax descending
    """
    ok = results_df[results_df["Error"].isna()]
    if ok.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    summary = (
        ok.groupby("Category", as_index=False)
        .agg(Count=("Row", "count"), Base=("Base", "sum"), Tax=("Tax", "sum"), Total=("Total", "sum"))
        .sort_values("Tax", ascending=False)
        .reset_index(drop=True)
    )
    return summary[SUMMARY_COLUMNS]


def breakdown_to_dataframe(result: TaxResult) -> pd.DataFrame:
    """
    Tabulate a single result: base, named breakdown components, tax, total.

    Returns:
        DataFrame with columns Component, Amount
    """
    rows: List[dict] = [{"Component": "base_amount", "Amount": float(result.base_amount)}]
    rows.extend(
        {"Component": name, "Amount": float(value)}
        for name, value in result.breakdown.items()
    )
    rows.append({"Component": "tax_amount", "Amount": float(result.tax_amount)})
    rows.append({"Component": "total_amount", "Amount": float(result.total_amount)})
    return pd.DataFrame(rows, columns=["Component", "Amount"])
