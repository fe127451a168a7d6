"""CSV parser for batch tax requests with automatic format detection."""

import csv
import re
from difflib import SequenceMatcher, get_close_matches
from io import StringIO
from typing import Any, Dict, List, Optional

import pandas as pd
from pydantic import BaseModel, field_validator

from lib.utils.logging_config import setup_logger
from modules.tax.tax_models import TaxInput

logger = setup_logger(__name__)


class TaxRequest(BaseModel):
    """
    One CSV row, cleaned but not yet validated.

    Values stay as text: category/subtype normalization and amount parsing
    belong to the engine, so a bad row is reported with the same errors as
    a bad form submission.
    """

    row: int
    category: Optional[str] = None
    amount: Optional[str] = None
    cost: Optional[str] = None
    subtype: Optional[str] = None

    @field_validator('category', 'amount', 'cost', 'subtype', mode='before')
    @classmethod
    def blank_to_none(cls, value: Any) -> Optional[str]:
        if value is None or pd.isna(value):
            return None
        text = str(value).strip()
        return text or None

    def to_tax_input(self) -> TaxInput:
        return TaxInput(
            category=self.category,
            amount=self.amount,
            cost=self.cost,
            subtype=self.subtype,
        )


class TaxRequestParser:
    """
    Flexible CSV parser for batch tax requests.

    Handles:
    - Multiple delimiters (, ; | tab)
    - Decimal separators (. or ,) and thousands separators
    - Column name variations in English and Spanish (fuzzy matching)
    - Currency symbols in amount cells (RD$1,000.00)
    """

    # Column mapping templates
    COLUMN_MAPPINGS = {
        'category': ['category', 'tax_type', 'taxtype', 'tax', 'tipo', 'impuesto', 'tipo_impuesto'],
        'amount': ['amount', 'base', 'base_amount', 'monto', 'valor', 'importe'],
        'cost': ['cost', 'acquisition_cost', 'costo', 'costo_adquisicion'],
        'subtype': ['subtype', 'excise_type', 'isc_type', 'isctype', 'subtipo', 'tipo_isc'],
    }

    REQUIRED_COLUMNS = ['category', 'amount']

    def __init__(self):
        self.delimiter = None
        self.decimal_separator = None

    def detect_delimiter(self, content: str) -> str:
        """Detect CSV delimiter from the header line."""
        first_line = content.split('\n')[0] if content else ''

        # Semicolon wins when it dominates the header (Spanish/European Excel export)
        if first_line.count(';') > first_line.count(','):
            return ';'

        sniffer = csv.Sniffer()
        try:
            sample = '\n'.join(content.split('\n')[:5])
            dialect = sniffer.sniff(sample, delimiters=";,|\t")
            return dialect.delimiter
        except csv.Error:
            return ','

    def detect_decimal_separator(self, content: str) -> str:
        """Detect decimal separator (. or ,). Comma-delimited files always use '.'."""
        if self.delimiter == ',':
            return '.'
        # 1.234,56 or 1234,5
        if re.search(r'\d,\d{1,2}(?!\d)', content):
            return ','
        return '.'

    def fuzzy_match_column(self, column_name: str, templates: List[str]) -> float:
        """
        Return the best match score for a column against templates.
        Returns: 0.0 to 1.0
        """
        column_lower = column_name.lower().strip().replace(' ', '_')

        if column_lower in templates:
            return 1.0

        matches = get_close_matches(column_lower, templates, n=1, cutoff=0.7)
        if matches:
            return SequenceMatcher(None, column_lower, matches[0]).ratio()
        return 0.0

    def map_columns(self, df: pd.DataFrame) -> Dict[str, str]:
        """
        Map actual column names to standardized names.

        Candidates are ranked globally by score so an exact match always wins
        over a fuzzy one, whichever standard name it belongs to.
        """
        candidates = []
        for std_name, templates in self.COLUMN_MAPPINGS.items():
            for col in df.columns:
                score = self.fuzzy_match_column(col, templates)
                if score >= 0.8:  # Strict cutoff
                    candidates.append((score, std_name, col))

        candidates.sort(key=lambda x: x[0], reverse=True)

        column_map = {}
        for score, std_name, col in candidates:
            if col in column_map or std_name in column_map.values():
                continue
            column_map[col] = std_name
            logger.info(f"Mapped '{col}' to '{std_name}' (score: {score:.2f})")

        logger.info(f"Final column mapping: {column_map}")
        return column_map

    def normalize_number(self, value: Any) -> Optional[str]:
        """
        Canonicalize a numeric cell to '1234.56' form.

        The separator is resolved per cell: when both '.' and ',' occur, the
        last one is the decimal separator; otherwise the file's detected
        separator applies. Text whose grouping does not fit is returned
        as-is so the engine can reject it with InvalidAmountError.
        """
        if value is None or pd.isna(value):
            return None

        text = str(value).strip()
        if not text:
            return None

        text = re.sub(r'^(RD\$|\$)', '', text).strip().replace(' ', '')

        if '.' in text and ',' in text:
            decimal = '.' if text.rfind('.') > text.rfind(',') else ','
        else:
            decimal = self.decimal_separator or '.'
        thousands = ',' if decimal == '.' else '.'

        integer_part, sep, fraction = text.partition(decimal)
        if decimal in fraction or thousands in fraction:
            return text

        if thousands in integer_part:
            grouping = r'[-+]?\d{1,3}(' + re.escape(thousands) + r'\d{3})+'
            if not re.fullmatch(grouping, integer_part):
                logger.debug(f"Amount '{text}' does not fit decimal separator '{decimal}'")
                return text
            integer_part = integer_part.replace(thousands, '')

        return f"{integer_part}.{fraction}" if sep else integer_part

    def parse_csv(self, file_content: str) -> List[TaxRequest]:
        """
        Parse CSV content into TaxRequest rows.

        Args:
            file_content: Raw CSV content as string

        Returns:
            One TaxRequest per non-empty data row, numbered from 1

        Raises:
            ValueError: If the CSV is empty or required columns are missing
        """
        if not file_content or not file_content.strip():
            raise ValueError("CSV content is empty")

        self.delimiter = self.detect_delimiter(file_content)
        self.decimal_separator = self.detect_decimal_separator(file_content)

        logger.info(f"Detected delimiter: '{self.delimiter}', decimal: '{self.decimal_separator}'")

        df = pd.read_csv(
            StringIO(file_content),
            delimiter=self.delimiter,
            quotechar='"',
            dtype=str,  # Read everything as string; numbers are normalized below
            keep_default_na=False,
            skip_blank_lines=True,
        )

        logger.info(f"Read {len(df)} rows, {len(df.columns)} columns: {list(df.columns)}")

        df.columns = df.columns.str.strip().str.strip('"')

        column_map = self.map_columns(df)
        df_mapped = df.rename(columns=column_map)

        missing = [col for col in self.REQUIRED_COLUMNS if col not in df_mapped.columns]
        if missing:
            error_msg = f"Missing required columns: {missing}"
            logger.error(error_msg)
            raise ValueError(error_msg)

        requests = []
        for idx, row in enumerate(df_mapped.to_dict(orient='records'), start=1):
            values = [row.get(col, '') for col in self.COLUMN_MAPPINGS]
            if all(str(v).strip() == '' for v in values):
                logger.debug(f"Row {idx}: empty, skipped")
                continue

            requests.append(TaxRequest(
                row=idx,
                category=row.get('category'),
                amount=self.normalize_number(row.get('amount')),
                cost=self.normalize_number(row.get('cost')),
                subtype=row.get('subtype'),
            ))

        logger.info(f"CSV parsing complete: {len(requests)} requests")
        return requests
