import logging
from datetime import datetime
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from pathlib import Path
import pandas as pd

from . import settings

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def load_csv(file_path: Path) -> pd.DataFrame:
    """
    Reads an export as plain strings with a two-stage encoding fallback:
    1. UTF-8 with BOM support ('utf-8-sig'), which is what Amazon ships.
    2. Latin-1, which can decode any byte.
    Anything other than a decode error (missing file, malformed CSV) propagates.
    """
    read_options = {"dtype": str, "keep_default_na": False}
    try:
        return pd.read_csv(file_path, encoding="utf-8-sig", **read_options)
    except UnicodeDecodeError:
        logger.info(
            f"UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'."
        )
        return pd.read_csv(file_path, encoding="latin-1", **read_options)


def parse_order_date(value) -> datetime | None:
    """
    Parses an export timestamp into an aware UTC datetime.
    Returns None when the value is empty or not a date.
    """
    if isinstance(value, str):
        value = value.strip()
    if value is None or value == "":
        return None
    timestamp = pd.to_datetime(value, errors="coerce", utc=True)
    if pd.isna(timestamp):
        return None
    return timestamp.to_pydatetime()


def parse_quantity(value, default: int = 1) -> int:
    """Missing, zero, negative or garbage quantities fall back to `default`."""
    try:
        quantity = int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return default
    return quantity if quantity > 0 else default


def parse_amount(value) -> Decimal:
    """
    Parses a money column ("$12.34", "1,024.00", "9.99").
    Unparseable amounts become Decimal('NaN') so the run carries on and the bad
    value is visible in the output.
    """
    if isinstance(value, Decimal):
        return value
    text = str(value).replace("$", "").replace(",", "").strip()
    try:
        return Decimal(text)
    except InvalidOperation:
        return Decimal("NaN")


def double_price(cost: Decimal) -> Decimal:
    """List price rule: floor the cost to whole cents, then double it."""
    if not cost.is_finite():
        return Decimal("NaN")
    try:
        return cost.quantize(CENTS, rounding=ROUND_FLOOR) * 2
    except InvalidOperation:
        # Too many digits to hold at cent precision.
        return Decimal("NaN")


def format_as_spreadsheet_text(value) -> str:
    """
    Wraps a value as ="..." so spreadsheets keep it as text instead of turning
    long ids into numbers or dates. Empty values become the sentinel.
    """
    if not value:
        return settings.NOT_AVAILABLE
    escaped = str(value).replace('"', '""')
    return f'="{escaped}"'
