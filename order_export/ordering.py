import pandas as pd

from .schemas import SourceRecord

# Column names of the working DataFrame are the SourceRecord field names.
RECORD_COLUMNS = list(SourceRecord.model_fields.keys())

DEDUPE_KEY = ["order_id", "product_id"]
SORT_KEYS = ["order_date", "order_id", "product_id"]


def records_to_frame(records: list[SourceRecord]) -> pd.DataFrame:
    """
    Stacks validated records into a DataFrame, one row per record, in input order.
    `order_date` becomes a UTC datetime column with NaT for unparseable dates.
    """
    df = pd.DataFrame([record.model_dump() for record in records], columns=RECORD_COLUMNS)
    df["order_date"] = pd.to_datetime(df["order_date"], utc=True)
    return df


def dedupe_orders(df: pd.DataFrame) -> pd.DataFrame:
    """Drops repeated (Order ID, ASIN) lines. The first occurrence wins."""
    return df.drop_duplicates(subset=DEDUPE_KEY, keep="first").reset_index(drop=True)


def sort_orders(df: pd.DataFrame) -> pd.DataFrame:
    """
    Newest order first. Equal dates fall back to Order ID, then ASIN, both ascending.
    Rows with no usable date sort after every dated row.
    Returns a new DataFrame; the input is left as it was.
    """
    return df.sort_values(
        by=SORT_KEYS,
        ascending=[False, True, True],
        na_position="last",
        kind="stable",
    ).reset_index(drop=True)


def newest_order_id(df: pd.DataFrame, fallback: str = "") -> str:
    """The marker for the next run: the Order ID of the first (newest) sorted row."""
    if df.empty:
        return fallback
    return str(df["order_id"].iloc[0])


def filter_since_last_import(df: pd.DataFrame, last_import: str) -> pd.DataFrame:
    """
    Keeps the rows placed after the last import.

    `df` must already be sorted newest first. Everything from the first row
    carrying the `last_import` Order ID onwards was handled by a previous run
    and is dropped. A blank marker, or one that no longer appears in the export,
    lets every row through.
    """
    last_import = (last_import or "").strip()
    is_marker = df["order_id"].eq(last_import)
    if not last_import or not is_marker.any():
        return df.reset_index(drop=True)

    cutoff = int(is_marker.to_numpy().argmax())
    return df.iloc[:cutoff].reset_index(drop=True)
