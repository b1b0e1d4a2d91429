import logging
from decimal import Decimal
import pandas as pd

from . import settings, utils
from .mappers import map_condition, map_status
from .schemas import InventoryRow, InventoryType, TrackingRow

logger = logging.getLogger(__name__)


def prep_and_ship_cost(shipping_address: str) -> Decimal:
    if settings.PREP_FACILITY_MARKER in (shipping_address or ""):
        return settings.PREP_FACILITY_RATE
    return settings.DIRECT_SHIP_RATE


def _format_dates(dates: pd.Series, date_format: str) -> pd.Series:
    return dates.dt.strftime(date_format).fillna("")


def build_inventory_rows(df: pd.DataFrame) -> list[InventoryRow]:
    """
    Projects order lines onto the inventory upload feed, one row per line.
    Conditions are capped so a listing never claims New or Like New.
    """
    feed = pd.DataFrame(
        {
            "product_id": df["product_id"],
            "title": df["title"],
            "cost": df["total_owed"],
            "list_price": df["total_owed"].map(utils.double_price),
            "quantity": df["quantity"],
            # SKU: prefix + ASIN + Order ID keeps re-bought ASINs unique.
            "sku": settings.SKU_PREFIX + df["product_id"] + "-" + df["order_id"],
            "vendor": settings.VENDOR_LABEL,
            "inventory_type": InventoryType(settings.INVENTORY_TYPE),
            "purchase_date": _format_dates(
                df["order_date"], settings.INVENTORY_DATE_FORMAT
            ),
            "condition": df["condition"].map(lambda c: map_condition(c, capped=True)),
        },
        index=df.index,
    )
    rows = [InventoryRow(**row) for row in feed.to_dict("records")]
    logger.info(f"Built {len(rows)} inventory rows.")
    return rows


def build_tracking_rows(df: pd.DataFrame) -> list[TrackingRow]:
    """
    Projects order lines onto the tracking sheet.

    `df` is expected oldest first and the output keeps that order. Lines dated
    before TRACKING_START_YEAR, or with no usable date, are left out.
    """
    in_range = df["order_date"].dt.year >= settings.TRACKING_START_YEAR
    recent = df[in_range.fillna(False).astype(bool)]
    skipped = len(df) - len(recent)
    if skipped:
        logger.info(
            f"Skipping {skipped} rows dated before {settings.TRACKING_START_YEAR}."
        )

    sheet = pd.DataFrame(
        {
            "status": recent["order_status"].map(map_status),
            "date": _format_dates(recent["order_date"], settings.TRACKING_DATE_FORMAT),
            "title": recent["title"],
            "product_id": recent["product_id"].map(utils.format_as_spreadsheet_text),
            "seller": recent["vendor"].where(
                recent["vendor"].str.strip() != "", settings.VENDOR_LABEL
            ),
            "quantity": recent["quantity"],
            "condition": recent["condition"].map(lambda c: map_condition(c, capped=False)),
            "market": settings.MARKET_LABEL,
            "buy": recent["total_owed"],
            "prep_and_ship": recent["shipping_address"].map(prep_and_ship_cost),
            "order_id": recent["order_id"],
            "tracking_number": recent["tracking"].map(utils.format_as_spreadsheet_text),
        },
        index=recent.index,
    )
    rows = [TrackingRow(**row) for row in sheet.to_dict("records")]
    logger.info(f"Built {len(rows)} tracking rows.")
    return rows
