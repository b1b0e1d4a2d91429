import csv
import logging
from pathlib import Path
from typing import Any, Optional
import pandas as pd
import requests
from pydantic import BaseModel

from . import settings
from .schemas import InventoryRow, TrackingRow
from .utils import load_csv

logger = logging.getLogger(__name__)


def load_order_history(file_path: Path) -> pd.DataFrame:
    """Loads the Amazon order history export. A missing or unreadable file raises."""
    logger.info(f"Loading order history from {file_path}")
    df = load_csv(file_path)
    logger.info(f"  > Read {len(df)} rows from {file_path.name}")
    return df


def read_last_import(file_path: Path) -> str:
    """Returns the Order ID stored by the previous run, or '' on a first run."""
    if not file_path.exists():
        logger.info(f"No last-import marker at {file_path}. Importing everything.")
        return ""
    return file_path.read_text(encoding="utf-8").strip()


def write_last_import(file_path: Path, order_id: str):
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(order_id, encoding="utf-8")
    logger.info(f"✅ Last import marker set to '{order_id}'.")


def _rows_to_frame(rows: list[BaseModel], model: type[BaseModel]) -> pd.DataFrame:
    # Field order of the model is the column order of the file.
    columns = [info.alias or name for name, info in model.model_fields.items()]
    records = [row.model_dump(mode="json", by_alias=True) for row in rows]
    return pd.DataFrame(records, columns=columns)


def save_inventory_feed(rows: list[InventoryRow], file_path: Path):
    file_path.parent.mkdir(parents=True, exist_ok=True)
    _rows_to_frame(rows, InventoryRow).to_csv(file_path, index=False)
    logger.info(f"✅ Inventory feed saved to: {file_path} ({len(rows)} rows)")


def save_tracking_sheet(rows: list[TrackingRow], file_path: Path):
    # The tracking sheet import expects every field quoted.
    file_path.parent.mkdir(parents=True, exist_ok=True)
    _rows_to_frame(rows, TrackingRow).to_csv(
        file_path, index=False, quoting=csv.QUOTE_ALL
    )
    logger.info(f"✅ Tracking sheet saved to: {file_path} ({len(rows)} rows)")


def post_to_webhook(metadata: Optional[dict[str, Any]] = None, report_type: str = "orders"):
    """
    Posts the run summary to the webhook. Failures are logged, never raised:
    the files and the marker are already written at this point.
    """
    if not settings.WEBHOOK_URL:
        logger.warning("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return

    logger.info(f"🚀 Posting {report_type} summary to webhook: {settings.WEBHOOK_URL}")

    payload = {
        "reportType": report_type,
        "statusSummary": metadata or {},
    }

    try:
        response = requests.post(settings.WEBHOOK_URL, json=payload, timeout=15)
        response.raise_for_status()
        logger.info("✅ Summary successfully posted to webhook.")
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
