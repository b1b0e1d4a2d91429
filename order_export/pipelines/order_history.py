import logging
from pathlib import Path
from typing import Optional
import pandas as pd
from pydantic import ValidationError

from order_export import data_handler, settings
from order_export.ordering import (
    dedupe_orders,
    filter_since_last_import,
    newest_order_id,
    records_to_frame,
    sort_orders,
)
from order_export.pipeline import DataPipeline
from order_export.schemas import ExportBatch, SourceRecord
from order_export.transformers import build_inventory_rows, build_tracking_rows

logger = logging.getLogger(__name__)


def build_export(records: list[SourceRecord], last_import: str = "") -> ExportBatch:
    """
    One pass over the order history: dedupe, sort newest first, keep the orders
    placed since `last_import`, and project them onto both output sheets.

    The returned batch carries the marker for the next run, which is the newest
    Order ID of the whole export, not just of the fresh rows.
    """
    df = records_to_frame(records)
    unique_df = sort_orders(dedupe_orders(df))

    new_last_import = newest_order_id(unique_df, fallback=last_import)
    fresh_df = filter_since_last_import(unique_df, last_import)
    logger.info(
        f"{len(df)} lines, {len(unique_df)} unique, "
        f"{len(fresh_df)} new since '{last_import or '(first run)'}'."
    )

    inventory_rows = build_inventory_rows(fresh_df)
    # The tracking sheet is appended to, so it wants the oldest order first.
    tracking_rows = build_tracking_rows(fresh_df.iloc[::-1])

    return ExportBatch(
        inventory_rows=inventory_rows,
        tracking_rows=tracking_rows,
        last_import=last_import,
        new_last_import=new_last_import,
        source_count=len(df),
        unique_count=len(unique_df),
        fresh_count=len(fresh_df),
    )


class OrderHistoryPipeline(DataPipeline):
    def __init__(
        self,
        source_path: Optional[Path] = None,
        output_dir: Optional[Path] = None,
        last_import_path: Optional[Path] = None,
        test_mode: bool = False,
    ):
        super().__init__("order history", test_mode=test_mode)
        self.source_path = source_path or settings.INPUT_DIR / settings.ORDER_HISTORY_FILENAME
        output_dir = output_dir or settings.OUTPUT_DIR
        self.inventory_path = output_dir / settings.INVENTORY_FILENAME
        self.tracking_path = output_dir / settings.TRACKING_FILENAME
        self.last_import_path = last_import_path or settings.LAST_IMPORT_FILE

    def extract(self) -> pd.DataFrame:
        return data_handler.load_order_history(self.source_path)

    def transform(self, df: pd.DataFrame) -> ExportBatch | None:
        try:
            logger.info("Validating order lines against schema...")
            records = [
                SourceRecord(**{str(k): v for k, v in row.items()})
                for row in df.to_dict("records")
            ]
            logger.info(f"✅ Data validation successful ({len(records)} records).")
        except ValidationError as e:
            logger.error("❌ Data validation failed!")
            logger.error(e)
            return None

        # Read the marker before anything is written.
        last_import = data_handler.read_last_import(self.last_import_path)
        return build_export(records, last_import)

    def load(self, batch: ExportBatch):
        data_handler.save_inventory_feed(batch.inventory_rows, self.inventory_path)
        data_handler.save_tracking_sheet(batch.tracking_rows, self.tracking_path)

        # Only move the marker once both files are on disk.
        if batch.new_last_import:
            data_handler.write_last_import(self.last_import_path, batch.new_last_import)
        else:
            logger.warning("⚠️ Export was empty. Last import marker left unchanged.")

        summary = {
            "sourceRows": batch.source_count,
            "uniqueRows": batch.unique_count,
            "newRows": batch.fresh_count,
            "inventoryRows": len(batch.inventory_rows),
            "trackingRows": len(batch.tracking_rows),
            "lastImport": batch.new_last_import,
        }
        logger.info("\n--- Final Status Summary ---")
        for key, value in summary.items():
            logger.info(f"{key}: {value}")

        if not self.test_mode:
            data_handler.post_to_webhook(metadata=summary, report_type="orders")
        else:
            logger.info("🧪 Test Mode: Skipping webhook post.")
