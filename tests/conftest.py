import pandas as pd
import pytest

from order_export.ordering import records_to_frame
from order_export.schemas import SourceRecord

# One blank line of the Amazon export; tests override what they care about.
BASE_ROW = {
    "Website": "Amazon.com",
    "Order ID": "123",
    "Order Date": "2022-01-01T00:00:00Z",
    "Purchase Order Number": "Not Applicable",
    "Currency": "USD",
    "Unit Price": "",
    "Unit Price Tax": "",
    "Shipping Charge": "",
    "Total Discounts": "",
    "Total Owed": "",
    "Shipment Item Subtotal": "",
    "Shipment Item Subtotal Tax": "",
    "ASIN": "B01ABC",
    "Product Condition": "",
    "Quantity": "",
    "Payment Instrument Type": "",
    "Order Status": "",
    "Shipment Status": "",
    "Ship Date": "",
    "Shipping Option": "",
    "Shipping Address": "",
    "Billing Address": "",
    "Carrier Name & Tracking Number": "",
    "Product Name": "",
    "Gift Message": "",
    "Gift Sender Name": "",
    "Gift Recipient Contact Details": "",
    "Item Serial Number": "",
    "Vendor": "",
}


@pytest.fixture
def make_row():
    def _make_row(overrides: dict = None) -> dict:
        return {**BASE_ROW, **(overrides or {})}

    return _make_row


@pytest.fixture
def make_record(make_row):
    def _make_record(overrides: dict = None) -> SourceRecord:
        return SourceRecord(**make_row(overrides))

    return _make_record


@pytest.fixture
def make_frame(make_record):
    def _make_frame(rows: list[dict]) -> pd.DataFrame:
        return records_to_frame([make_record(row) for row in rows])

    return _make_frame


@pytest.fixture
def write_export(tmp_path, make_row):
    """Writes rows as an Amazon export CSV and returns its path."""

    def _write_export(rows: list[dict], name: str = "Retail.OrderHistory.1.csv"):
        path = tmp_path / "input" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        pd.DataFrame([make_row(row) for row in rows]).to_csv(path, index=False)
        return path

    return _write_export
