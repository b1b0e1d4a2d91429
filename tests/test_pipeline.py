import pandas as pd
import pytest

from order_export.pipelines.order_history import OrderHistoryPipeline, build_export

# Five order lines across 2023-2024, deliberately out of order, plus a repeat.
EXPORT_ROWS = [
    {
        "Order ID": "113-0000002",
        "ASIN": "B000000004",
        "Order Date": "2023-12-20T09:00:00Z",
        "Total Owed": "7.00",
        "Quantity": "1",
        "Product Condition": "Used - Good",
        "Product Name": "December Book",
    },
    {
        "Order ID": "114-0000005",
        "ASIN": "B000000001",
        "Order Date": "2024-03-10T09:00:00Z",
        "Total Owed": "12.34",
        "Quantity": "1",
        "Product Condition": "New",
        "Product Name": "March Book",
        "Shipping Address": "POLARIS PREP CENTER",
        "Carrier Name & Tracking Number": "UPS(1Z999)",
        "Order Status": "Closed",
        "Vendor": "Seller A",
    },
    {
        "Order ID": "114-0000003",
        "ASIN": "B000000003",
        "Order Date": "2024-01-15T09:00:00Z",
        "Total Owed": "3.10",
        "Quantity": "2",
        "Product Condition": "Used - Like New",
        "Product Name": "January Book",
    },
    {
        "Order ID": "114-0000004",
        "ASIN": "B000000002",
        "Order Date": "2024-02-01T09:00:00Z",
        "Total Owed": "5.55",
        "Quantity": "1",
        "Product Name": "February Book",
        "Order Status": "Cancelled",
    },
    {
        "Order ID": "113-0000001",
        "ASIN": "B000000005",
        "Order Date": "2023-06-01T09:00:00Z",
        "Total Owed": "1.00",
        "Quantity": "1",
        "Product Name": "June Book",
    },
    {
        "Order ID": "114-0000003",
        "ASIN": "B000000003",
        "Order Date": "2024-01-15T09:00:00Z",
        "Total Owed": "3.10",
        "Quantity": "2",
        "Product Condition": "Used - Like New",
        "Product Name": "January Book",
    },
]


@pytest.fixture
def pipeline_paths(tmp_path):
    return {
        "output_dir": tmp_path / "output",
        "last_import_path": tmp_path / ".last-import",
    }


def _read(path):
    return pd.read_csv(path, dtype=str, keep_default_na=False)


def test_first_run_end_to_end(write_export, pipeline_paths):
    source = write_export(EXPORT_ROWS)
    pipeline = OrderHistoryPipeline(source_path=source, test_mode=True, **pipeline_paths)

    assert pipeline.run() is True

    inventory = _read(pipeline.inventory_path)
    assert list(inventory.columns) == [
        "productid",
        "title",
        "cost",
        "list_price",
        "ex_quantity",
        "SKU",
        "vendor",
        "inventorytype",
        "purchase_date",
        "ex_condition",
    ]
    assert list(inventory["SKU"]) == [
        "LO-1167-B000000001-114-0000005",
        "LO-1167-B000000002-114-0000004",
        "LO-1167-B000000003-114-0000003",
        "LO-1167-B000000004-113-0000002",
        "LO-1167-B000000005-113-0000001",
    ]
    first = inventory.iloc[0]
    assert first["cost"] == "12.34"
    assert first["list_price"] == "24.68"
    assert first["purchase_date"] == "03/10/2024"
    assert first["ex_condition"] == "UsedVeryGood"
    assert first["inventorytype"] == "FBA"
    assert first["vendor"] == "Amazon"

    tracking = _read(pipeline.tracking_path)
    assert list(tracking.columns) == [
        "status",
        "date",
        "title",
        "isbn",
        "seller",
        "qty",
        "condition",
        "market",
        "buy",
        "prepAndShip",
        "landedCost",
        "amzFees",
        "totalUnitCost",
        "estimatedSell",
        "estimatedProfit",
        "sellDate",
        "daysHeld",
        "actualSell",
        "actualProfit",
        "roi",
        "roiPA",
        "orderId",
        "trackingNumber",
    ]
    assert list(tracking["orderId"]) == ["114-0000003", "114-0000004", "114-0000005"]
    assert list(tracking["status"]) == ["For Sale", "Closed", "For Sale"]
    assert list(tracking["condition"]) == ["UsedLikeNew", "UsedGood", "New"]
    assert list(tracking["prepAndShip"]) == ["1.85", "1.85", "3"]
    newest = tracking.iloc[-1]
    assert newest["isbn"] == '="B000000001"'
    assert newest["trackingNumber"] == '="UPS(1Z999)"'
    assert newest["seller"] == "Seller A"
    assert newest["date"] == "10/03/2024"
    placeholders = ["landedCost", "amzFees", "estimatedSell", "roi", "roiPA", "daysHeld"]
    assert (tracking[placeholders] == "").all().all()

    assert pipeline_paths["last_import_path"].read_text() == "114-0000005"


def test_tracking_file_quotes_every_field(write_export, pipeline_paths):
    source = write_export(EXPORT_ROWS)
    pipeline = OrderHistoryPipeline(source_path=source, test_mode=True, **pipeline_paths)

    pipeline.run()

    header, first_line = pipeline.tracking_path.read_text().splitlines()[:2]
    assert header.startswith('"status","date","title"')
    assert first_line.startswith('"For Sale","15/01/2024","January Book","=""B000000003"""')


def test_second_run_only_emits_new_orders(write_export, pipeline_paths):
    pipeline_paths["last_import_path"].write_text("114-0000004\n")
    source = write_export(EXPORT_ROWS)
    pipeline = OrderHistoryPipeline(source_path=source, test_mode=True, **pipeline_paths)

    assert pipeline.run() is True

    assert list(_read(pipeline.inventory_path)["productid"]) == ["B000000001"]
    assert list(_read(pipeline.tracking_path)["orderId"]) == ["114-0000005"]
    assert pipeline_paths["last_import_path"].read_text() == "114-0000005"


def test_rerun_with_current_marker_writes_empty_sheets(write_export, pipeline_paths):
    pipeline_paths["last_import_path"].write_text("114-0000005")
    source = write_export(EXPORT_ROWS)
    pipeline = OrderHistoryPipeline(source_path=source, test_mode=True, **pipeline_paths)

    assert pipeline.run() is True

    assert _read(pipeline.inventory_path).empty
    assert _read(pipeline.tracking_path).empty
    assert pipeline_paths["last_import_path"].read_text() == "114-0000005"


def test_missing_export_raises_and_writes_nothing(tmp_path, pipeline_paths):
    pipeline_paths["last_import_path"].write_text("114-0000001")
    pipeline = OrderHistoryPipeline(
        source_path=tmp_path / "input" / "missing.csv", test_mode=True, **pipeline_paths
    )

    with pytest.raises(FileNotFoundError):
        pipeline.run()

    assert not pipeline.inventory_path.exists()
    assert not pipeline.tracking_path.exists()
    assert pipeline_paths["last_import_path"].read_text() == "114-0000001"


def test_invalid_rows_abort_before_writing(write_export, pipeline_paths):
    source = write_export([{"Order ID": "", "ASIN": "B0"}])
    pipeline = OrderHistoryPipeline(source_path=source, test_mode=True, **pipeline_paths)

    assert pipeline.run() is False

    assert not pipeline.inventory_path.exists()
    assert not pipeline_paths["last_import_path"].exists()


def test_build_export_reports_counts_and_marker(make_record):
    records = [make_record(row) for row in EXPORT_ROWS]

    batch = build_export(records, last_import="113-0000002")

    assert batch.source_count == 6
    assert batch.unique_count == 5
    assert batch.fresh_count == 3
    assert batch.last_import == "113-0000002"
    assert batch.new_last_import == "114-0000005"
    assert [row.order_id for row in batch.tracking_rows] == [
        "114-0000003",
        "114-0000004",
        "114-0000005",
    ]


def test_build_export_on_empty_input_keeps_marker():
    batch = build_export([], last_import="114-0000001")

    assert batch.inventory_rows == []
    assert batch.tracking_rows == []
    assert batch.new_last_import == "114-0000001"


def test_build_export_survives_oversized_amount(make_record):
    record = make_record(
        {"Order ID": "A", "Order Date": "2024-01-01T00:00:00Z", "Total Owed": "1e30"}
    )

    batch = build_export([record], "")

    [inventory_row] = batch.inventory_rows
    assert inventory_row.list_price.is_nan()
    assert batch.tracking_rows[0].buy == record.total_owed
