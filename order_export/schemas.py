from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import utils


class Condition(str, Enum):
    """Condition vocabulary accepted by the inventory upload."""

    NEW = "New"
    USED_LIKE_NEW = "UsedLikeNew"
    USED_VERY_GOOD = "UsedVeryGood"
    USED_GOOD = "UsedGood"
    USED_ACCEPTABLE = "UsedAcceptable"
    COLLECTABLE_LIKE_NEW = "CollectableLikeNew"
    COLLECTABLE_VERY_GOOD = "CollectableVeryGood"
    COLLECTABLE_GOOD = "CollectableGood"
    COLLECTABLE_ACCEPTABLE = "CollectableAcceptable"


class InventoryType(str, Enum):
    FBA = "FBA"
    MF = "MF"


class SourceRecord(BaseModel):
    """
    One line of the Amazon order history export.
    Aliases are the export's column headers, so raw CSV rows validate directly.
    Columns we don't use (Website, Currency, Billing Address, ...) are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    order_id: str = Field(..., min_length=1, alias="Order ID")
    product_id: str = Field(..., min_length=1, alias="ASIN")
    order_date: Optional[datetime] = Field(default=None, alias="Order Date")
    order_status: str = Field(default="", alias="Order Status")
    condition: str = Field(default="", alias="Product Condition")
    quantity: int = Field(default=1, ge=1, alias="Quantity")
    total_owed: Decimal = Field(
        default=Decimal("NaN"), allow_inf_nan=True, alias="Total Owed"
    )
    shipping_address: str = Field(default="", alias="Shipping Address")
    tracking: str = Field(default="", alias="Carrier Name & Tracking Number")
    vendor: str = Field(default="", alias="Vendor")
    title: str = Field(default="", alias="Product Name")

    @field_validator("order_id", "product_id", mode="before")
    @classmethod
    def _strip_ids(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("order_date", mode="before")
    @classmethod
    def _parse_date(cls, value):
        return utils.parse_order_date(value)

    @field_validator("quantity", mode="before")
    @classmethod
    def _parse_quantity(cls, value):
        return utils.parse_quantity(value)

    @field_validator("total_owed", mode="before")
    @classmethod
    def _parse_amount(cls, value):
        return utils.parse_amount(value)


class InventoryRow(BaseModel):
    """
    A single row of the inventory upload feed.
    Field order is the column order of the upload, aliases are its headers.
    """

    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productid")
    title: str = Field(default="", alias="title")
    cost: Decimal = Field(..., allow_inf_nan=True, alias="cost")
    list_price: Decimal = Field(..., allow_inf_nan=True, alias="list_price")
    quantity: int = Field(default=1, ge=1, alias="ex_quantity")
    sku: str = Field(..., alias="SKU")
    vendor: str = Field(default="", max_length=40, alias="vendor")
    inventory_type: InventoryType = Field(..., alias="inventorytype")
    purchase_date: str = Field(default="", alias="purchase_date")
    condition: Condition = Field(..., alias="ex_condition")


class TrackingRow(BaseModel):
    """
    A single row of the tracking spreadsheet.
    The trailing financial columns stay empty; they are filled in by hand once
    an item sells.
    """

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(..., alias="status")
    date: str = Field(default="", alias="date")
    title: str = Field(default="", alias="title")
    product_id: str = Field(..., alias="isbn")
    seller: str = Field(default="", alias="seller")
    quantity: int = Field(default=1, ge=1, alias="qty")
    condition: Condition = Field(..., alias="condition")
    market: str = Field(..., alias="market")
    buy: Decimal = Field(..., allow_inf_nan=True, alias="buy")
    prep_and_ship: Decimal = Field(..., alias="prepAndShip")
    landed_cost: str = Field(default="", alias="landedCost")
    amz_fees: str = Field(default="", alias="amzFees")
    total_unit_cost: str = Field(default="", alias="totalUnitCost")
    estimated_sell: str = Field(default="", alias="estimatedSell")
    estimated_profit: str = Field(default="", alias="estimatedProfit")
    sell_date: str = Field(default="", alias="sellDate")
    days_held: str = Field(default="", alias="daysHeld")
    actual_sell: str = Field(default="", alias="actualSell")
    actual_profit: str = Field(default="", alias="actualProfit")
    roi: str = Field(default="", alias="roi")
    roi_pa: str = Field(default="", alias="roiPA")
    order_id: str = Field(..., alias="orderId")
    tracking_number: str = Field(..., alias="trackingNumber")


class ExportBatch(BaseModel):
    """Everything one pass over the order history produces."""

    inventory_rows: list[InventoryRow] = Field(default_factory=list)
    tracking_rows: list[TrackingRow] = Field(default_factory=list)
    last_import: str = ""
    new_last_import: str = ""
    source_count: int = 0
    unique_count: int = 0
    fresh_count: int = 0
