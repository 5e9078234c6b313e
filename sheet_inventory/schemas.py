from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, computed_field

IN_STOCK = "In Stock"
LOW_STOCK = "Low Stock"
OUT_OF_STOCK = "Out of Stock"

StockStatus = Literal["In Stock", "Low Stock", "Out of Stock"]

UNCATEGORIZED = "Uncategorized"
UNASSIGNED = "Unassigned"

# Quantities from 1 up to (not including) this are Low Stock
LOW_STOCK_THRESHOLD = 8


def stock_status(quantity: int) -> StockStatus:
    """Maps a quantity to its stock status. The only way a status is ever produced."""
    if quantity <= 0:
        return OUT_OF_STOCK
    if quantity < LOW_STOCK_THRESHOLD:
        return LOW_STOCK
    return IN_STOCK


class InventoryRecord(BaseModel):
    """
    Defines the data contract for a single normalized sheet row.
    Aliases follow the dashboard's camelCase naming so the JSON output
    can be consumed as-is by the front end.
    """

    id: str = Field(..., min_length=1)
    sku: str = ""
    part_number: str = Field(default="", alias="partNumber")
    name: str = ""
    category: str = UNCATEGORIZED
    location: str = UNASSIGNED
    quantity: int = 0
    alt_quantity: Optional[int] = Field(default=None, alias="altQuantity")
    etas: list[str] = Field(default_factory=list)
    eta: str = ""
    weight: Optional[str] = None
    shipping_weight: Optional[str] = Field(default=None, alias="shippingWeight")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    price: float = 0.0
    raw: dict[str, str] = Field(default_factory=dict)

    class Config:
        populate_by_name = True
        frozen = True

    @computed_field
    @property
    def status(self) -> StockStatus:
        return stock_status(self.quantity)


class InventoryStats(BaseModel):
    total_items: int = Field(default=0, alias="totalItems")
    total_value: float = Field(default=0.0, alias="totalValue")
    low_stock_count: int = Field(default=0, alias="lowStockCount")
    out_of_stock_count: int = Field(default=0, alias="outOfStockCount")
    categories: dict[str, int] = Field(default_factory=dict)

    class Config:
        populate_by_name = True
        frozen = True


class ColumnMapping(BaseModel):
    """User supplied column letters per role. Blank roles are auto-detected."""

    model: str = ""
    sku: str = ""
    part_number: str = Field(default="", alias="partNumber")
    product_details: str = Field(default="", alias="productDetails")
    product_image: str = Field(default="", alias="productImage")
    quantity: str = ""
    alt_stock: str = Field(default="", alias="altStock")
    eta1: str = ""
    eta2: str = ""
    eta3: str = ""
    eta4: str = ""
    eta5: str = ""
    weight: str = ""
    shipping_weight: str = Field(default="", alias="shippingWeight")

    class Config:
        populate_by_name = True


class ColumnRoleMap(BaseModel):
    """Resolved zero-based column index per role; -1 means the field is absent."""

    model: int = -1
    sku: int = -1
    part_number: int = -1
    product_details: int = -1
    product_image: int = -1
    quantity: int = -1
    alt_stock: int = -1
    etas: tuple[int, int, int, int, int] = (-1, -1, -1, -1, -1)
    weight: int = -1
    shipping_weight: int = -1
    location: int = -1
    price: int = -1

    class Config:
        frozen = True


class ItemOverride(BaseModel):
    id: str
    is_hidden: bool = False
    product_image: Optional[str] = None


class FilterState(BaseModel):
    search_query: str = Field(default="", alias="searchQuery")
    multi_lookups: list[str] = Field(default_factory=list, alias="multiLookups")
    category: Optional[str] = None
    quick_filter: Literal["ALL", "LOW", "OUT"] = Field(default="ALL", alias="quickFilter")

    class Config:
        populate_by_name = True


class InventorySnapshot(BaseModel):
    """Read-only view of the store at one point in time."""

    records: tuple[InventoryRecord, ...] = ()
    stats: InventoryStats = Field(default_factory=InventoryStats)
    last_updated: Optional[datetime] = None
    error: Optional[str] = None
    ticket: int = 0

    class Config:
        frozen = True
