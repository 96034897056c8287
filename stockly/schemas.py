from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Message(BaseModel):
    message: str


# --- users / auth ---


class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str


class UserPublic(BaseModel):
    id: int
    name: str
    email: EmailStr
    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    access_token: str
    token_type: str


# --- products ---


class ProductSchema(BaseModel):
    name: str
    sku: str
    price: float = Field(ge=0)
    # "12" and 12 are both accepted; the model always holds an int
    quantity: int = Field(ge=0)
    category: str = 'Unknown'
    supplier: str = 'Unknown'
    status: str = 'Available'


class ProductUpdateSchema(BaseModel):
    name: str | None = None
    sku: str | None = None
    price: float | None = Field(None, ge=0)
    quantity: int | None = Field(None, ge=0)
    category: str | None = None
    supplier: str | None = None
    status: str | None = None


class ProductPublic(BaseModel):
    id: str
    name: str
    sku: str
    price: float = Field(ge=0)
    quantity: int = Field(ge=0)
    category: str
    supplier: str
    status: str
    created_at: datetime
    user_id: int
    model_config = ConfigDict(from_attributes=True)


class ProductListResponse(BaseModel):
    products: list[ProductPublic]
    total_count: int


# --- categories / suppliers ---


class NamedPayload(BaseModel):
    """Body shared by every method of a named resource endpoint."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str | None = None
    name: str | None = None


class NamedPublic(BaseModel):
    id: str
    name: str
    user_id: int
    model_config = ConfigDict(from_attributes=True)


# --- insights ---


class CategorySlice(BaseModel):
    name: str
    value: int
    count: int
    total_value: float


class StatusSlice(BaseModel):
    name: str
    value: int


class PriceRangeSlice(BaseModel):
    name: str
    value: int


class MonthlyTrendPoint(BaseModel):
    month: str
    products: int
    monthly_added: int


class TopProduct(BaseModel):
    name: str
    value: float
    quantity: int


class InsightsSummary(BaseModel):
    total_products: int = 0
    total_value: float = 0
    total_quantity: int = 0
    average_price: float = 0
    low_stock_items: int = 0
    out_of_stock_items: int = 0
    stock_utilization: float = 0
    value_density: float = 0
    stock_coverage: float = 0
    category_distribution: list[CategorySlice] = []
    status_distribution: list[StatusSlice] = []
    price_range_distribution: list[PriceRangeSlice] = []
    monthly_trend: list[MonthlyTrendPoint] = []
    top_products: list[TopProduct] = []
    low_stock_products: list[ProductPublic] = []


# --- api status ---


class EndpointStatus(BaseModel):
    name: str
    path: str
    status: str
    response_time: int | None = None
    last_checked: datetime


class SystemStatus(BaseModel):
    project: str
    environment: str
    current_time: datetime
    uptime: str
    api_health: str
    endpoints: list[EndpointStatus]
    last_checked: datetime
