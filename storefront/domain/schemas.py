# storefront/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """JSON w camelCase, na wejsciu przyjmujemy tez snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


#kwoty trzymane jako Decimal, w JSON liczba zaokraglona do groszy
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v.quantize(Decimal("0.01"))), return_type=float, when_used="json"),
]


class OrderStatus(str, Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


class MessageOut(ApiModel):
    success: bool = True
    message: str


class CountOut(ApiModel):
    count: int


# ---------------------------------------------------------------- catalog


class ProductBrief(ApiModel):
    """Pola katalogu dolaczane do linii koszyka/wishlisty/zamowienia (tylko odczyt)."""

    id: str
    name: str
    price: Money
    image: str = ""


class ProductOut(ProductBrief):
    description: str = ""
    category_id: str | None = None
    is_featured: bool = False


class CollectionOut(ApiModel):
    id: str
    name: str
    slug: str
    image: str = ""
    description: str = ""
    is_active: bool = True
    sort_order: int = 0


# ---------------------------------------------------------------- cart


class CartItemIn(ApiModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: str = Field(..., min_length=1, max_length=64)
    quantity: int = Field(1, gt=0, description="Ilosc produktu (musi byc > 0)")


class CartQuantityIn(ApiModel):
    #<= 0 usuwa linie
    quantity: int


class CartLineOut(ApiModel):
    product_id: str
    quantity: int
    product: ProductBrief | None = None


class CartOut(ApiModel):
    success: bool = True
    items: List[CartLineOut]


# ---------------------------------------------------------------- wishlist


class WishlistIn(ApiModel):
    product_id: str = Field(..., min_length=1, max_length=64)
    note: str | None = Field(None, max_length=500)


class WishlistItemOut(ApiModel):
    id: int
    user_id: int
    product_id: str
    note: str | None = None
    added_at: datetime
    product: ProductBrief | None = None


# ---------------------------------------------------------------- orders


class ShippingAddress(ApiModel):
    address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    zip: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=50)


class OrderLineIn(ApiModel):
    product_id: str = Field(..., min_length=1, max_length=64)
    quantity: int = Field(..., gt=0)


class OrderCreate(ApiModel):
    """Schema dla tworzenia zamowienia."""

    order_items: List[OrderLineIn] = Field(..., min_length=1)
    shipping_address: ShippingAddress
    total_price: Decimal = Field(..., ge=0)
    clear_cart: bool = True


class OrderStatusIn(ApiModel):
    status: str


class OrderLineOut(ApiModel):
    product_id: str
    quantity: int
    name: str
    unit_price: Money
    image: str = ""
    #aktualne dane z katalogu, None gdy produkt zniknal
    product: ProductBrief | None = None


class OrderOut(ApiModel):
    id: int
    user_id: int
    status: OrderStatus
    total_price: Money
    shipping_address: ShippingAddress
    order_items: List[OrderLineOut]
    created_at: datetime


class TotalSalesOut(ApiModel):
    totalsales: Money


# ---------------------------------------------------------------- users


class RegisterIn(ApiModel):
    name: str
    email: str
    password: str


class LoginIn(ApiModel):
    email: str
    password: str


class GoogleLoginIn(ApiModel):
    credential: str = Field(..., min_length=1)


class UserRead(ApiModel):
    id: int
    name: str
    email: str
    is_admin: bool = False
    phone: str = ""
    street: str = ""
    apartment: str = ""
    city: str = ""
    zip: str = ""
    country: str = ""
    picture: str = ""


class UserUpdate(ApiModel):
    name: str | None = Field(None, min_length=2, max_length=100)
    password: str | None = None
    phone: str | None = Field(None, max_length=50)
    street: str | None = Field(None, max_length=255)
    apartment: str | None = Field(None, max_length=50)
    city: str | None = Field(None, max_length=100)
    zip: str | None = Field(None, max_length=20)
    country: str | None = Field(None, max_length=100)
    picture: str | None = Field(None, max_length=500)


class AuthOut(ApiModel):
    success: bool = True
    message: str | None = None
    token: str
    user: UserRead
