"""
Request and response shapes of the JSON API.

Bodies go over the wire in camelCase; snake_case keys are accepted on input
too. Money is serialized as a decimal string.
"""
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Dict, Iterable, List, Literal, Optional, Type, TypeVar

from flask import Response, jsonify, request
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from shophub.utils.exceptions import ValidationError

Money = Annotated[Decimal, Field(max_digits=10, decimal_places=2, ge=0)]
# Amounts a client computed itself (float arithmetic), checked against the
# server price within the order tolerance rather than by precision
SubmittedAmount = Annotated[Decimal, Field(ge=0)]

OrderStatus = Literal["pending", "processing", "shipped", "delivered", "cancelled"]
PaymentStatus = Literal["pending", "completed", "failed", "refunded"]
DiscountType = Literal["percentage", "fixed", "shipping"]


class Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


def _reject_null(value: Any) -> Any:
    """Partial updates may leave a required column out, but not clear it."""
    if value is None:
        raise ValueError("may not be null")
    return value


# ----------------------------------------------------------------------
# Input
# ----------------------------------------------------------------------
class ProductQuery(Schema):
    category_id: Optional[int] = None
    search: Optional[str] = None
    featured: bool = False
    limit: Optional[int] = Field(default=None, ge=1, le=100)
    offset: Optional[int] = Field(default=None, ge=0)


class CategoryIn(Schema):
    name: str = Field(min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = None


class CategoryUpdate(Schema):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = None

    @field_validator("name", "slug", mode="before")
    @classmethod
    def not_null(cls, value: Any) -> Any:
        return _reject_null(value)


class ProductIn(Schema):
    name: str = Field(min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    price: Money
    original_price: Optional[Money] = None
    sku: str = Field(min_length=1, max_length=100)
    category_id: Optional[int] = None
    stock: int = Field(default=0, ge=0)
    images: List[str] = Field(default_factory=list)
    is_active: bool = True
    is_featured: bool = False
    tags: List[str] = Field(default_factory=list)


class ProductUpdate(Schema):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Money] = None
    original_price: Optional[Money] = None
    sku: Optional[str] = Field(default=None, min_length=1, max_length=100)
    category_id: Optional[int] = None
    stock: Optional[int] = Field(default=None, ge=0)
    images: Optional[List[str]] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    tags: Optional[List[str]] = None

    @field_validator("name", "slug", "price", "sku", "stock", "images", "is_active", "is_featured", "tags", mode="before")
    @classmethod
    def not_null(cls, value: Any) -> Any:
        return _reject_null(value)


class ReviewIn(Schema):
    rating: int = Field(ge=1, le=5)
    title: Optional[str] = Field(default=None, max_length=255)
    comment: Optional[str] = None


class CartItemIn(Schema):
    product_id: int
    quantity: int = Field(default=1, ge=1)


class CartItemUpdate(Schema):
    quantity: int = Field(ge=1)


class WishlistItemIn(Schema):
    product_id: int


class Address(Schema):
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    country: str = Field(min_length=1)


class OrderIn(Schema):
    shipping_address: Address
    billing_address: Optional[Address] = None
    payment_method: str = Field(default="card", min_length=1, max_length=50)
    payment_status: PaymentStatus = "pending"
    total_amount: Optional[SubmittedAmount] = None


class OrderItemIn(Schema):
    product_id: int
    quantity: int = Field(ge=1)
    price: Optional[SubmittedAmount] = None


class OrderRequest(Schema):
    order: OrderIn
    items: List[OrderItemIn] = Field(default_factory=list)

    def details(self) -> Dict[str, Any]:
        """Order fields as the checkout processor expects them."""
        shipping = self.order.shipping_address.model_dump(by_alias=True)
        billing = self.order.billing_address
        return {
            "shipping_address": shipping,
            "billing_address": billing.model_dump(by_alias=True) if billing else shipping,
            "payment_method": self.order.payment_method,
            "payment_status": self.order.payment_status,
            "total_amount": self.order.total_amount,
        }

    def lines(self) -> List[Dict[str, Any]]:
        return [item.model_dump() for item in self.items]


class OrderStatusIn(Schema):
    status: OrderStatus


class CouponIn(Schema):
    code: str = Field(min_length=1, max_length=50)
    description: Optional[str] = None
    discount_type: DiscountType
    discount_value: Money
    min_order_amount: Money = Decimal("0.00")
    max_uses: Optional[int] = Field(default=None, ge=1)
    is_active: bool = True
    expires_at: Optional[datetime] = None


# ----------------------------------------------------------------------
# Output
# ----------------------------------------------------------------------
class UserOut(Schema):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    is_admin: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ReviewerOut(Schema):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None


class CategoryOut(Schema):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    image: Optional[str] = None
    created_at: Optional[datetime] = None


class ReviewOut(Schema):
    id: int
    product_id: int
    user_id: str
    rating: int
    title: Optional[str] = None
    comment: Optional[str] = None
    is_verified: bool
    created_at: Optional[datetime] = None
    user: Optional[ReviewerOut] = None


class ProductSummaryOut(Schema):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    price: Decimal
    original_price: Optional[Decimal] = None
    sku: str
    category_id: Optional[int] = None
    stock: int
    images: List[str]
    is_active: bool
    is_featured: bool
    tags: List[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductOut(ProductSummaryOut):
    category: Optional[CategoryOut] = None
    reviews: List[ReviewOut] = []
    average_rating: float
    review_count: int


class CartItemOut(Schema):
    id: int
    user_id: str
    product_id: int
    quantity: int
    created_at: Optional[datetime] = None
    product: ProductSummaryOut


class WishlistItemOut(Schema):
    id: int
    user_id: str
    product_id: int
    created_at: Optional[datetime] = None
    product: ProductSummaryOut


class OrderItemOut(Schema):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price: Decimal
    created_at: Optional[datetime] = None
    product: Optional[ProductSummaryOut] = None


class OrderOut(Schema):
    id: int
    user_id: str
    order_number: str
    total_amount: Decimal
    shipping_address: Dict[str, Any]
    billing_address: Dict[str, Any]
    payment_method: str
    payment_status: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: List[OrderItemOut] = []


class CouponOut(Schema):
    id: int
    code: str
    description: Optional[str] = None
    discount_type: str
    discount_value: Decimal
    min_order_amount: Decimal
    max_uses: Optional[int] = None
    used_count: int
    is_active: bool
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class DashboardStatsOut(Schema):
    total_revenue: float
    total_orders: int
    total_products: int
    total_users: int


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------
S = TypeVar("S", bound=Schema)


def load(schema: Type[S], data: Any = None) -> S:
    """Validate ``data`` (the JSON body by default) against ``schema``."""
    if data is None:
        data = request.get_json(silent=True)
        if data is None:
            raise ValidationError("Request body must be JSON", errors=[])
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid input",
            errors=e.errors(include_url=False, include_context=False, include_input=False),
        ) from e


def serialize(schema: Type[Schema], obj: Any) -> Dict[str, Any]:
    return schema.model_validate(obj).model_dump(mode="json", by_alias=True)


def dump(schema: Type[Schema], obj: Any, status: int = 200) -> tuple[Response, int]:
    return jsonify(serialize(schema, obj)), status


def dump_many(schema: Type[Schema], objs: Iterable[Any]) -> Response:
    return jsonify([serialize(schema, obj) for obj in objs])
