"""
Fulfillment models.

Inbound order request, CJ product/order shapes, and the four fulfillment
outcomes returned to the storefront:
- manual: nothing was ordered, a human must fulfill
- auto: CJ accepted the order
- partial: the order call happened but CJ reported a non-success code
- error: something failed, a human must fulfill
"""

from decimal import Decimal
from typing import Annotated, Any, Literal, Optional, Union
from pydantic import Field, field_serializer

from models.base import BaseSchema, CamelSchema


# ===================
# INBOUND REQUEST
# ===================

class ShippingInfo(BaseSchema):
    """Shipping details echoed back for manual follow-up."""

    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None


class FulfillRequest(CamelSchema):
    """Paid order forwarded by the storefront checkout."""

    session_id: str = Field(..., min_length=1, description="Checkout session ID")
    items: list[str] = Field(..., description="Storefront SKUs, one per unit")
    shipping_name: Optional[str] = Field(None, description="Recipient name")
    shipping_address: Optional[str] = Field(None, description="Street address")
    shipping_city: Optional[str] = Field(None, description="City")
    shipping_state: Optional[str] = Field(None, description="State or province")
    shipping_zip: Optional[str] = Field(None, description="Postal code")
    shipping_country: Optional[str] = Field(None, description="ISO country code")
    shipping_phone: Optional[str] = Field(None, description="Recipient phone")
    email: Optional[str] = Field(None, description="Purchaser email")

    @property
    def shipping(self) -> ShippingInfo:
        return ShippingInfo(
            name=self.shipping_name,
            address=self.shipping_address,
            city=self.shipping_city,
            state=self.shipping_state,
            zip=self.shipping_zip,
            country=self.shipping_country,
        )


class ItemEcho(BaseSchema):
    """Requested SKU with its display name."""

    id: str
    name: str


# ===================
# CJ PRODUCT / ORDER
# ===================

class ResolvedProduct(BaseSchema):
    """First CJ search hit for a catalog query."""

    product_id: str
    variant_id: str = ""  # Empty when CJ returned no variants
    name: str = ""
    image_url: Optional[str] = None
    sell_price: Decimal = Decimal("0")

    @property
    def is_orderable(self) -> bool:
        """CJ orders reference variants, so a product without one can't be ordered."""
        return bool(self.variant_id)


class OrderLineItem(BaseSchema):
    """One CJ order line. Repeated SKUs become repeated lines."""

    vid: str
    quantity: int = 1


class OrderedProduct(OrderLineItem):
    """Resolved order line plus what we show the storefront."""

    name: str
    cost: Decimal


class SupplierOrder(BaseSchema):
    """Normalized order handed to the CJ order client."""

    session_id: str
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    products: list[OrderLineItem]


# ===================
# OUTCOMES
# ===================

class OrderedItem(BaseSchema):
    """Summary of one ordered line."""

    name: str
    cost: Decimal

    @field_serializer("cost")
    def serialize_cost(self, cost: Decimal) -> float:
        return float(cost)


class ManualOutcome(CamelSchema):
    """No order placed: either CJ isn't configured or nothing matched."""

    status: Literal["manual"] = "manual"
    reason: str
    session_id: str
    items: Optional[list[ItemEcho]] = None
    unmapped: Optional[list[str]] = None
    shipping: ShippingInfo


class _OrderPlacedOutcome(CamelSchema):
    cj_response: Any
    items_ordered: list[OrderedItem]
    unmapped: Optional[list[str]] = None  # Omitted when every SKU resolved


class AutoOutcome(_OrderPlacedOutcome):
    """CJ accepted the order."""

    status: Literal["auto"] = "auto"


class PartialOutcome(_OrderPlacedOutcome):
    """Order call made but CJ returned a non-success code."""

    status: Literal["partial"] = "partial"


class ErrorOutcome(CamelSchema):
    """Fulfillment failed. Carries everything needed to fulfill by hand."""

    status: Literal["error"] = "error"
    error: str
    session_id: str
    items: list[ItemEcho]
    shipping: ShippingInfo


FulfillmentOutcome = Annotated[
    Union[ManualOutcome, AutoOutcome, PartialOutcome, ErrorOutcome],
    Field(discriminator="status"),
]
