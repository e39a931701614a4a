"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema, CamelSchema
from models.fulfillment import (
    FulfillRequest,
    ShippingInfo,
    ItemEcho,
    ResolvedProduct,
    OrderLineItem,
    OrderedProduct,
    SupplierOrder,
    OrderedItem,
    ManualOutcome,
    AutoOutcome,
    PartialOutcome,
    ErrorOutcome,
    FulfillmentOutcome,
)

__all__ = [
    # Base
    "BaseSchema",
    "CamelSchema",

    # Fulfillment
    "FulfillRequest",
    "ShippingInfo",
    "ItemEcho",
    "ResolvedProduct",
    "OrderLineItem",
    "OrderedProduct",
    "SupplierOrder",
    "OrderedItem",
    "ManualOutcome",
    "AutoOutcome",
    "PartialOutcome",
    "ErrorOutcome",
    "FulfillmentOutcome",
]
