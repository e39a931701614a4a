"""
Business logic services.

Each service handles one domain area.
"""

from services.fulfillment_service import FulfillmentService, get_fulfillment_service

__all__ = [
    "FulfillmentService",
    "get_fulfillment_service",
]
