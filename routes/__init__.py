"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.fulfillment import router as fulfillment_router

__all__ = [
    "fulfillment_router",
]
