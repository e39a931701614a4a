"""
Storefront product catalog.

Maps internal SKUs to the display name shown to customers and the
free-text query used to find the product on CJ Dropshipping.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class CatalogEntry:
    """A storefront SKU as known to CJ search."""
    name: str
    search_query: str


# =============================================================================
# PRODUCT CATALOG
# =============================================================================
# The search query is the whole matching strategy: CJ returns its best
# text match and we take the first hit.

PRODUCT_CATALOG: Mapping[str, CatalogEntry] = MappingProxyType({
    # VR
    "vr_lite": CatalogEntry("VR Phone Headset", "VR headset phone 3D glasses"),
    "vr_pro": CatalogEntry("Standalone VR Headset", "standalone VR headset 6DOF"),
    "vr_ultra": CatalogEntry("Premium VR Headset", "VR headset 4K eye tracking"),

    # 3D glasses
    "3d_basic": CatalogEntry("3D Glasses 5-pack", "red cyan 3D glasses 5 pack"),
    "3d_polarized": CatalogEntry("Polarized 3D Glasses", "polarized 3D glasses"),
    "3d_clip": CatalogEntry("Clip-On 3D Glasses", "clip on 3D glasses"),

    # Accessories
    "controller": CatalogEntry("Bluetooth Controller", "bluetooth game controller mobile"),
    "headphones": CatalogEntry("Wireless Earbuds", "wireless earbuds low latency gaming"),
    "stand": CatalogEntry("Phone Stand", "adjustable phone tablet stand"),

    # School supplies
    "pencil_case": CatalogEntry("Pencil Case", "cartoon pencil case pouch kids"),
    "gel_pens": CatalogEntry("Gel Pens 12-pack", "kawaii gel pens 12 pack"),
    "sticker_pack": CatalogEntry("Sticker Pack 50pc", "vinyl sticker pack 50pcs gaming"),
    "backpack": CatalogEntry("School Backpack", "cartoon school backpack kids"),
    "erasers": CatalogEntry("Erasers Set 20pc", "mini animal erasers set cute"),
    "notebook": CatalogEntry("Notebook 3-pack", "holographic notebook A5 lined"),

    # Collectibles
    "labubu": CatalogEntry("Labubu Figure", "labubu blind box figure"),
    "mini_figures": CatalogEntry("Mini Figures 5-Pack", "mini collectible figures surprise"),
    "squishy_toy": CatalogEntry("Squishy Set 3pc", "kawaii squishy toy slow rise"),
    "blind_bag": CatalogEntry("Mystery Blind Bag", "mystery toy blind bag kids"),

    # Fidgets
    "pop_it": CatalogEntry("Pop-It Fidget", "pop it fidget rainbow"),
    "fidget_cube": CatalogEntry("Fidget Cube", "fidget cube 6 sided"),
    "fidget_spinner": CatalogEntry("LED Spinner", "LED fidget spinner light up"),
    "magnetic_rings": CatalogEntry("Magnetic Rings 3pc", "magnetic fidget rings 3 pack"),
    "stress_ball": CatalogEntry("Stress Balls 4pc", "mesh stress ball neon squeeze"),
    "fidget_slug": CatalogEntry("Fidget Slug", "articulated fidget slug 3D"),
    "infinity_cube": CatalogEntry("Infinity Cube", "infinity cube fidget toy"),
})


def lookup(sku: str) -> Optional[CatalogEntry]:
    """
    Find the catalog entry for a SKU.

    Args:
        sku: Internal storefront SKU

    Returns:
        CatalogEntry, or None for an unknown SKU
    """
    return PRODUCT_CATALOG.get(sku)


def display_name(sku: str) -> str:
    """Display name for a SKU, falling back to the raw SKU."""
    entry = lookup(sku)
    return entry.name if entry else sku
