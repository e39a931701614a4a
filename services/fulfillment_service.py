"""
Fulfillment service.

Turns a paid storefront order into a CJ Dropshipping order:
authenticate, resolve each SKU to a CJ variant, place one order with
everything that resolved. Every path ends in a FulfillmentOutcome so the
caller always has enough to fulfill by hand.
"""

from typing import Optional
import structlog

from config.catalog import lookup, display_name
from models.fulfillment import (
    FulfillRequest,
    FulfillmentOutcome,
    ItemEcho,
    OrderedItem,
    OrderedProduct,
    OrderLineItem,
    SupplierOrder,
    ManualOutcome,
    AutoOutcome,
    PartialOutcome,
    ErrorOutcome,
)
from integrations.cj_dropshipping import (
    get_access_token,
    search_product,
    place_order,
    is_success,
)

logger = structlog.get_logger(__name__)


REASON_NOT_CONFIGURED = "CJ_API_KEY not configured"
REASON_NO_MATCHES = "No matching supplier products found, fulfill manually"


class FulfillmentService:
    """
    Orchestrates one fulfillment request.

    Holds no state between requests.
    """

    def fulfill(
        self,
        request: FulfillRequest,
        api_key: Optional[str]
    ) -> FulfillmentOutcome:
        """
        Fulfill an order through CJ.

        Args:
            request: Validated storefront order
            api_key: CJ API key, None when not configured

        Returns:
            ManualOutcome, AutoOutcome, PartialOutcome, or ErrorOutcome
        """
        if not api_key:
            logger.warning(
                "cj_not_configured_manual_fulfillment",
                session_id=request.session_id
            )
            return ManualOutcome(
                reason=REASON_NOT_CONFIGURED,
                session_id=request.session_id,
                items=self._item_echo(request.items),
                shipping=request.shipping,
            )

        try:
            return self._fulfill_with_cj(request, api_key)
        except Exception as e:
            logger.error(
                "cj_fulfillment_failed",
                session_id=request.session_id,
                error=str(e),
                error_type=type(e).__name__
            )
            return ErrorOutcome(
                error=str(e),
                session_id=request.session_id,
                items=self._item_echo(request.items),
                shipping=request.shipping,
            )

    def _fulfill_with_cj(
        self,
        request: FulfillRequest,
        api_key: str
    ) -> FulfillmentOutcome:
        token = get_access_token(api_key)

        logger.info(
            "cj_authenticated",
            session_id=request.session_id,
            item_count=len(request.items)
        )

        order_products, unmapped = self.resolve_items(token, request.items)

        if not order_products:
            return ManualOutcome(
                reason=REASON_NO_MATCHES,
                session_id=request.session_id,
                unmapped=unmapped,
                shipping=request.shipping,
            )

        order = SupplierOrder(
            session_id=request.session_id,
            name=request.shipping_name,
            address=request.shipping_address,
            city=request.shipping_city,
            province=request.shipping_state,
            zip=request.shipping_zip,
            country=request.shipping_country,
            phone=request.shipping_phone,
            email=request.email,
            products=[
                OrderLineItem(vid=p.vid, quantity=p.quantity)
                for p in order_products
            ],
        )

        cj_result = place_order(token, order)

        logger.info("cj_order_result", session_id=request.session_id, response=cj_result)

        outcome_cls = AutoOutcome if is_success(cj_result) else PartialOutcome

        return outcome_cls(
            cj_response=cj_result,
            items_ordered=[OrderedItem(name=p.name, cost=p.cost) for p in order_products],
            unmapped=unmapped or None,
        )

    def resolve_items(
        self,
        token: str,
        items: list[str]
    ) -> tuple[list[OrderedProduct], list[str]]:
        """
        Resolve SKUs to CJ variants, in input order.

        Every SKU lands in exactly one of the two lists. A SKU is unmapped
        when the catalog doesn't know it or CJ has no orderable match.

        Args:
            token: CJ access token
            items: Storefront SKUs

        Returns:
            (order_products, unmapped)
        """
        order_products: list[OrderedProduct] = []
        unmapped: list[str] = []

        for sku in items:
            entry = lookup(sku)
            if not entry:
                logger.info("cj_sku_not_in_catalog", sku=sku)
                unmapped.append(sku)
                continue

            product = search_product(token, entry.search_query)

            if product and product.is_orderable:
                order_products.append(OrderedProduct(
                    vid=product.variant_id,
                    quantity=1,
                    name=product.name,
                    cost=product.sell_price,
                ))
                logger.info(
                    "cj_product_found",
                    sku=sku,
                    product_name=product.name,
                    price=str(product.sell_price),
                    vid=product.variant_id
                )
            else:
                unmapped.append(sku)
                logger.info("cj_product_not_found", sku=sku, query=entry.search_query)

        return order_products, unmapped

    def _item_echo(self, items: list[str]) -> list[ItemEcho]:
        return [ItemEcho(id=sku, name=display_name(sku)) for sku in items]


# Singleton instance
_fulfillment_service: Optional[FulfillmentService] = None


def get_fulfillment_service() -> FulfillmentService:
    """Get or create FulfillmentService instance."""
    global _fulfillment_service
    if _fulfillment_service is None:
        _fulfillment_service = FulfillmentService()
    return _fulfillment_service
