"""
CJ Dropshipping API integration.

Three calls, each made once with no retry:
- getAccessToken: exchange the API key for a short-lived access token
- product/list: one-result text search for a catalog query
- shopping/order/createOrder: place the supplier order

CJ reports success in the JSON body (`code == 200`), not via HTTP status.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional
import requests
import structlog

from config.settings import settings
from exceptions import SupplierAuthError, SupplierRequestError
from models.fulfillment import ResolvedProduct, SupplierOrder

logger = structlog.get_logger(__name__)


CJ_SUCCESS_CODE = 200
CJ_TOKEN_HEADER = "CJ-Access-Token"

# CJ order numbers are capped, so only the tail of the session ID is sent
ORDER_NUMBER_LENGTH = 12


def _url(path: str) -> str:
    return f"{settings.cj_api_base_url.rstrip('/')}/{path}"


def _json_body(response: requests.Response) -> dict:
    """Parse a CJ response body, which should always be a JSON object."""
    try:
        data = response.json()
    except ValueError:
        raise ValueError(f"non-JSON response (HTTP {response.status_code})")

    if not isinstance(data, dict):
        raise ValueError(f"unexpected response body (HTTP {response.status_code})")

    return data


def is_success(data: dict) -> bool:
    """Check a CJ response for the success code."""
    return data.get("code") == CJ_SUCCESS_CODE


def _to_decimal(value: Any) -> Decimal:
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        logger.warning("cj_price_unparseable", value=value)
        return Decimal("0")

    # NaN and Infinity parse but can't be serialized as a cost
    if not amount.is_finite():
        logger.warning("cj_price_unparseable", value=value)
        return Decimal("0")

    return amount


def _image_url(value: Any) -> Optional[str]:
    """CJ sends productImage as a URL, or sometimes a list of them."""
    if isinstance(value, list):
        value = value[0] if value else None
    return value if isinstance(value, str) else None


# ===================
# AUTHENTICATION
# ===================

def get_access_token(api_key: str) -> str:
    """
    Exchange the CJ API key for an access token.

    Tokens are not cached: every fulfillment fetches a fresh one.

    Args:
        api_key: CJ API key

    Returns:
        Access token string

    Raises:
        SupplierAuthError: If CJ rejects the key or can't be reached
    """
    try:
        response = requests.post(
            _url("authentication/getAccessToken"),
            json={"apiKey": api_key},
            timeout=settings.cj_request_timeout,
        )
        data = _json_body(response)
    except requests.exceptions.RequestException as e:
        logger.error("cj_auth_request_failed", error=str(e))
        raise SupplierAuthError(str(e))
    except ValueError as e:
        logger.error("cj_auth_bad_response", error=str(e))
        raise SupplierAuthError(str(e))

    token = (data.get("data") or {}).get("accessToken")

    if not is_success(data) or not token:
        logger.error("cj_auth_rejected", code=data.get("code"), message=data.get("message"))
        raise SupplierAuthError(
            str(data.get("message")),
            details={"cj_code": data.get("code")}
        )

    return token


# ===================
# PRODUCT SEARCH
# ===================

def search_product(token: str, query: str) -> Optional[ResolvedProduct]:
    """
    Look up the best CJ match for a free-text query.

    Requests a single result and takes its first variant. Price prefers
    the variant sell price, then the product sell price, then zero.

    Args:
        token: CJ access token
        query: Free-text product query

    Returns:
        ResolvedProduct, or None if CJ found nothing

    Raises:
        SupplierRequestError: If the request fails at transport level
    """
    try:
        response = requests.get(
            _url("product/list"),
            params={"pageNum": 1, "pageSize": 1, "productNameEn": query},
            headers={CJ_TOKEN_HEADER: token},
            timeout=settings.cj_request_timeout,
        )
        data = _json_body(response)
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.error("cj_search_request_failed", query=query, error=str(e))
        raise SupplierRequestError("search", str(e))

    products = (data.get("data") or {}).get("list") or []

    if not is_success(data) or not products:
        logger.debug("cj_search_no_results", query=query, code=data.get("code"))
        return None

    product = products[0]
    variants = product.get("variants") or []
    variant = variants[0] if variants else {}

    price = variant.get("variantSellPrice") or product.get("sellPrice") or 0

    return ResolvedProduct(
        product_id=str(product.get("pid") or ""),
        variant_id=str(variant.get("vid") or ""),
        name=str(product.get("productNameEn") or ""),
        image_url=_image_url(product.get("productImage")),
        sell_price=_to_decimal(price),
    )


# ===================
# ORDER CREATION
# ===================

def order_reference(session_id: str) -> str:
    """CJ order number derived from a checkout session ID."""
    return session_id[-ORDER_NUMBER_LENGTH:]


def build_order_payload(order: SupplierOrder) -> dict:
    """
    Build the createOrder request body.

    Args:
        order: Normalized order

    Returns:
        dict in CJ field names
    """
    return {
        "orderNumber": order_reference(order.session_id),
        "shippingZip": order.zip,
        "shippingCountryCode": order.country,
        "shippingCountry": order.country,
        "shippingProvince": order.province,
        "shippingCity": order.city,
        "shippingAddress": order.address,
        "shippingCustomerName": order.name,
        "shippingPhone": order.phone or settings.cj_placeholder_phone,
        "remark": f"{settings.cj_order_remark_brand} | {order.email or ''}",
        "products": [
            {"vid": line.vid, "quantity": line.quantity}
            for line in order.products
        ],
    }


def place_order(token: str, order: SupplierOrder) -> dict:
    """
    Place an order on CJ.

    The CJ response is returned verbatim; callers check `is_success()`.

    Args:
        token: CJ access token
        order: Normalized order

    Returns:
        CJ response body

    Raises:
        SupplierRequestError: If the request fails at transport level
    """
    payload = build_order_payload(order)

    logger.info(
        "cj_placing_order",
        order_number=payload["orderNumber"],
        lines=len(payload["products"])
    )

    try:
        response = requests.post(
            _url("shopping/order/createOrder"),
            json=payload,
            headers={CJ_TOKEN_HEADER: token},
            timeout=settings.cj_request_timeout,
        )
        return _json_body(response)
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.error("cj_order_request_failed", order_number=payload["orderNumber"], error=str(e))
        raise SupplierRequestError("createOrder", str(e))
