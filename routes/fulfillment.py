"""
CJ fulfillment API routes.

Called by the storefront after checkout with the paid order. Guarded by
a shared secret; every request past the guards gets HTTP 200 with a
`status` of manual, auto, partial, or error.
"""

import secrets
from typing import Optional
import structlog
from pydantic import ValidationError as PydanticValidationError

from fastapi import APIRouter, Depends, Header, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from config.settings import Settings, get_settings
from models.fulfillment import FulfillRequest
from services.fulfillment_service import get_fulfillment_service
from exceptions import UnauthorizedError, MethodNotAllowedError, ValidationError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/cj-fulfill", tags=["Fulfillment"])

FULFILL_SECRET_HEADER = "x-fulfill-secret"


def verify_fulfill_secret(
    fulfill_secret: Optional[str] = Header(None, alias=FULFILL_SECRET_HEADER),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Check the shared-secret header.

    Runs before the body is read, so a bad caller never reaches CJ.

    Raises:
        UnauthorizedError: Header missing, wrong, or no secret configured
    """
    expected = settings.orders_secret

    if not fulfill_secret or not expected or not secrets.compare_digest(
        fulfill_secret.encode(), expected.encode()
    ):
        logger.warning("fulfill_unauthorized", header_present=bool(fulfill_secret))
        raise UnauthorizedError()


@router.post(
    "",
    dependencies=[Depends(verify_fulfill_secret)],
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": FulfillRequest.model_json_schema(by_alias=True)}},
        }
    },
)
async def fulfill_order(
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """
    Fulfill a paid order through CJ Dropshipping.

    The body is read only after the secret check, so an unauthorized
    caller gets 401 whatever it sends.

    Returns:
        - manual: no CJ key configured, or nothing matched on CJ
        - auto: CJ order placed
        - partial: CJ order call returned a non-success code
        - error: fulfillment failed; shipping and items echoed for manual handling

    Raises:
        422: Body is not JSON or is missing sessionId/items
    """
    order = await parse_fulfill_request(request)

    service = get_fulfillment_service()
    outcome = await run_in_threadpool(service.fulfill, order, settings.cj_api_key)

    logger.info("fulfill_completed", session_id=order.session_id, status=outcome.status)

    return JSONResponse(status_code=200, content=outcome.to_response())


async def parse_fulfill_request(request: Request) -> FulfillRequest:
    """
    Parse and validate the fulfill request body.

    Raises:
        ValidationError: Body is not JSON or doesn't match FulfillRequest
    """
    try:
        body = await request.json()
    except ValueError:
        raise ValidationError(
            code="INVALID_JSON",
            message="Request body must be valid JSON"
        )

    try:
        return FulfillRequest.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError(
            message="Invalid fulfill request",
            details={
                "errors": [
                    {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                    for err in e.errors()
                ]
            }
        )


@router.api_route(
    "",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
def fulfill_method_not_allowed(request: Request):
    """Reject anything but POST."""
    raise MethodNotAllowedError(request.method)
