from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from core.availability import MESSAGES, AvailabilityService
from core.deps import get_availability_service
from core.logging import add_context, clear_context, get_logger
from core.matcher import AvailabilityStatus
from schemas.inventory import AvailabilityQuery, ErrorRead, ProxyAvailabilityRead

router = APIRouter()

logger = get_logger(__name__)


def _error(message: str, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorRead(error=message).model_dump())


@router.get("")
async def check_availability(
    sku: Optional[str] = Query(None),
    pincode: Optional[str] = Query(None),
    service: AvailabilityService = Depends(get_availability_service),
):
    """Storefront availability check for a SKU delivered to a pincode."""
    query = AvailabilityQuery(sku=sku, pincode=pincode)
    if not query.complete:
        return _error(MESSAGES[AvailabilityStatus.MISSING_INPUT], status.HTTP_400_BAD_REQUEST)

    add_context(sku=query.sku, pincode=query.pincode)
    try:
        result = await run_in_threadpool(service.check, query.sku, query.pincode)
    except Exception:
        logger.exception("Proxy availability check failed")
        return _error(MESSAGES[AvailabilityStatus.TRANSIENT_ERROR], status.HTTP_500_INTERNAL_SERVER_ERROR)
    finally:
        clear_context()

    if result.status == AvailabilityStatus.TRANSIENT_ERROR:
        return _error(result.message, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if not result.available:
        return _error(result.message)

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=ProxyAvailabilityRead(
            location=result.inventory.location_name,
            quantity=result.inventory.quantity,
        ).model_dump(),
    )
