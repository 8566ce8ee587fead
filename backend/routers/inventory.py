from typing import Dict, Optional

from fastapi import APIRouter, Depends, Form
from fastapi.concurrency import run_in_threadpool

from core.availability import MESSAGES, AvailabilityResult, AvailabilityService
from core.coverage import LocationCoverageTable
from core.deps import get_availability_service, get_coverage_table
from core.logging import add_context, clear_context, get_logger
from core.matcher import AvailabilityStatus
from schemas.inventory import (
    AvailabilityQuery,
    CoverageRead,
    ErrorRead,
    InventoryLookupSuccess,
    InventoryRead,
    ProductRead,
)

router = APIRouter()

logger = get_logger(__name__)


def _lookup_response(result: AvailabilityResult) -> Dict:
    if not result.available:
        return ErrorRead(error=result.message).model_dump()

    inventory = result.inventory
    return InventoryLookupSuccess(
        product=ProductRead(
            id=result.product.id,
            title=result.product.title,
            handle=result.product.handle,
        ),
        inventory=InventoryRead(
            sku=result.variant_sku,
            location_id=inventory.location_id,
            location_name=inventory.location_name,
            quantity=inventory.quantity,
        ),
    ).model_dump(by_alias=True)


@router.post("", response_model=Dict)
async def lookup_inventory(
    search_query: Optional[str] = Form(None, alias="searchQuery"),
    pincode: Optional[str] = Form(None),
    service: AvailabilityService = Depends(get_availability_service),
):
    """
    Warehouse inventory lookup from the admin form.
    Business outcomes, failures included, come back as 200 with an `error` field.
    """
    query = AvailabilityQuery(sku=search_query, pincode=pincode)
    if not query.complete:
        return ErrorRead(error=MESSAGES[AvailabilityStatus.MISSING_INPUT]).model_dump()

    add_context(sku=query.sku, pincode=query.pincode)
    try:
        result = await run_in_threadpool(service.check, query.sku, query.pincode)
    except Exception:
        logger.exception("Inventory lookup failed")
        return ErrorRead(error=MESSAGES[AvailabilityStatus.TRANSIENT_ERROR]).model_dump()
    finally:
        clear_context()
    return _lookup_response(result)


@router.get("/coverage", response_model=CoverageRead)
async def list_coverage(coverage: LocationCoverageTable = Depends(get_coverage_table)):
    """Pincodes served by each warehouse location."""
    return CoverageRead(locations=coverage.as_dict())
