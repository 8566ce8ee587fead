from functools import lru_cache

from fastapi import Depends

from core.availability import AvailabilityService
from core.config import settings
from core.coverage import LocationCoverageTable, load_coverage_table
from core.shopify_client import ShopifyClient, make_client_from_settings


@lru_cache(maxsize=1)
def get_coverage_table() -> LocationCoverageTable:
    return load_coverage_table(settings.location_coverage_file or None)


@lru_cache(maxsize=1)
def get_shopify_client() -> ShopifyClient:
    return make_client_from_settings()


def get_availability_service(
    coverage: LocationCoverageTable = Depends(get_coverage_table),
) -> AvailabilityService:
    # The client is built on first use so requests that never reach Shopify
    # do not depend on its credentials
    return AvailabilityService(coverage=coverage, client_factory=get_shopify_client)
