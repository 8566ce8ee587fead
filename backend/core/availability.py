"""
SKU + pincode availability check.

Linear pipeline: resolve the pincode, look up the variant, fetch its inventory
levels, match the resolved location. Every failure is terminal; nothing is
retried and no other location is tried.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from core.coverage import LocationCoverageTable
from core.logging import get_logger
from core.matcher import AvailabilityStatus, InventoryRecord, count_matches, decide, match
from core.shopify_client import ProductRef, ShopifyApiError, ShopifyClient

logger = get_logger(__name__)


MESSAGES = {
    AvailabilityStatus.MISSING_INPUT: "SKU and Pincode are required",
    AvailabilityStatus.UNSERVICEABLE: "Delivery not available for this pincode",
    AvailabilityStatus.NOT_STOCKED: "Product not stocked in this warehouse",
    AvailabilityStatus.OUT_OF_STOCK: "Out of stock for this pincode",
    AvailabilityStatus.TRANSIENT_ERROR: "Failed to fetch inventory",
}


@dataclass(frozen=True)
class AvailabilityResult:
    status: AvailabilityStatus
    sku: str = ""
    pincode: str = ""
    location_id: Optional[str] = None
    product: Optional[ProductRef] = None
    variant_sku: Optional[str] = None
    inventory: Optional[InventoryRecord] = None

    @property
    def available(self) -> bool:
        return self.status == AvailabilityStatus.AVAILABLE

    @property
    def message(self) -> str:
        if self.status == AvailabilityStatus.NOT_FOUND:
            return f"No product found with SKU: {self.sku}"
        return MESSAGES.get(self.status, "")


class AvailabilityService:
    def __init__(
        self,
        coverage: LocationCoverageTable,
        client: Optional[ShopifyClient] = None,
        client_factory: Optional[Callable[[], ShopifyClient]] = None,
    ):
        if client is None and client_factory is None:
            raise ValueError("AvailabilityService needs a client or a client_factory")
        self.coverage = coverage
        self._client = client
        self._client_factory = client_factory

    @property
    def client(self) -> ShopifyClient:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def check(self, sku: Optional[str], pincode: Optional[str]) -> AvailabilityResult:
        sku = (sku or "").strip()
        pincode = (pincode or "").strip()
        if not sku or not pincode:
            return AvailabilityResult(AvailabilityStatus.MISSING_INPUT, sku=sku, pincode=pincode)

        log = logger.bind(sku=sku, pincode=pincode)

        resolution = self.coverage.resolve(pincode)
        if not resolution.serviceable:
            log.info("Pincode not covered by any location")
            return AvailabilityResult(AvailabilityStatus.UNSERVICEABLE, sku=sku, pincode=pincode)

        location_id = resolution.location_id
        log = log.bind(location_id=location_id)

        try:
            variant = self.client.find_variant_by_sku(sku)
            if variant is None:
                log.info("No variant found for SKU")
                return AvailabilityResult(
                    AvailabilityStatus.NOT_FOUND, sku=sku, pincode=pincode, location_id=location_id
                )
            levels = self.client.get_inventory_levels(variant.id)
        except ShopifyApiError:
            log.exception("Inventory lookup failed")
            return AvailabilityResult(
                AvailabilityStatus.TRANSIENT_ERROR, sku=sku, pincode=pincode, location_id=location_id
            )

        if count_matches(location_id, levels) > 1:
            log.warning("Multiple inventory levels for location; using the last one")

        record = match(location_id, levels)
        status = decide(record)
        log.info(
            "Availability decided",
            status=status.value,
            quantity=record.quantity if record else None,
        )
        return AvailabilityResult(
            status,
            sku=sku,
            pincode=pincode,
            location_id=location_id,
            product=variant.product,
            variant_sku=variant.sku,
            inventory=record,
        )
