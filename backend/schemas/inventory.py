from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AvailabilityQuery(BaseModel):
    sku: Optional[str] = None
    pincode: Optional[str] = None

    @field_validator("sku", "pincode")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def complete(self) -> bool:
        return bool(self.sku and self.pincode)


class ProductRead(BaseModel):
    id: str
    title: str
    handle: Optional[str] = None


class InventoryRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sku: Optional[str] = None
    location_id: str = Field(alias="locationId")
    location_name: str = Field(alias="locationName")
    quantity: int


class InventoryLookupSuccess(BaseModel):
    success: bool = True
    product: ProductRead
    inventory: InventoryRead


class ErrorRead(BaseModel):
    error: str


class ProxyAvailabilityRead(BaseModel):
    available: bool = True
    location: str
    quantity: int


class CoverageRead(BaseModel):
    locations: dict[str, list[str]]
