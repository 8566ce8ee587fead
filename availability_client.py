"""
availability_client.py

Copy this file into your storefront script or bot repo.

What it provides:
- A tiny API client for the warehouse availability backend
- `check(sku, pincode)` against the public proxy endpoint: GET /apps/inventory

Environment variables expected:
- AVAILABILITY_API_URL: e.g. "https://your-domain.com"

Dependencies:
- requests (pip install requests)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict

import requests


class ApiError(RuntimeError):
    pass


@dataclass
class AvailabilityApiClient:
    base_url: str
    timeout: float = 30

    def _request(self, path: str, *, params: Dict[str, Any] | None = None) -> Dict[str, Any]:
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        try:
            resp = requests.get(
                url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ApiError(f"GET {path} failed: {e}") from e

        # 400 (missing input) still carries a usable {"error": ...} body.
        if resp.status_code >= 500 or resp.status_code not in (200, 400):
            raise ApiError(f"GET {path} failed ({resp.status_code}): {resp.text}")
        return resp.json()

    def check(self, sku: str, pincode: str) -> Dict[str, Any]:
        """
        Calls: GET /apps/inventory?sku=...&pincode=...

        Returns {"available": true, "location": ..., "quantity": ...}
        or {"error": ...} for unserviceable pincodes, unknown SKUs and empty stock.
        """
        return self._request("/apps/inventory", params={"sku": sku, "pincode": pincode})

    def is_available(self, sku: str, pincode: str) -> bool:
        return bool(self.check(sku, pincode).get("available"))


def make_client_from_env() -> AvailabilityApiClient:
    base_url = os.getenv("AVAILABILITY_API_URL", "").strip()
    if not base_url:
        raise RuntimeError("Missing AVAILABILITY_API_URL")
    return AvailabilityApiClient(base_url=base_url)


if __name__ == "__main__":
    client = make_client_from_env()
    print(client.check("SKU123", "122001"))
