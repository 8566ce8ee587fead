from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from core.config import settings
from core.matcher import InventoryLevel, QuantityEntry


PRODUCT_BY_SKU_QUERY = """
query getProductBySku($sku: String!) {
  productVariants(first: 1, query: $sku) {
    edges {
      node {
        id
        sku
        product {
          id
          title
          handle
        }
      }
    }
  }
}
"""

INVENTORY_LEVELS_QUERY = """
query getInventory($id: ID!) {
  productVariant(id: $id) {
    id
    sku
    inventoryItem {
      id
      inventoryLevels(first: 50) {
        edges {
          node {
            location {
              id
              name
            }
            quantities(names: ["available"]) {
              name
              quantity
            }
          }
        }
      }
    }
  }
}
"""


class ShopifyApiError(RuntimeError):
    pass


class ShopifyConfigError(ShopifyApiError):
    pass


@dataclass(frozen=True)
class ProductRef:
    id: str
    title: str
    handle: Optional[str] = None


@dataclass(frozen=True)
class ProductVariant:
    id: str
    sku: Optional[str]
    product: ProductRef


class ShopifyClient:
    """Admin GraphQL API client. Every request carries a timeout."""

    def __init__(self, shop_domain: str, access_token: str, api_version: str = "2025-01", timeout: float = 10):
        self.shop_domain = shop_domain
        self.access_token = access_token
        self.api_version = api_version
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        domain = self.shop_domain.strip().rstrip("/")
        if not domain.startswith("http"):
            domain = f"https://{domain}"
        return f"{domain}/admin/api/{self.api_version}/graphql.json"

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": self.access_token,
        }

    def graphql(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            resp = requests.post(
                self.endpoint,
                json={"query": query, "variables": variables or {}},
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ShopifyApiError(f"GraphQL request failed: {e}") from e

        if resp.status_code >= 400:
            raise ShopifyApiError(f"GraphQL request failed ({resp.status_code}): {resp.text}")

        try:
            body = resp.json()
        except ValueError as e:
            raise ShopifyApiError(f"GraphQL response is not JSON: {resp.text[:200]}") from e

        if not isinstance(body, dict):
            raise ShopifyApiError(f"GraphQL response is not an object: {resp.text[:200]}")
        if body.get("errors"):
            raise ShopifyApiError(f"GraphQL errors: {body['errors']}")
        data = body.get("data")
        if not isinstance(data, dict):
            raise ShopifyApiError(f"GraphQL response missing data: {body}")
        return data

    def find_variant_by_sku(self, sku: str) -> Optional[ProductVariant]:
        data = self.graphql(PRODUCT_BY_SKU_QUERY, {"sku": f"sku:{sku}"})
        try:
            edges = data["productVariants"]["edges"]
            if not edges:
                return None
            node = edges[0]["node"]
            product = node["product"]
            return ProductVariant(
                id=node["id"],
                sku=node.get("sku"),
                product=ProductRef(id=product["id"], title=product["title"], handle=product.get("handle")),
            )
        except (KeyError, TypeError, IndexError) as e:
            raise ShopifyApiError(f"Unexpected productVariants payload: {e!r}") from e

    def get_inventory_levels(self, variant_id: str) -> List[InventoryLevel]:
        data = self.graphql(INVENTORY_LEVELS_QUERY, {"id": variant_id})
        try:
            edges = data["productVariant"]["inventoryItem"]["inventoryLevels"]["edges"]
            levels = []
            for edge in edges:
                node = edge["node"]
                levels.append(
                    InventoryLevel(
                        location_gid=node["location"]["id"],
                        location_name=node["location"].get("name") or "",
                        quantities=[
                            QuantityEntry(name=q["name"], quantity=q.get("quantity"))
                            for q in (node.get("quantities") or [])
                        ],
                    )
                )
            return levels
        except (KeyError, TypeError) as e:
            raise ShopifyApiError(f"Unexpected inventoryLevels payload: {e!r}") from e


def make_client_from_settings() -> ShopifyClient:
    if not settings.shopify_shop_domain:
        raise ShopifyConfigError("Missing SHOPIFY_SHOP_DOMAIN")
    if not settings.shopify_access_token:
        raise ShopifyConfigError("Missing SHOPIFY_ACCESS_TOKEN")
    return ShopifyClient(
        shop_domain=settings.shopify_shop_domain,
        access_token=settings.shopify_access_token,
        api_version=settings.shopify_api_version,
        timeout=settings.shopify_timeout_seconds,
    )
