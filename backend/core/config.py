import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    environment: str = os.getenv("ENVIRONMENT", "development").lower()
    log_level: str = os.getenv("LOG_LEVEL", "")

    # Shopify Admin API
    shopify_shop_domain: str = os.getenv("SHOPIFY_SHOP_DOMAIN", "")
    shopify_access_token: str = os.getenv("SHOPIFY_ACCESS_TOKEN", "")
    shopify_api_version: str = os.getenv("SHOPIFY_API_VERSION", "2025-01")
    shopify_timeout_seconds: float = float(os.getenv("SHOPIFY_TIMEOUT_SECONDS", "10"))

    # Pincode coverage; empty means the built-in table
    location_coverage_file: str = os.getenv("LOCATION_COVERAGE_FILE", "")

    cors_origins: list = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    ]


settings = Settings()
