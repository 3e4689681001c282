from decimal import Decimal
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    APP_ORIGIN: str = "http://localhost:3000"
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"
    RESET_DB: bool = False
    STORE_NAME: str = "Storefront"

    # identity provider: "mock" or "supabase"
    IDENTITY_PROVIDER: str = "mock"
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_KEY: str = ""
    IDENTITY_TIMEOUT_SECONDS: float = 30.0

    # pricing rules
    COUPON_CODE: str = "SAVE10"
    COUPON_PERCENT: int = 10
    TAX_RATE: Decimal = Decimal("0.08")
    FREE_SHIPPING_THRESHOLD: Decimal = Decimal("100")
    FLAT_SHIPPING: Decimal = Decimal("10")
    MIN_QUANTITY: int = 1
    MAX_QUANTITY: int = 10

    # guest cart sessions
    CART_SESSION_TTL_SECONDS: int = 60 * 60 * 24
    CART_SWEEP_INTERVAL_SECONDS: int = 300

    # offline cache worker, fixed at deploy time
    CACHE_VERSION: str = "storefront-v2"
    PRECACHE_URLS: List[str] = [
        "/",
        "/static/js/bundle.js",
        "/static/css/main.css",
        "/manifest.json",
        "/storefront-logo.png",
    ]
    LOGO_PATH: str = "/storefront-logo.png"
    DATABASE_HOST: str = "supabase.co"
    CACHE_BYPASS_PATTERNS: List[str] = ["/api/", "/admin/"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
