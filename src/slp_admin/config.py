from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


# ──────────────────────────────────────────────
# Settings (from environment variables / .env)
# ──────────────────────────────────────────────
class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Supabase (REST + object storage)
    supabase_url: str = "http://localhost:54321"
    supabase_key: str = ""
    storage_bucket: str = "images"
    request_timeout: float = 30.0

    # Admin session
    admin_password: str = "change-me"

    # CORS settings
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000"
    cors_allow_credentials: bool = True
    cors_allow_methods: str = "GET,POST,PUT,DELETE,OPTIONS"
    cors_allow_headers: str = "*"

    # Application settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def cors_methods_list(self) -> list[str]:
        """Parse CORS methods from comma-separated string."""
        if self.cors_allow_methods == "*":
            return ["*"]
        return [method.strip() for method in self.cors_allow_methods.split(",")]

    @property
    def cors_headers_list(self) -> list[str]:
        """Parse CORS headers from comma-separated string."""
        if self.cors_allow_headers == "*":
            return ["*"]
        return [header.strip() for header in self.cors_allow_headers.split(",")]


# Global settings instance
settings = Settings()

# ──────────────────────────────────────────────
# Access gate
# ──────────────────────────────────────────────
SESSION_COOKIE_NAME = "auth"
SESSION_VALUE = "true"
PROTECTED_PREFIX = "/admin"
LOGIN_PATH = "/login"
REDIRECT_PARAM = "redirectedFrom"

# ──────────────────────────────────────────────
# Upload presets
#   key   → preset id (used as path param)
#   value → dict with:
#       - allowed_types: MIME types accepted (empty = anything)
#       - max_size_mb: size ceiling in megabytes
#       - label: button label shown by the admin UI
# ──────────────────────────────────────────────
IMAGE_TYPES: tuple[str, ...] = (
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/svg+xml",
    "image/bmp",
)

DOCUMENT_TYPES: tuple[str, ...] = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-powerpoint",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "text/plain",
    "text/csv",
)

UPLOAD_PRESETS: dict[str, dict] = {
    "file": {"allowed_types": IMAGE_TYPES, "max_size_mb": 5, "label": "Choose File"},
    "image": {"allowed_types": IMAGE_TYPES, "max_size_mb": 5, "label": "Choose Image"},
    "document": {"allowed_types": DOCUMENT_TYPES, "max_size_mb": 15, "label": "Choose Document"},
    "pdf": {"allowed_types": ("application/pdf",), "max_size_mb": 10, "label": "Choose PDF"},
}

# Bucket created on first start when missing; it must admit every preset
BUCKET_FILE_SIZE_LIMIT = max(p["max_size_mb"] for p in UPLOAD_PRESETS.values()) * 1024 * 1024
BUCKET_ALLOWED_MIME_TYPES: list[str] = list(
    dict.fromkeys(t for p in UPLOAD_PRESETS.values() for t in p["allowed_types"])
)

PREVIEW_SIZE: tuple[int, int] = (320, 192)

# ──────────────────────────────────────────────
# Directory categories
# ──────────────────────────────────────────────
PLACE_CATEGORIES: list[str] = [
    "traditional-cuisine", "modern-dining", "cocktail-bars", "cantinas",
    "live-music", "terraces", "restaurants-with-playgrounds",
    "private-dining-rooms", "language-exchange-cafes", "remote-work-cafes",
    "easy-parking-spots", "international-markets", "english-speaking-healthcare",
    "family-activities", "sports-fitness", "outdoor-activities",
    "activities-rainy-day", "local-organic-products", "shop",
]

EVENT_CATEGORIES: list[str] = [
    "arts-culture", "culinary", "music", "kids-family", "sports",
    "traditional", "wellness", "community-social",
]

SERVICE_CATEGORIES: list[str] = [
    "relocation", "housing", "legal", "community", "family",
    "petcare", "wellness", "homeservices", "cultural", "experiences",
]

BRAND_CATEGORIES: list[str] = [
    "food", "beverages", "clothing", "crafts", "household",
    "cosmetics", "technology", "furniture", "accessories",
    "automotive", "entertainment", "other",
]

# ──────────────────────────────────────────────
# Entity registry
#   key   → table name (also the admin path segment)
#   value → dict with:
#       - label: singular display name
#       - order_by / ascending: list ordering
#       - search_fields: columns matched by the free-text search
#       - categories: allowed category values
# ──────────────────────────────────────────────
ENTITY_REGISTRY: dict[str, dict] = {
    "places": {
        "label": "Place",
        "order_by": "name",
        "ascending": True,
        "search_fields": ("name", "address", "description"),
        "categories": PLACE_CATEGORIES,
    },
    "events": {
        "label": "Event",
        "order_by": "start_date",
        "ascending": True,
        "search_fields": ("title", "description", "location"),
        "categories": EVENT_CATEGORIES,
    },
    "services": {
        "label": "Service",
        "order_by": "name",
        "ascending": True,
        "search_fields": ("name", "description", "contact_name", "service_area"),
        "categories": SERVICE_CATEGORIES,
    },
    "brands": {
        "label": "Brand",
        "order_by": "name",
        "ascending": True,
        "search_fields": ("name", "description", "notable_products"),
        "categories": BRAND_CATEGORIES,
    },
}
