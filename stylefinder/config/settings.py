"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised project settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    vision_api_key: str = ""
    vision_base_url: str = "https://vision.googleapis.com/v1"
    vision_web_detection: bool = True

    search_api_key: str = ""
    search_engine_id: str = ""
    search_base_url: str = "https://www.googleapis.com/customsearch/v1"
    search_result_count: int = 10
    search_locale: str = "fr"

    request_timeout: float = 15.0
    max_retries: int = 2
    retry_backoff: float = 0.5

    upload_dir: str = "uploads"
    upload_ttl_minutes: int = 60
    max_upload_bytes: int = 10 * 1024 * 1024
    image_max_side: int = 1600

    fallback_product_count: int = 8
    fallback_seed: int | None = None

    @property
    def vision_configured(self) -> bool:
        return bool(self.vision_api_key)

    @property
    def search_configured(self) -> bool:
        return bool(self.search_api_key and self.search_engine_id)


def _build_settings() -> Settings:
    _load_env_file()

    seed = os.getenv("FALLBACK_SEED", "").strip()
    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        vision_api_key=os.getenv("GOOGLE_VISION_API_KEY", ""),
        vision_base_url=os.getenv("GOOGLE_VISION_BASE_URL", "https://vision.googleapis.com/v1"),
        vision_web_detection=_as_bool(os.getenv("VISION_WEB_DETECTION", "true")),
        search_api_key=os.getenv("GOOGLE_CUSTOM_SEARCH_API_KEY", ""),
        search_engine_id=os.getenv("GOOGLE_CUSTOM_SEARCH_ENGINE_ID", ""),
        search_base_url=os.getenv(
            "GOOGLE_CUSTOM_SEARCH_BASE_URL",
            "https://www.googleapis.com/customsearch/v1",
        ),
        search_result_count=int(os.getenv("SEARCH_RESULT_COUNT", "10")),
        search_locale=os.getenv("SEARCH_LOCALE", "fr"),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "15")),
        max_retries=int(os.getenv("MAX_RETRIES", "2")),
        retry_backoff=float(os.getenv("RETRY_BACKOFF", "0.5")),
        upload_dir=os.getenv("UPLOAD_DIR", "uploads"),
        upload_ttl_minutes=int(os.getenv("UPLOAD_TTL_MINUTES", "60")),
        max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024))),
        image_max_side=int(os.getenv("IMAGE_MAX_SIDE", "1600")),
        fallback_product_count=int(os.getenv("FALLBACK_PRODUCT_COUNT", "8")),
        fallback_seed=int(seed) if seed else None,
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
