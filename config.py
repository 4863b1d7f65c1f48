# config.py
"""
Runtime configuration.

Values come from the environment (a local .env file is loaded first).
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    firebase_service_account_b64: Optional[str]
    firebase_service_account_path: str
    firebase_storage_bucket: Optional[str]
    store_backend: str
    kv_collection: str
    streak_timezone: str
    api_prefix: str
    allowed_origins: tuple[str, ...]
    signed_url_ttl_seconds: int
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            firebase_service_account_b64=os.getenv("FIREBASE_SERVICE_ACCOUNT_BASE64") or None,
            firebase_service_account_path=os.getenv("FIREBASE_SERVICE_ACCOUNT", "serviceAccountKey.json"),
            firebase_storage_bucket=os.getenv("FIREBASE_STORAGE_BUCKET") or None,
            store_backend=os.getenv("STORE_BACKEND", "firestore").lower(),
            kv_collection=os.getenv("KV_COLLECTION", "kv_store"),
            streak_timezone=os.getenv("STREAK_TIMEZONE", "UTC"),
            api_prefix=os.getenv("API_PREFIX", "").rstrip("/"),
            allowed_origins=_split_csv(os.getenv("ALLOWED_ORIGINS", "*")),
            signed_url_ttl_seconds=int(os.getenv("SIGNED_URL_TTL_SECONDS", "31536000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
