"""
Runtime configuration.

Values come from the environment; a ``.env`` file at the project root is
loaded first so local development does not need exported variables.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

_DEV_ORIGINS = "http://localhost:8081,http://localhost:3002,http://192.168.0.211:3002"


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(o.strip() for o in raw.split(",") if o.strip())


@dataclass(frozen=True)
class Settings:
    mongo_uri: str = os.getenv("MONGO_CONNECTION_STRING", "mongodb://localhost:27017")
    mongo_db_name: str = os.getenv("MONGO_DB_NAME", "hobby_helper")
    jwt_secret: str = os.getenv("JWT_SECRET", "hobby-helper-dev-secret-change-in-production")
    jwt_algorithm: str = "HS256"
    jwt_expires_seconds: int = int(os.getenv("JWT_EXPIRES_SECONDS", "7200"))  # 2 hours
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "10"))
    cors_origins: tuple[str, ...] = _split_origins(os.getenv("CORS_ORIGINS", _DEV_ORIGINS))
    port: int = int(os.getenv("PORT", "3002"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    suggestion_sample_size: int = int(os.getenv("SUGGESTION_SAMPLE_SIZE", "10"))
    suggestion_limit: int = int(os.getenv("SUGGESTION_LIMIT", "3"))


DEFAULT_SETTINGS = Settings()


def get_settings() -> Settings:
    return DEFAULT_SETTINGS
