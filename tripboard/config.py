from __future__ import annotations

import random
import string
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

load_dotenv()

TOKEN_LENGTH = 12


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    endpoint: str = Field(..., alias="TRIPBOARD_ENDPOINT")
    authorization: str = Field(..., alias="TRIPBOARD_AUTHORIZATION")
    timeout_s: float = Field(15, alias="TRIPBOARD_TIMEOUT_S")
    log_file: str = Field("tripboard.log", alias="TRIPBOARD_LOG_FILE")
    log_level: str = Field("INFO", alias="TRIPBOARD_LOG_LEVEL")

    @field_validator("endpoint")
    @classmethod
    def _endpoint_non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("TRIPBOARD_ENDPOINT must be a non-empty string")
        return v.strip().rstrip("/")

    @field_validator("authorization")
    @classmethod
    def _authorization_non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("TRIPBOARD_AUTHORIZATION must be a non-empty string")
        return v

    @field_validator("timeout_s")
    @classmethod
    def _timeout_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("TRIPBOARD_TIMEOUT_S must be greater than 0")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


@lru_cache()
def get_settings() -> Settings:
    """Return application settings loaded from the environment."""
    return Settings()  # type: ignore[call-arg]


def generate_authorization(length: int = TOKEN_LENGTH) -> str:
    """Return a random ``Basic`` credential accepted by the trip service."""
    alphabet = string.ascii_lowercase + string.digits
    return "Basic " + "".join(random.choice(alphabet) for _ in range(length))


__all__ = ["Settings", "get_settings", "generate_authorization"]
