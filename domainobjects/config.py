from functools import lru_cache
from decimal import Decimal, InvalidOperation

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_JSON: bool = False  # True for structured JSON output, False for colored console
    
    # XML documents
    XML_INDENT: str = "  "  # Empty string writes a compact document
    XML_ENCODING: str = "utf-8"
    DECIMAL_FORMAT: str = "0.00"  # Quantizer applied to Decimal values on write
    
    model_config = SettingsConfigDict(env_prefix="DOMAINOBJECTS_", env_file=".env", extra="ignore")

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        if (level := v.strip().upper()) not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("DECIMAL_FORMAT")
    @classmethod
    def _check_decimal_format(cls, v: str) -> str:
        try:
            Decimal(v)
        except InvalidOperation as e:
            raise ValueError(f"DECIMAL_FORMAT must be a decimal quantizer such as '0.00', got '{v}'") from e
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
