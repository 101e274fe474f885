from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .currency import DEFAULT_CATALOG, normalize_currency_code


class PricingSettings(BaseSettings):
    default_currency: str = Field(
        default="AED",
        description="Currency used when a fare is quoted without one",
    )
    platform_fee_percentage: float = Field(
        default=20.0,
        ge=0.0,
        le=100.0,
        description="Share of the charged fare kept by the platform",
    )

    model_config = SettingsConfigDict(env_prefix="FARE_")

    @field_validator("default_currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        code = normalize_currency_code(v)
        if code not in DEFAULT_CATALOG:
            raise ValueError(
                f"Default currency {v} is not priced "
                f"(supported: {', '.join(DEFAULT_CATALOG.supported_currencies())})"
            )
        return code


class LoggingSettings(BaseSettings):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["text", "json"] = "text"
    environment: str = "development"

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    pricing: PricingSettings = Field(default_factory=PricingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        case_sensitive=False,
    )


def get_settings() -> Settings:
    """Load and validate settings from environment variables."""
    return Settings()
