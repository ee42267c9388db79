"""euromatch run settings loaded from environment variables."""

from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from euromatch.models.common import Gender, Labour


class Environment(StrEnum):
    """Deployment environment."""

    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Run-wide configuration constants.

    Thresholds are passed explicitly into the aggregator and index builder;
    nothing in the engine reads settings implicitly.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Household classification ---
    AGE_TO_BECOME_RESPONSIBLE: int = Field(
        default=18,
        ge=1,
        le=18,
        description="Occupants younger than this are children, not adults.",
    )
    AGE_TOP_CODE: int = Field(
        default=80,
        gt=0,
        description="Ages above this are top-coded when building match keys.",
    )

    # --- Labour supply ---
    MALE_LABOUR_CHOICES: list[Labour] = Field(
        default_factory=lambda: list(Labour),
        min_length=1,
    )
    FEMALE_LABOUR_CHOICES: list[Labour] = Field(
        default_factory=lambda: list(Labour),
        min_length=1,
    )

    # --- Gross-to-disposable conversion ---
    PERCENTAGE_OF_MEDIAN_DONOR_INCOME: float = Field(
        default=0.1,
        ge=0.0,
        description="Donors below this share of median gross income are imputed directly.",
    )
    MAX_DONOR_RATIO: float = Field(
        default=1.0,
        gt=0.0,
        description="Ratios above this are not applied to simulated gross income.",
    )

    # --- Logging ---
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application log level.",
    )

    # --- Environment ---
    ENVIRONMENT: Environment = Field(
        default=Environment.DEV,
        description="Deployment environment (dev/staging/prod).",
    )

    @property
    def allowed_labour(self) -> dict[Gender, list[Labour]]:
        """Labour choices allowed per gender, as consumed by the index builder."""
        return {
            Gender.MALE: list(self.MALE_LABOUR_CHOICES),
            Gender.FEMALE: list(self.FEMALE_LABOUR_CHOICES),
        }


def get_settings() -> Settings:
    """Factory function for settings injection."""
    return Settings()
