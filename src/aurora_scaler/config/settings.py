# src/aurora_scaler/config/settings.py
from typing import Optional
from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from aurora_scaler.modes import CapacitySetting, ScalingMode


class CapacityConfigError(ValueError):
    """Raised when the resolved capacity range is unusable."""


class Settings(BaseSettings):
    """
    Single source of truth for all scaler settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from aurora_scaler.config.settings import get_settings
        settings = get_settings()
        setting = settings.capacity_for(ScalingMode.PREWARM)
    """

    # Deployment Mode
    deployment_mode: str = Field(
        default="aws-prod",
        description="Deployment mode: aws-prod or aws-mock"
    )

    # AWS Core Settings
    aws_region: str = Field(
        default="us-east-1",
        alias="AWS_DEFAULT_REGION"
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        alias="AWS_ACCESS_KEY_ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        alias="AWS_SECRET_ACCESS_KEY"
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        alias="AWS_ENDPOINT_URL"
    )

    # Capacity overrides. Each Lambda function carries its own pair, so these
    # apply to whichever mode the process runs.
    min_capacity: Optional[int] = Field(
        default=None,
        gt=0,
        description="Minimum ACU to apply (mode default when unset)"
    )

    max_capacity: Optional[int] = Field(
        default=None,
        gt=0,
        description="Maximum ACU to apply (mode default when unset)"
    )

    dry_run: bool = Field(
        default=False,
        description="Log matching clusters without modifying them"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @validator('deployment_mode', pre=True)
    def normalize_deployment_mode(cls, v):
        """Normalize deployment mode values for backwards compatibility."""
        if v:
            mode_mapping = {
                "cloud": "aws-prod",
                "local-mock": "aws-mock",
                "local-dev": "aws-mock",
            }
            return mode_mapping.get(v, v)
        return v

    @validator('deployment_mode')
    def validate_deployment_mode(cls, v):
        """Validate deployment mode is one of the allowed values."""
        valid_modes = ["aws-prod", "aws-mock"]
        if v not in valid_modes:
            raise ValueError(f"Invalid deployment_mode: {v}. Must be one of {valid_modes}")
        return v

    @validator('aws_endpoint_url', always=True)
    def set_endpoint_url_based_on_mode(cls, v, values):
        """Point at a local moto server in aws-mock mode if no endpoint was given."""
        if v is None and values.get('deployment_mode') == "aws-mock":
            return "http://localhost:5000"
        return v

    @validator('aws_access_key_id', 'aws_secret_access_key', always=True)
    def set_mock_credentials_for_mock_mode(cls, v, values):
        """Auto-set mock credentials for aws-mock mode if not provided."""
        if v is None and values.get('deployment_mode') == "aws-mock":
            return "mock"
        return v

    @validator('log_level')
    def normalize_log_level(cls, v):
        return v.upper()

    def capacity_for(self, mode: ScalingMode) -> CapacitySetting:
        """Resolve the capacity setting for a mode.

        Each bound falls back to the mode's default independently, so setting
        only MAX_CAPACITY keeps the default minimum.

        Raises:
            CapacityConfigError: if the resolved minimum exceeds the maximum
        """
        default = mode.default_setting
        min_capacity = self.min_capacity if self.min_capacity is not None else default.min_capacity
        max_capacity = self.max_capacity if self.max_capacity is not None else default.max_capacity

        if min_capacity > max_capacity:
            raise CapacityConfigError(
                f"MIN_CAPACITY ({min_capacity}) must not exceed MAX_CAPACITY ({max_capacity}) "
                f"for {mode.value}"
            )
        return CapacitySetting(min_capacity=min_capacity, max_capacity=max_capacity)

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        populate_by_name=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process, which on
    Lambda means once per warm container.
    """
    return Settings()
