"""
Configuration management for the Aurora capacity scaler.

Contains the Pydantic settings used by both the Lambda entry points and the
CLI, across aws-prod and aws-mock deployment modes.
"""
from aurora_scaler.config.settings import CapacityConfigError, Settings, get_settings

__all__ = ["CapacityConfigError", "Settings", "get_settings"]
