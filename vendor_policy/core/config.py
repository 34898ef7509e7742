"""
Configuration Settings.

This module defines the vendor policy configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from pathlib import Path
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class PolicyReference(BaseModel):
    """Identifies the optional vendor policy extension.

    ``package_name`` is the distribution name of the installed extension and
    ``entry_point`` is the name it registers in the ``vendor_policy.policies``
    entry-point group.
    """

    package_name: str = Field(description="Distribution name of the vendor policy package")
    entry_point: str = Field(description="Entry-point name the package registers its factory under")

    model_config = ConfigDict(frozen=True)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", alias="VENDOR_POLICY_LOG_LEVEL", description="Console log level")
    log_format: str = Field(
        default="detailed", alias="VENDOR_POLICY_LOG_FORMAT", description="Log format (simple, detailed, json)"
    )
    log_file_dir: str = Field(
        default="logs", alias="VENDOR_POLICY_LOG_FILE_DIR", description="Directory for the log file"
    )
    enable_file_logging: bool = Field(
        default=False, alias="VENDOR_POLICY_ENABLE_FILE_LOGGING", description="Write logs to a file as well"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Vendor policy settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Vendor Policy Resolution
    # =====================================================================
    policy_package: str = Field(
        default="email-vendor-policy",
        description="Distribution name of the optional vendor policy package",
        alias="VENDOR_POLICY_PACKAGE",
    )
    policy_entry_point: str = Field(
        default="default",
        description="Entry-point name of the vendor policy factory",
        alias="VENDOR_POLICY_ENTRY_POINT",
    )
    enforce_trust: bool = Field(
        default=True,
        description="Only use a vendor policy installed under a trusted root",
        alias="VENDOR_POLICY_ENFORCE_TRUST",
    )
    trusted_roots: List[Path] = Field(
        default_factory=list,
        description="Trusted installation roots; empty means the interpreter's system library paths",
        alias="VENDOR_POLICY_TRUSTED_ROOTS",
    )

    # =====================================================================
    # Logging Configuration
    # =====================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="VENDOR_POLICY_LOG_LEVEL",
    )
    log_format: str = Field(
        default="detailed",
        description="Logging format (simple, detailed, json)",
        alias="VENDOR_POLICY_LOG_FORMAT",
    )
    log_file_dir: str = Field(
        default="logs",
        description="Directory the log file is written to",
        alias="VENDOR_POLICY_LOG_FILE_DIR",
    )
    enable_file_logging: bool = Field(
        default=False,
        description="Whether to write logs to a file",
        alias="VENDOR_POLICY_ENABLE_FILE_LOGGING",
    )

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def policy_reference(self) -> PolicyReference:
        """Get the configured vendor policy reference."""
        return PolicyReference(package_name=self.policy_package, entry_point=self.policy_entry_point)

    @property
    def logging(self) -> LoggingConfig:
        """Get logging configuration from environment variables."""
        return LoggingConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
