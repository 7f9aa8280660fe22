"""
Configuration management with environment variable support and validation.

Design principles:
- Environment-specific configs (dev, staging, prod)
- Validation at startup (fail fast)
- Type safety with Pydantic
- Clinical rule overrides come from the environment, never from code edits
"""

import os
from functools import lru_cache
from typing import Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

from vitalcheck.domain.models import ClinicalFlag
from vitalcheck.services.severity import DEFAULT_CRITICAL_FLAGS

# Load environment variables from .env file
load_dotenv()

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
Environment = Literal["development", "staging", "production"]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default="INFO", description="Logging level")
    format: Literal["json", "console"] = Field(default="json", description="Logging format")


class RulesConfig(BaseModel):
    """Clinical rule settings that are still pending sign-off."""

    critical_flags: frozenset[ClinicalFlag] = Field(
        default=DEFAULT_CRITICAL_FLAGS,
        description="Flags that escalate a record straight to critical",
    )

    @field_validator("critical_flags", mode="before")
    @classmethod
    def split_flag_names(cls, v):
        if isinstance(v, str):
            return [name.strip().lower() for name in v.split(",") if name.strip()]
        return v


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    environment: Environment = Field(default="development", description="Environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    rules: RulesConfig = Field(default_factory=RulesConfig)

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""

    def _env_to_literal(val: str) -> Environment:
        v = val.strip().lower()
        if v in {"dev", "development"}:
            return "development"
        if v in {"stage", "staging"}:
            return "staging"
        return "production"

    def _level_to_literal(val: str) -> LogLevel:
        v = val.strip().upper()
        return cast(
            LogLevel,
            v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO",
        )

    def _parse_bool(val: str | None, default: bool) -> bool:
        if val is None:
            return default
        return val.strip().lower() in {"1", "true", "yes", "on"}

    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = _parse_bool(os.getenv("DEBUG"), environment == "development")

    log_format = os.getenv("LOG_FORMAT", "console" if debug else "json").strip().lower()
    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format="console" if log_format == "console" else "json",
    )

    # Unset or blank keeps the default critical subset
    critical_flags = os.getenv("VITALS_CRITICAL_FLAGS", "").strip()
    rules_config = RulesConfig(critical_flags=critical_flags) if critical_flags else RulesConfig()

    return AppConfig(
        environment=environment,
        debug=debug,
        logging=logging_config,
        rules=rules_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()


def validate_config() -> None:
    """Validate configuration at startup."""
    try:
        config = get_config()
        print(f"Configuration loaded for {config.environment} environment")
    except Exception as e:
        print(f"Configuration validation failed: {e}")
        raise


def print_config_summary() -> None:
    """Print configuration summary for debugging."""
    config = get_config()

    print("\nCONFIGURATION SUMMARY")
    print(f"Environment: {config.environment}")
    print(f"Debug Mode: {config.debug}")
    print(f"Log Level: {config.logging.level} ({config.logging.format})")

    print("\nCLINICAL RULES")
    critical = ", ".join(sorted(flag.value for flag in config.rules.critical_flags)) or "(none)"
    print(f"Critical Flags: {critical}")


if __name__ == "__main__":
    validate_config()
    print_config_summary()
