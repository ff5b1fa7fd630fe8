"""
Configuration settings for the deferred callback scheduler.
"""
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


CALLBACK_ERROR_POLICIES = ("isolate", "propagate")
NEGATIVE_DELAY_POLICIES = ("clamp", "reject")
LOG_FORMATS = ("simple", "detailed", "json")


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="detailed",
        description="Log output format (simple, detailed, json)"
    )

    # Scheduler settings
    scheduler_callback_error_policy: str = Field(
        default="isolate",
        description="What the dispatch worker does when a callback raises (isolate, propagate)"
    )
    scheduler_negative_delay_policy: str = Field(
        default="clamp",
        description="How schedule_after treats a negative delay (clamp, reject)"
    )
    scheduler_thread_name: str = Field(
        default="callback-scheduler",
        description="Name given to the dispatch worker thread"
    )

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v):
        """Validate log format."""
        if v not in LOG_FORMATS:
            raise ValueError("Log format must be one of: simple, detailed, json")
        return v

    @field_validator('scheduler_callback_error_policy')
    @classmethod
    def validate_callback_error_policy(cls, v):
        """Validate callback error policy."""
        if v not in CALLBACK_ERROR_POLICIES:
            raise ValueError("Callback error policy must be one of: isolate, propagate")
        return v

    @field_validator('scheduler_negative_delay_policy')
    @classmethod
    def validate_negative_delay_policy(cls, v):
        """Validate negative delay policy."""
        if v not in NEGATIVE_DELAY_POLICIES:
            raise ValueError("Negative delay policy must be one of: clamp, reject")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False


# Create global settings instance
settings = Settings()
