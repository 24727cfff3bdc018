"""
Runtime configuration for the order service.

Settings are read from environment variables once, when the application is
built. Tests construct Settings directly instead of touching os.environ.
"""

import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, Field, field_validator


# Environment variable -> Settings field
ENV_VARS = {
    "USER_SERVICE_URL": "user_service_url",
    "MAIL_SERVICE_URL": "mail_service_url",
    "ADMIN_EMAIL": "admin_email",
    "SEND_MAILS": "send_mails",
    "HTTP_TIMEOUT": "http_timeout",
    "LOG_LEVEL": "log_level",
}


class Settings(BaseModel):
    """Order service settings."""
    user_service_url: str = Field(default="http://localhost", description="Base URL of the user service")
    mail_service_url: str = Field(default="https://mailer.com", description="Base URL of the mail service")
    admin_email: str = Field(default="admin@example.com", description="Recipient of order notifications")
    send_mails: bool = Field(
        default=False,
        description="Send success notifications. Failure notifications are always attempted.",
    )
    http_timeout: float = Field(default=5.0, gt=0, description="Timeout in seconds for outbound calls")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Unset variables fall back to the field defaults. Values are parsed
        by pydantic, so SEND_MAILS accepts "true"/"false"/"1"/"0".
        """
        if environ is None:
            environ = os.environ
        values = {
            field: environ[var]
            for var, field in ENV_VARS.items()
            if environ.get(var) not in (None, "")
        }
        return cls(**values)
