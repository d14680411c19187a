"""Application configuration management."""

from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Database Configuration
    postgres_host: str = Field(default="localhost", description="PostgreSQL host")
    postgres_port: int = Field(default=5432, description="PostgreSQL port")
    postgres_db: str = Field(default="staffing_portal", description="PostgreSQL database name")
    postgres_user: str = Field(default="portal_user", description="PostgreSQL username")
    postgres_password: str = Field(default="", description="PostgreSQL password")
    database_url_override: Optional[str] = Field(
        default=None,
        validation_alias="CUSTOM_DATABASE_URL",
        description="Full database URL, takes precedence over the postgres_* settings"
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    secret_key: str = Field(default="dev-secret-key", description="JWT secret key")
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    access_token_expire_minutes: int = Field(default=60 * 24, description="Token expiry minutes")
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Origins allowed to call the API from a browser"
    )

    # Access code configuration
    access_code_group_size: int = Field(default=4, description="Symbols per dash-separated group")
    access_code_groups: int = Field(default=7, description="Number of groups in a generated code")
    access_code_max_attempts: int = Field(default=5, description="Insert attempts before a code conflict is surfaced")
    bulk_code_ttl_days: int = Field(default=30, description="Lifetime of bulk-generated access codes")

    # Application Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    environment: str = Field(default="development", description="Environment name")

    # SMTP Configuration
    smtp_host: str = Field(default="localhost", description="SMTP server host")
    smtp_port: int = Field(default=587, description="SMTP server port")
    smtp_username: Optional[str] = Field(default=None, description="SMTP username")
    smtp_password: Optional[str] = Field(default=None, description="SMTP password")
    smtp_use_tls: bool = Field(default=True, description="Use TLS for SMTP")
    smtp_timeout: float = Field(default=10.0, description="SMTP connect and command timeout in seconds")
    mail_from: str = Field(default="no-reply@staffing-portal.local", description="Sender address")
    internal_notification_email: Optional[str] = Field(
        default=None, description="Recruiting team inbox for new job postings"
    )
    email_notifications_enabled: bool = Field(default=False, description="Send job posting emails")

    @property
    def database_url(self) -> str:
        """Construct database URL from components."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


# Global settings instance
settings = Settings()
