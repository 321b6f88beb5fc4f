"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class DatabaseConfig(BaseModel):
    """Application database configuration."""

    url: str = Field(
        default="sqlite+aiosqlite:///./sassify.db",
        alias="DATABASE_URL",
        description="Async SQLAlchemy connection URL",
    )

    model_config = {"populate_by_name": True}


class OpenAIConfig(BaseModel):
    """OpenAI chat-completion API configuration."""

    api_key: Optional[str] = Field(
        default=None, alias="OPENAI_API_KEY", description="OpenAI API key for authentication"
    )
    base_url: str = Field(
        default="https://api.openai.com/v1", alias="OPENAI_BASE_URL", description="OpenAI API base URL"
    )
    model: str = Field(default="gpt-4o-mini", alias="OPENAI_MODEL", description="Default chat model")
    timeout: float = Field(default=60.0, alias="OPENAI_TIMEOUT", description="HTTP timeout in seconds")

    model_config = {"populate_by_name": True}


class StripeConfig(BaseModel):
    """Stripe payment provider configuration."""

    secret_key: Optional[str] = Field(default=None, alias="STRIPE_SECRET_KEY", description="Stripe secret API key")
    webhook_secret: Optional[str] = Field(
        default=None, alias="STRIPE_WEBHOOK_SECRET", description="Signing secret of the webhook endpoint"
    )
    api_base: str = Field(default="https://api.stripe.com/v1", alias="STRIPE_API_BASE", description="Stripe REST base URL")
    webhook_tolerance: int = Field(
        default=300, alias="STRIPE_WEBHOOK_TOLERANCE", description="Accepted signature age in seconds"
    )
    subscription_lookup_attempts: int = Field(
        default=5,
        alias="STRIPE_SUBSCRIPTION_LOOKUP_ATTEMPTS",
        description="How many times invoice.paid looks up a subscription that checkout has not stored yet",
    )
    subscription_lookup_delay: float = Field(
        default=5.0, alias="STRIPE_SUBSCRIPTION_LOOKUP_DELAY", description="Seconds between subscription lookups"
    )

    model_config = {"populate_by_name": True}


class SecurityConfig(BaseModel):
    """Token signing configuration."""

    jwt_secret: str = Field(default="change-me", alias="JWT_SECRET", description="HMAC secret for JWT signing")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM", description="JWT signing algorithm")
    access_token_ttl_minutes: int = Field(
        default=60, alias="ACCESS_TOKEN_TTL_MINUTES", description="Lifetime of access tokens"
    )
    verification_token_ttl_hours: int = Field(
        default=3, alias="VERIFICATION_TOKEN_TTL_HOURS", description="Lifetime of e-mail verification tokens"
    )

    model_config = {"populate_by_name": True}


class MailConfig(BaseModel):
    """Outgoing mail configuration."""

    smtp_server: Optional[str] = Field(default=None, alias="SMTP_SERVER", description="SMTP host")
    smtp_port: int = Field(default=587, alias="SMTP_PORT", description="SMTP port")
    smtp_user: Optional[str] = Field(default=None, alias="SMTP_USER", description="SMTP login")
    smtp_password: Optional[str] = Field(default=None, alias="SMTP_PASSWORD", description="SMTP password")
    mail_from: str = Field(default="no-reply-sassify@sassify.fr", alias="MAIL_FROM", description="Sender address")
    public_base_url: str = Field(
        default="http://localhost:8000", alias="PUBLIC_BASE_URL", description="Base URL used in e-mailed links"
    )

    model_config = {"populate_by_name": True}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Sassify Server Configuration
    # =====================================================================
    server_host: str = Field(default="0.0.0.0", alias="SASSIFY_SERVER_HOST")
    server_port: int = Field(default=8000, alias="SASSIFY_SERVER_PORT")
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="SASSIFY_LOG_LEVEL",
    )
    log_file_enabled: bool = Field(default=True, alias="ENABLE_FILE_LOGGING")

    # =====================================================================
    # Site Content
    # =====================================================================
    projects_data_path: str = Field(
        default="public/assets/data/saas.json",
        alias="PROJECTS_DATA_PATH",
        description="Portfolio JSON rendered on the home page",
    )
    blog_page_size: int = Field(default=8, alias="BLOG_PAGE_SIZE")
    blog_language: str = Field(default="French", alias="BLOG_LANGUAGE")

    # =====================================================================
    # Flat environment bindings (grouped below)
    # =====================================================================
    database_url: str = Field(default="sqlite+aiosqlite:///./sassify.db", alias="DATABASE_URL")

    openai_api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
    openai_base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    openai_model: str = Field(default="gpt-4o-mini", alias="OPENAI_MODEL")
    openai_timeout: float = Field(default=60.0, alias="OPENAI_TIMEOUT")

    stripe_secret_key: Optional[str] = Field(default=None, alias="STRIPE_SECRET_KEY")
    stripe_webhook_secret: Optional[str] = Field(default=None, alias="STRIPE_WEBHOOK_SECRET")
    stripe_api_base: str = Field(default="https://api.stripe.com/v1", alias="STRIPE_API_BASE")
    stripe_webhook_tolerance: int = Field(default=300, alias="STRIPE_WEBHOOK_TOLERANCE")
    stripe_subscription_lookup_attempts: int = Field(default=5, alias="STRIPE_SUBSCRIPTION_LOOKUP_ATTEMPTS")
    stripe_subscription_lookup_delay: float = Field(default=5.0, alias="STRIPE_SUBSCRIPTION_LOOKUP_DELAY")

    jwt_secret: str = Field(default="change-me", alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_ttl_minutes: int = Field(default=60, alias="ACCESS_TOKEN_TTL_MINUTES")
    verification_token_ttl_hours: int = Field(default=3, alias="VERIFICATION_TOKEN_TTL_HOURS")

    smtp_server: Optional[str] = Field(default=None, alias="SMTP_SERVER")
    smtp_port: int = Field(default=587, alias="SMTP_PORT")
    smtp_user: Optional[str] = Field(default=None, alias="SMTP_USER")
    smtp_password: Optional[str] = Field(default=None, alias="SMTP_PASSWORD")
    mail_from: str = Field(default="no-reply-sassify@sassify.fr", alias="MAIL_FROM")
    public_base_url: str = Field(default="http://localhost:8000", alias="PUBLIC_BASE_URL")

    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(default=["*"], alias="CORS_ALLOW_METHODS")
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def database(self) -> DatabaseConfig:
        """Get database configuration from environment variables."""
        return DatabaseConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def openai(self) -> OpenAIConfig:
        """Get OpenAI configuration from environment variables."""
        return OpenAIConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def stripe(self) -> StripeConfig:
        """Get Stripe configuration from environment variables."""
        return StripeConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def security(self) -> SecurityConfig:
        """Get token signing configuration from environment variables."""
        return SecurityConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def mail(self) -> MailConfig:
        """Get mail configuration from environment variables."""
        return MailConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
