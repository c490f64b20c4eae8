from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "SaaS Admin"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Database
    database_url: str
    database_migrations_url: str | None = None  # Elevated credential for migrations
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Auth
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1
    session_cookie_name: str = "session_token"

    # Impersonation
    impersonation_cookie_name: str = "impersonation_id"
    impersonation_ttl_seconds: int = 3600
    impersonation_retention_days: int = 30  # Expired rows older than this are purged
    impersonation_poll_interval_seconds: float = 5.0

    # Routing
    admin_area_prefixes: list[str] = ["/admin", "/api/v1/admin"]
    impersonation_landing_path: str = "/dashboard"
    admin_return_path: str = "/admin/users"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "JWT_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Reject wildcard origins since credentials (cookies) are allowed."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("admin_area_prefixes")
    @classmethod
    def validate_admin_area_prefixes(cls, v: list[str]) -> list[str]:
        for prefix in v:
            if not prefix.startswith("/"):
                raise ValueError(f"Admin area prefix '{prefix}' must start with '/'")
        return [prefix.rstrip("/") or "/" for prefix in v]

    @field_validator("impersonation_ttl_seconds")
    @classmethod
    def validate_impersonation_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("IMPERSONATION_TTL_SECONDS must be positive")
        return v

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
