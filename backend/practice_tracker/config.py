from pydantic_settings import BaseSettings, SettingsConfigDict

# Used when JWT_SECRET is unset. Tokens signed with it are forgeable by anyone
# who has read this file; set JWT_SECRET in every real deployment.
INSECURE_DEFAULT_JWT_SECRET = "ThisISMYSectKeyXHaxx1234"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Full URL wins; otherwise assembled from the POSTGRES_* parts below
    database_url: str = ""
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "postgres"

    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"

    port: int = 3000
    cors_origins: str = "*"
    rate_limit_default: str = "200/minute"
    log_level: str = "INFO"
    app_env: str = "development"  # "production" refuses to start with the default JWT secret
    debug: bool = False

    @property
    def async_database_url(self) -> str:
        """SQLAlchemy URL for the async engine (asyncpg for PostgreSQL)."""
        if not self.database_url:
            return (
                f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
                f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
            )
        url = self.database_url
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    @property
    def sync_database_url(self) -> str:
        """URL for sync drivers (Alembic)."""
        return self.async_database_url.replace("+asyncpg", "", 1).replace("+aiosqlite", "", 1)

    @property
    def uses_default_jwt_secret(self) -> bool:
        return not self.jwt_secret.strip()

    @property
    def effective_jwt_secret(self) -> str:
        if self.uses_default_jwt_secret:
            return INSECURE_DEFAULT_JWT_SECRET
        return self.jwt_secret

    def validate_jwt_config(self) -> None:
        """Raise if production runs on the built-in signing secret."""
        if self.app_env != "production":
            return
        if self.uses_default_jwt_secret:
            raise RuntimeError("JWT_SECRET must be set in production")


settings = Settings()
