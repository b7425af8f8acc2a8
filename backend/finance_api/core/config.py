from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FINANCE_", env_file=".env", extra="ignore")

    # Full SQLAlchemy URL (e.g. sqlite:///./finance.db). When unset, an ODBC
    # URL for SQL Server is built from the db_* fields below.
    database_url: str | None = None

    # Use the common instance name format used by SSMS, e.g. .\SQLEXPRESS
    db_server: str = r".\SQLEXPRESS"
    db_name: str = "PersonalFinance"
    db_trusted_connection: bool = True
    db_user: str | None = None
    db_password: str | None = None
    db_driver: str = "ODBC Driver 17 for SQL Server"

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expire_seconds: int = 3600

    bcrypt_rounds: int = 12

    # Access token is also stored in an HttpOnly cookie on login.
    auth_cookie_name: str = "finance_auth"
    auth_cookie_samesite: str = "lax"  # lax|strict|none
    auth_cookie_secure: bool = False

    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173,http://localhost:8000,http://127.0.0.1:8000"

    default_currency: str = "BRL"

    log_level: str = "INFO"

    # Startup bootstrap. auto_create_schema is meant for local SQLite use;
    # real deployments run `alembic upgrade head`.
    auto_create_schema: bool = False
    seed_default_categories: bool = True
    admin_email: str | None = None
    admin_password: str | None = None
    admin_nickname: str = "Administrator"


settings = Settings()
