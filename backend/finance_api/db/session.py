from __future__ import annotations

from urllib.parse import quote_plus

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from finance_api.core.config import settings


def build_connection_url() -> str:
    if settings.database_url:
        return settings.database_url

    # Use ODBC connection string to avoid URL-escaping pain on Windows instance names.
    # Some .env examples may contain double backslashes (e.g. .\\SQLEXPRESS). ODBC expects .\SQLEXPRESS.
    server = settings.db_server.replace("\\\\", "\\")
    parts: list[str] = [
        f"DRIVER={{{settings.db_driver}}}",
        f"SERVER={server}",
        f"DATABASE={settings.db_name}",
        "TrustServerCertificate=yes",
    ]

    if settings.db_trusted_connection:
        parts.append("Trusted_Connection=yes")
    else:
        if not settings.db_user or not settings.db_password:
            raise ValueError("SQL login requires FINANCE_DB_USER and FINANCE_DB_PASSWORD")
        parts.append(f"UID={settings.db_user}")
        parts.append(f"PWD={settings.db_password}")

    odbc_str = ";".join(parts)
    return "mssql+pyodbc:///?odbc_connect=" + quote_plus(odbc_str)


def build_engine(url: str):
    connect_args = {}
    if url.startswith("sqlite"):
        # Request handlers run in a threadpool.
        connect_args["check_same_thread"] = False
    return create_engine(url, pool_pre_ping=True, future=True, connect_args=connect_args)


engine = build_engine(build_connection_url())

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
