"""
Open a DB-API connection for a DataSource.

Uses psycopg (PostgreSQL), pymysql (MySQL), trino (Trino) or sqlite3 based on
product_type. Timeouts from settings are applied as connection options, so a
SqlSession running on the connection inherits them without knowing about them.

The caller owns the returned connection and must close it; SqlSession never does.
"""

import sqlite3
from typing import Any

import psycopg
import pymysql
from trino.auth import BasicAuthentication
from trino.dbapi import connect as trino_connect

from sqlbind.core.config import settings
from sqlbind.models import ProductTypeEnum

_DEFAULT_PORTS = {
    ProductTypeEnum.POSTGRES: 5432,
    ProductTypeEnum.MYSQL: 3306,
    ProductTypeEnum.TRINO: 8080,
}


def _get(datasource: Any, key: str) -> Any:
    """Get attribute or dict key from DataSource, dict, or Pydantic model."""
    if isinstance(datasource, dict):
        return datasource.get(key)
    return getattr(datasource, key, None)


def _resolve_product_type(
    datasource: Any, product_type: ProductTypeEnum | None
) -> ProductTypeEnum:
    pt = product_type or _get(datasource, "product_type")
    if pt is None:
        raise ValueError("product_type is required (from datasource or argument)")
    if isinstance(pt, str):
        return ProductTypeEnum(pt)
    return pt


def connect(
    datasource: Any,
    *,
    product_type: ProductTypeEnum | None = None,
) -> Any:
    """
    Open a connection to a DB from a DataSource or connection dict.

    - datasource: DataSource model or dict with host, port, database, username,
      password, and product_type (or pass product_type=).
    - product_type: override when datasource is dict with string product_type.
    """
    pt = _resolve_product_type(datasource, product_type)
    database = _get(datasource, "database")
    if database is None:
        raise ValueError("datasource must provide database")

    timeout = settings.EXTERNAL_DB_CONNECT_TIMEOUT
    statement_timeout = settings.EXTERNAL_DB_STATEMENT_TIMEOUT

    if pt == ProductTypeEnum.SQLITE:
        return sqlite3.connect(database, timeout=timeout)

    host = _get(datasource, "host")
    port = _get(datasource, "port") or _DEFAULT_PORTS[pt]
    username = _get(datasource, "username")
    password = _get(datasource, "password")

    for name, val in [("host", host), ("username", username)]:
        if val is None:
            raise ValueError(f"datasource must provide {name}")
    password = password if password is not None else ""

    if pt == ProductTypeEnum.POSTGRES:
        options = None
        if statement_timeout:
            options = f"-c statement_timeout={int(statement_timeout * 1000)}"
        return psycopg.connect(
            host=host,
            port=int(port),
            dbname=database,
            user=username,
            password=password,
            connect_timeout=timeout,
            options=options,
        )
    if pt == ProductTypeEnum.MYSQL:
        init_command = None
        if statement_timeout:
            init_command = f"SET SESSION max_execution_time = {int(statement_timeout * 1000)}"
        return pymysql.connect(
            host=host,
            port=int(port),
            database=database,
            user=username,
            password=password,
            connect_timeout=timeout,
            init_command=init_command,
        )
    if pt == ProductTypeEnum.TRINO:
        use_ssl = _get(datasource, "use_ssl") in (True, "true", "1")
        if use_ssl and not (password and password.strip()):
            raise ValueError("Password is required for Trino when using SSL/HTTPS.")
        session_properties = None
        if statement_timeout:
            session_properties = {"query_max_execution_time": f"{int(statement_timeout)}s"}
        return trino_connect(
            host=host,
            port=int(port),
            user=username,
            auth=BasicAuthentication(username, password) if use_ssl else None,
            catalog=database,
            schema="default",
            source="sqlbind",
            http_scheme="https" if use_ssl else "http",
            request_timeout=timeout,
            session_properties=session_properties,
        )
    raise ValueError(f"Unsupported product_type: {pt}")
