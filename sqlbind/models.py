"""
Connection description models used by ``sqlbind.core.connect``.
"""

from enum import Enum

from pydantic import BaseModel, Field


class ProductTypeEnum(str, Enum):
    """Supported database product types (postgres, mysql, trino, sqlite)."""

    POSTGRES = "postgres"
    MYSQL = "mysql"
    TRINO = "trino"
    SQLITE = "sqlite"


class DataSource(BaseModel):
    """Where and how to connect. For SQLITE, ``database`` is the file path (or ``:memory:``)."""

    product_type: ProductTypeEnum
    database: str = Field(min_length=1)
    host: str | None = None
    port: int | None = None
    username: str | None = None
    password: str | None = None
    use_ssl: bool = False
