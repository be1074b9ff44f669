"""
Settings loaded from the environment (and ``.env`` when present).

Other modules import the module-level ``settings`` instead of reading
``os.environ`` directly.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Placeholder style used when the connection's driver module does not
    # advertise a DB-API ``paramstyle``.
    SQL_DEFAULT_PARAMSTYLE: Literal["qmark", "format", "pyformat", "numeric"] = "qmark"

    # Rows pulled per round-trip by a result sequence (1 = fetchone()).
    SQL_FETCH_SIZE: int = Field(default=1, ge=1)

    # Log every executed statement with its values inlined (DEBUG level).
    SQL_LOG_STATEMENTS: bool = False

    # Used by sqlbind.core.connect only; the session itself never opens connections.
    EXTERNAL_DB_CONNECT_TIMEOUT: int = 10
    EXTERNAL_DB_STATEMENT_TIMEOUT: float | None = None


settings = Settings()  # type: ignore
