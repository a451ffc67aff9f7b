"""
Optional MySQL connection used only for charset-aware string escaping.

The compiler never executes SQL; running the compiled query is the caller's
job. When ``MYSQL_HOST`` is not configured, escaping falls back to pymysql's
connection-less ``escape_string``.
"""

import logging
from typing import Any

import pymysql

from querytpl.core.config import Settings, settings

logger = logging.getLogger(__name__)


def connect(config: Settings | None = None) -> Any:
    """
    Open a pymysql connection from ``MYSQL_*`` settings.

    Returns None when ``MYSQL_HOST`` is unset.
    """
    config = config or settings
    if not config.MYSQL_HOST:
        return None
    logger.info("Connecting to MySQL at %s:%s", config.MYSQL_HOST, config.MYSQL_PORT)
    return pymysql.connect(
        host=config.MYSQL_HOST,
        port=int(config.MYSQL_PORT),
        database=config.MYSQL_DATABASE,
        user=config.MYSQL_USER,
        password=config.MYSQL_PASSWORD,
        connect_timeout=config.MYSQL_CONNECT_TIMEOUT,
    )


def close(conn: Any) -> None:
    """Close *conn*, ignoring errors from an already dropped connection."""
    if conn is None:
        return
    try:
        conn.close()
    except pymysql.Error:
        logger.warning("Error closing MySQL connection", exc_info=True)
