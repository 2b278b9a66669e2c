"""
SQLAlchemy implementation of the posts table access.

Rows are returned as plain dictionaries with JSON-ready values so the REST
facade can serialize them without knowing the table's schema.
"""

import base64
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine

from fulfillment_relay.handlers.utils.observability import logger, tracer

LIST_POSTS_SQL = text('SELECT * FROM posts')


def build_database_url(
    host: str,
    user: Optional[str],
    password: Optional[str],
    database: Optional[str],
    port: int = 3306,
) -> URL:
    """Build a PyMySQL connection URL from its parts."""
    return URL.create(
        drivername='mysql+pymysql',
        username=user,
        password=password,
        host=host,
        port=port,
        database=database,
    )


def to_json_value(value: Any) -> Any:
    """Convert a column value into something ``json.dumps`` accepts."""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError:
            return base64.b64encode(raw).decode('ascii')
    return value


class SqlPostsHandler:
    """Posts repository over a SQLAlchemy engine."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    @classmethod
    def from_url(cls, url: Any) -> 'SqlPostsHandler':
        return cls(create_engine(url, pool_pre_ping=True))

    @tracer.capture_method
    def list_posts(self) -> List[Dict[str, Any]]:
        """
        Return every row of the posts table.

        Raises:
            sqlalchemy.exc.SQLAlchemyError: If the query fails
        """
        with self.engine.connect() as connection:
            result = connection.execute(LIST_POSTS_SQL)
            rows = [
                {column: to_json_value(value) for column, value in row._mapping.items()}
                for row in result
            ]

        logger.info('Posts retrieved from database', extra={'post_count': len(rows)})
        tracer.put_annotation('post_count', str(len(rows)))
        return rows
