"""
Environment variable models for type-safe configuration.

This module defines Pydantic models for the environment variables read by the
relay handlers. Credentials are optional at the model level so that handlers
can answer with their own error bodies when a key is missing.
"""

from typing import Annotated, Optional

from aws_lambda_env_modeler import get_environment_variables
from pydantic import BaseModel, Field

DEFAULT_FROM_EMAIL = 'orders@yourdomain.com'
DEFAULT_FROM_NAME = 'Your Store'


class SenderEnvVars(BaseModel):
    """Sender.net settings shared by the webhook and poller functions."""

    SENDER_API_KEY: Annotated[Optional[str], Field(
        default=None,
        description='Bearer token for the Sender.net API'
    )] = None

    SENDER_API_URL: Annotated[str, Field(
        default='https://api.sender.net/v2',
        description='Base URL of the Sender.net API'
    )] = 'https://api.sender.net/v2'

    SENDER_FROM_EMAIL: Annotated[str, Field(
        default=DEFAULT_FROM_EMAIL,
        description='From address for shipment emails'
    )] = DEFAULT_FROM_EMAIL

    SENDER_FROM_NAME: Annotated[str, Field(
        default=DEFAULT_FROM_NAME,
        description='From name for shipment emails'
    )] = DEFAULT_FROM_NAME


class WebhookEnvVars(SenderEnvVars):
    """Environment variables for the Printful webhook receivers."""

    # Group whose membership triggers the "order shipped" automation
    SENDER_GROUP_ID: Annotated[Optional[str], Field(
        default=None,
        description='Sender.net group id for the order-shipped automation'
    )] = None


class PollerEnvVars(SenderEnvVars):
    """Environment variables for the shipment polling job."""

    PRINTFUL_API_KEY: Annotated[Optional[str], Field(
        default=None,
        description='Bearer token for the Printful API'
    )] = None

    PRINTFUL_API_URL: Annotated[str, Field(
        default='https://api.printful.com',
        description='Base URL of the Printful API'
    )] = 'https://api.printful.com'

    SENT_FLAGS_TABLE_NAME: Annotated[str, Field(
        default='shipment-emails',
        min_length=1,
        description='DynamoDB table holding the per-order sent flags'
    )] = 'shipment-emails'

    SHIPPED_WINDOW_HOURS: Annotated[int, Field(
        default=24,
        ge=1,
        le=720,
        description='How far back an order may have shipped and still be emailed'
    )] = 24

    ORDERS_PAGE_LIMIT: Annotated[int, Field(
        default=100,
        ge=1,
        le=100,
        description='Number of fulfilled orders requested from Printful per run'
    )] = 100


class RecordsEnvVars(BaseModel):
    """Environment variables for the posts REST facade."""

    DB_HOST: Annotated[str, Field(
        default='localhost',
        description='MySQL host'
    )] = 'localhost'

    DB_PORT: Annotated[int, Field(
        default=3306,
        ge=1,
        le=65535,
        description='MySQL port'
    )] = 3306

    DB_USER: Annotated[Optional[str], Field(
        default=None,
        description='MySQL user'
    )] = None

    DB_PASS: Annotated[Optional[str], Field(
        default=None,
        description='MySQL password'
    )] = None

    DB_NAME: Annotated[Optional[str], Field(
        default=None,
        description='MySQL database name'
    )] = None

    # Full SQLAlchemy URL, takes precedence over the DB_* parts
    DATABASE_URL: Annotated[Optional[str], Field(
        default=None,
        description='SQLAlchemy database URL override'
    )] = None

    SOLR_HOST: Annotated[str, Field(
        default='localhost',
        description='Solr host'
    )] = 'localhost'

    SOLR_PORT: Annotated[int, Field(
        default=8983,
        ge=1,
        le=65535,
        description='Solr port'
    )] = 8983

    SOLR_CORE: Annotated[str, Field(
        default='posts',
        min_length=1,
        description='Solr core receiving indexed posts'
    )] = 'posts'


def get_webhook_env_vars() -> WebhookEnvVars:
    return get_environment_variables(model=WebhookEnvVars)


def get_poller_env_vars() -> PollerEnvVars:
    return get_environment_variables(model=PollerEnvVars)


def get_records_env_vars() -> RecordsEnvVars:
    return get_environment_variables(model=RecordsEnvVars)
