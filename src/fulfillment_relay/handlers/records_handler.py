"""
Records Handler - Lambda function for the posts REST facade.

Two routes: list every row of the ``posts`` table, and forward a batch of
documents to the Solr core that indexes them. Neither route authenticates;
the request body is trusted as-is.
"""

import json
from typing import Any, Dict, List, Optional

import httpx
from aws_lambda_powertools.event_handler import APIGatewayRestResolver, CORSConfig, Response, content_types
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from sqlalchemy.exc import SQLAlchemyError

from fulfillment_relay.clients.solr_client import SolrClient
from fulfillment_relay.dal import PostsRepository
from fulfillment_relay.dal.posts_handler import SqlPostsHandler, build_database_url
from fulfillment_relay.handlers.models.env_vars import get_records_env_vars
from fulfillment_relay.handlers.utils.errors import ExternalServiceError
from fulfillment_relay.handlers.utils.observability import logger, metrics, tracer

POSTS_PATH = '/api/posts'
INDEX_PATH = '/api/index'

app = APIGatewayRestResolver(cors=CORSConfig(allow_origin='*', max_age=600))

# Engine is reused across warm invocations
_posts_repository: Optional[PostsRepository] = None


def get_posts_repository() -> PostsRepository:
    """Get or create the posts repository for the configured database."""
    global _posts_repository

    if _posts_repository is None:
        env = get_records_env_vars()
        url = env.DATABASE_URL or build_database_url(
            host=env.DB_HOST,
            user=env.DB_USER,
            password=env.DB_PASS,
            database=env.DB_NAME,
            port=env.DB_PORT,
        )
        _posts_repository = SqlPostsHandler.from_url(url)
        logger.debug('Posts repository initialized')

    return _posts_repository


def get_solr_client() -> SolrClient:
    env = get_records_env_vars()
    return SolrClient(host=env.SOLR_HOST, core=env.SOLR_CORE, port=env.SOLR_PORT)


def _error(status_code: int, message: str) -> Response:
    return Response(
        status_code=status_code,
        content_type=content_types.APPLICATION_JSON,
        body=json.dumps({'error': message}),
    )


@app.exception_handler(SQLAlchemyError)
def handle_database_error(error: SQLAlchemyError) -> Response:
    logger.exception('Database query failed', extra={'error': str(error)})
    metrics.add_metric(name='ErrorCount', unit=MetricUnit.Count, value=1)
    return _error(500, str(error))


@app.exception_handler(json.JSONDecodeError)
def handle_invalid_json(error: json.JSONDecodeError) -> Response:
    logger.warning('Rejected malformed request body', extra={'error': str(error)})
    return _error(400, 'Invalid JSON payload')


@app.exception_handler(ExternalServiceError)
def handle_index_error(error: ExternalServiceError) -> Response:
    logger.error('Solr update failed', extra={
        'status_code': error.upstream_status_code,
        'error': error.message,
    })
    metrics.add_metric(name='ErrorCount', unit=MetricUnit.Count, value=1)
    return _error(500, error.message)


@app.exception_handler(httpx.HTTPError)
def handle_transport_error(error: httpx.HTTPError) -> Response:
    logger.error('Solr unreachable', extra={'error': str(error)})
    metrics.add_metric(name='ErrorCount', unit=MetricUnit.Count, value=1)
    return _error(500, str(error))


@app.get(POSTS_PATH)
@tracer.capture_method
def list_posts() -> List[Dict[str, Any]]:
    """Every row of the posts table, unpaginated."""
    posts = get_posts_repository().list_posts()
    metrics.add_metric(name='RecordsListed', unit=MetricUnit.Count, value=len(posts))
    return posts


@app.post(INDEX_PATH)
@tracer.capture_method
def index_posts() -> Response:
    """Forward the request body verbatim to Solr and commit."""
    documents = json.loads(app.current_event.body or '')

    with get_solr_client() as solr:
        solr.update(documents, commit=True)

    document_count = len(documents) if isinstance(documents, list) else 1
    metrics.add_metric(name='DocumentsIndexed', unit=MetricUnit.Count, value=document_count)

    return Response(
        status_code=200,
        content_type=content_types.TEXT_PLAIN,
        body='Indexed',
    )


@metrics.log_metrics
@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    return app.resolve(event, context)
