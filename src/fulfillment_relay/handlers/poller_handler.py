"""
Shipment poller handler - scheduled Lambda function.

Triggered hourly by an EventBridge schedule. Polls Printful for recently
shipped orders and emails each customer once through Sender.net.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from fulfillment_relay.clients.printful_client import PrintfulClient
from fulfillment_relay.clients.sender_client import SenderClient
from fulfillment_relay.dal import get_sent_flag_store
from fulfillment_relay.handlers.models.env_vars import PollerEnvVars, get_poller_env_vars
from fulfillment_relay.handlers.utils.errors import create_api_response
from fulfillment_relay.handlers.utils.observability import logger, metrics, tracer
from fulfillment_relay.logic.shipment_notifier import ShipmentNotifier


def build_notifier(env: PollerEnvVars) -> ShipmentNotifier:
    return ShipmentNotifier(
        printful=PrintfulClient(base_url=env.PRINTFUL_API_URL, api_key=env.PRINTFUL_API_KEY),
        sender=SenderClient(base_url=env.SENDER_API_URL, api_key=env.SENDER_API_KEY),
        sent_flags=get_sent_flag_store(env.SENT_FLAGS_TABLE_NAME),
        from_email=env.SENDER_FROM_EMAIL,
        from_name=env.SENDER_FROM_NAME,
        window_hours=env.SHIPPED_WINDOW_HOURS,
        order_limit=env.ORDERS_PAGE_LIMIT,
    )


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
@logger.inject_lambda_context
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Shipment poller Lambda handler

    Args:
        event: EventBridge scheduled event (contents ignored)
        context: Lambda context object

    Returns:
        API Gateway style response with the run summary
    """
    logger.info('Checking Printful for shipped orders', extra={'request_id': context.aws_request_id})

    try:
        env = get_poller_env_vars()

        if not env.PRINTFUL_API_KEY or not env.SENDER_API_KEY:
            logger.error('Printful or Sender API key missing')
            return create_api_response(
                status_code=500,
                body={
                    'error': 'Missing API keys',
                    'details': 'Set PRINTFUL_API_KEY and SENDER_API_KEY in environment variables',
                },
            )

        notifier = build_notifier(env)
        with notifier.printful, notifier.sender:
            summary = notifier.run(now=datetime.now(timezone.utc))

        logger.info('Shipment check completed', extra={
            'orders_found': summary.orders_found,
            'emails_sent': summary.emails_sent,
            'errors': summary.errors,
        })
        return create_api_response(status_code=200, body=summary.dump())

    except Exception as e:
        logger.exception('Fatal error during shipment check', extra={'error': str(e)})
        metrics.add_metric(name='ErrorCount', unit=MetricUnit.Count, value=1)
        return create_api_response(
            status_code=500,
            body={'error': 'Internal error', 'message': str(e)},
        )
