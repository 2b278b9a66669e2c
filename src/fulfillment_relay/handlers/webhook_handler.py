"""
Printful webhook handlers - Lambda functions for ``shipment_sent`` events.

Three receivers share one pipeline and differ only in what they do with a
shipment: send a transactional email, add the customer to the automation
group, or remove and re-add them so the automation fires for repeat orders.
"""

import json
from typing import Any, Callable, Dict

from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from fulfillment_relay.clients.sender_client import SenderClient
from fulfillment_relay.handlers.models.env_vars import WebhookEnvVars, get_webhook_env_vars
from fulfillment_relay.handlers.utils.errors import (
    ConfigurationError,
    ValidationError,
    create_api_response,
    error_response,
)
from fulfillment_relay.handlers.utils.observability import logger, metrics, tracer
from fulfillment_relay.logic.shipment_webhook_service import ShipmentAction, ShipmentWebhookService
from fulfillment_relay.models.fulfillment import WebhookEvent


def parse_webhook_event(event: Dict[str, Any]) -> WebhookEvent:
    """
    Parse the API Gateway body into a webhook envelope.

    Raises:
        ValidationError: If the body is missing or not a JSON object
    """
    try:
        payload = json.loads(event.get('body') or '')
        return WebhookEvent.model_validate(payload)
    except (json.JSONDecodeError, TypeError, PydanticValidationError) as e:
        logger.warning('Rejected malformed webhook body', extra={'error': str(e)})
        raise ValidationError(message='Invalid JSON payload')


def build_service(env: WebhookEnvVars) -> ShipmentWebhookService:
    if not env.SENDER_API_KEY:
        raise ConfigurationError(
            message='SENDER_API_KEY environment variable not set',
            body={'error': 'SENDER_API_KEY environment variable not set'},
        )
    return ShipmentWebhookService(
        sender=SenderClient(base_url=env.SENDER_API_URL, api_key=env.SENDER_API_KEY),
        from_email=env.SENDER_FROM_EMAIL,
        from_name=env.SENDER_FROM_NAME,
        group_id=env.SENDER_GROUP_ID,
    )


@tracer.capture_method
def process_webhook(event: Dict[str, Any], action: ShipmentAction) -> Dict[str, Any]:
    """Run one webhook through the shared pipeline and return the API Gateway response."""
    if event.get('httpMethod') != 'POST':
        return create_api_response(status_code=405, body={'error': 'Method not allowed'})

    try:
        webhook = parse_webhook_event(event)
        logger.info('Received webhook', extra={'event_type': webhook.type, 'action': action.value})
        metrics.add_metric(name='WebhookReceived', unit=MetricUnit.Count, value=1)

        if not webhook.is_shipment_sent:
            return create_api_response(status_code=200, body={'message': 'Event type not handled'})

        shipment = webhook.shipment()
        if not shipment.customer_email:
            logger.error('No customer email found in webhook')
            raise ValidationError(message='No customer email in payload')

        tracer.put_annotation('order_number', shipment.order_number or 'unknown')
        service = build_service(get_webhook_env_vars())
        with service.sender:
            result = service.handle(shipment, action)
        return create_api_response(status_code=200, body=result.dump())

    except (ValidationError, ConfigurationError) as e:
        return error_response(e)

    except Exception as e:
        logger.exception('Error processing webhook', extra={'error': str(e)})
        metrics.add_metric(name='ErrorCount', unit=MetricUnit.Count, value=1)
        return create_api_response(
            status_code=500,
            body={'error': 'Failed to process webhook', 'message': str(e)},
        )


def _webhook_handler(action: ShipmentAction) -> Callable[[Dict[str, Any], LambdaContext], Dict[str, Any]]:
    @metrics.log_metrics
    @tracer.capture_lambda_handler
    @logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
    def handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
        return process_webhook(event, action)

    return handler


# Sends the shipment email directly
email_webhook_handler = _webhook_handler(ShipmentAction.EMAIL)

# Adds the customer to the automation group
group_webhook_handler = _webhook_handler(ShipmentAction.GROUP)

# Removes then re-adds the customer so the automation fires on repeat orders
regroup_webhook_handler = _webhook_handler(ShipmentAction.REGROUP)

lambda_handler = regroup_webhook_handler

__all__ = [
    'email_webhook_handler',
    'group_webhook_handler',
    'regroup_webhook_handler',
    'lambda_handler',
    'process_webhook',
]
