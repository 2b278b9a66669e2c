"""
Business logic for the Printful ``shipment_sent`` webhook receivers.

A shipment either produces one transactional email, or is pushed to
Sender.net as subscriber data followed by a group membership change that
starts the pre-built "order shipped" automation.
"""

from enum import Enum
from typing import Optional

import httpx
from aws_lambda_powertools.metrics import MetricUnit

from fulfillment_relay.clients.sender_client import SenderClient
from fulfillment_relay.handlers.utils.errors import ConfigurationError, ExternalServiceError
from fulfillment_relay.handlers.utils.observability import logger, metrics, tracer
from fulfillment_relay.logic.shipment_email import build_shipment_email
from fulfillment_relay.models.fulfillment import WebhookShipment
from fulfillment_relay.models.marketing import Subscriber, SubscriberFields
from fulfillment_relay.models.output import WebhookResult

MISSING_GROUP_NOTE = 'Please add your Sender group ID to environment variables'


class ShipmentAction(str, Enum):
    """What a webhook receiver does with a shipment."""

    EMAIL = 'email'
    GROUP = 'group'
    REGROUP = 'regroup'


def build_subscriber(shipment: WebhookShipment) -> Subscriber:
    """Subscriber upsert body carrying the shipment as custom fields."""
    firstname, lastname = Subscriber.split_name(shipment.customer_name)
    return Subscriber(
        email=shipment.customer_email,
        firstname=firstname,
        lastname=lastname,
        fields=SubscriberFields(
            order_number=shipment.order_number,
            tracking_number=shipment.tracking_number,
            tracking_url=shipment.tracking_url,
            carrier=shipment.carrier,
            items_shipped=shipment.items_text,
            items_count=str(shipment.items_count),
        ),
    )


class ShipmentWebhookService:
    """Turns a parsed shipment into Sender.net calls."""

    def __init__(
        self,
        sender: SenderClient,
        from_email: str,
        from_name: str,
        group_id: Optional[str] = None,
    ):
        self.sender = sender
        self.from_email = from_email
        self.from_name = from_name
        self.group_id = group_id

    def handle(self, shipment: WebhookShipment, action: ShipmentAction) -> WebhookResult:
        if action is ShipmentAction.EMAIL:
            return self.send_email(shipment)
        return self.trigger_automation(shipment, retrigger=action is ShipmentAction.REGROUP)

    @tracer.capture_method
    def send_email(self, shipment: WebhookShipment) -> WebhookResult:
        """
        Send the shipment email straight to the customer.

        Raises:
            ExternalServiceError: If Sender.net does not accept the email
        """
        message = build_shipment_email(
            shipment.to_shipment_info(),
            from_email=self.from_email,
            from_name=self.from_name,
        )
        result = self.sender.send_email(message)
        if not result.success:
            metrics.add_metric(name='ShipmentEmailFailed', unit=MetricUnit.Count, value=1)
            raise ExternalServiceError(message=result.error or 'Failed to send email', service_name='sender')

        metrics.add_metric(name='ShipmentEmailSent', unit=MetricUnit.Count, value=1)
        logger.info('Shipment email sent', extra={'order_number': shipment.order_number})
        return WebhookResult(
            message='Shipment email sent',
            order_id=shipment.order_number,
            email=shipment.customer_email,
        )

    @tracer.capture_method
    def trigger_automation(self, shipment: WebhookShipment, retrigger: bool = False) -> WebhookResult:
        """
        Store the shipment on the subscriber and add them to the automation group.

        With ``retrigger`` the subscriber is first removed from the group so
        that repeat customers enter the automation again.

        Raises:
            ConfigurationError: If no group id is configured
            ExternalServiceError: If the subscriber cannot be added to the group
        """
        if not self.group_id:
            logger.error('SENDER_GROUP_ID not configured')
            raise ConfigurationError(
                message='SENDER_GROUP_ID environment variable not set',
                body={
                    'error': 'SENDER_GROUP_ID environment variable not set',
                    'note': MISSING_GROUP_NOTE,
                },
            )

        email = shipment.customer_email

        if retrigger:
            self._remove_from_group(email)

        response = self.sender.upsert_subscriber(build_subscriber(shipment))
        if not response.is_success and response.status_code != 409:
            logger.error('Failed to create/update subscriber', extra={
                'status_code': response.status_code,
                'response': response.text,
            })

        result = self.sender.add_to_group(email, self.group_id)
        logger.info('Subscriber added to order-shipped group', extra={'group_id': self.group_id, 'response': result})
        metrics.add_metric(name='AutomationTriggered', unit=MetricUnit.Count, value=1)

        return WebhookResult(
            message='Customer added to order-shipped group, automation will trigger',
            order_id=shipment.order_number,
            email=email,
            items_count=shipment.items_count,
        )

    def _remove_from_group(self, email: str) -> None:
        try:
            response = self.sender.remove_from_group(email, self.group_id)
        except httpx.HTTPError as e:
            logger.info('Remove from group failed, continuing', extra={'error': str(e)})
            return
        logger.info('User removed from group (if they were in it)', extra={'status_code': response.status_code})
