"""
Business logic for the shipment polling job.

Each run lists fulfilled Printful orders, keeps those shipped inside the
polling window, and emails every customer who has not been emailed yet.
Orders are processed one after another; a failure on one order is counted
and the run moves on to the next.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Union

import httpx
from aws_lambda_powertools.metrics import MetricUnit

from fulfillment_relay.clients.printful_client import PrintfulClient
from fulfillment_relay.clients.sender_client import SenderClient
from fulfillment_relay.dal import SentFlagStore
from fulfillment_relay.handlers.utils.errors import ExternalServiceError
from fulfillment_relay.handlers.utils.observability import logger, metrics, tracer
from fulfillment_relay.logic.shipment_email import build_shipment_email
from fulfillment_relay.models.fulfillment import PrintfulOrder, ShipmentInfo
from fulfillment_relay.models.marketing import SendResult
from fulfillment_relay.models.output import PollSummary


def filter_recently_shipped(
    orders: List[PrintfulOrder],
    window: timedelta,
    now: Optional[datetime] = None,
) -> List[PrintfulOrder]:
    """Keep orders whose first shipment left strictly after ``now - window``."""
    cutoff = (now or datetime.now(timezone.utc)) - window
    recent = []
    for order in orders:
        shipped_at = order.shipped_at()
        if shipped_at is not None and shipped_at > cutoff:
            recent.append(order)
    return recent


class ShipmentNotifier:
    """Finds newly shipped orders and sends one email per order."""

    def __init__(
        self,
        printful: PrintfulClient,
        sender: SenderClient,
        sent_flags: SentFlagStore,
        from_email: str,
        from_name: str,
        window_hours: int = 24,
        order_limit: int = 100,
    ):
        self.printful = printful
        self.sender = sender
        self.sent_flags = sent_flags
        self.from_email = from_email
        self.from_name = from_name
        self.window = timedelta(hours=window_hours)
        self.order_limit = order_limit

    @tracer.capture_method
    def fetch_recent_shipped_orders(self, now: Optional[datetime] = None) -> List[PrintfulOrder]:
        """Fulfilled orders shipped inside the window. Printful failures yield an empty list."""
        try:
            orders = self.printful.list_orders(status='fulfilled', limit=self.order_limit)
        except (ExternalServiceError, httpx.HTTPError, ValueError) as e:
            logger.error('Error fetching Printful orders', extra={'error': str(e)})
            return []

        return filter_recently_shipped(orders, self.window, now=now)

    @tracer.capture_method
    def get_shipment_info(self, order_id: Union[int, str]) -> Optional[ShipmentInfo]:
        """Detailed shipment info for one order, or None when it cannot be obtained."""
        try:
            order = self.printful.get_order(order_id)
        except (ExternalServiceError, httpx.HTTPError, ValueError) as e:
            logger.error('Error getting shipment info', extra={'order_id': order_id, 'error': str(e)})
            return None

        return ShipmentInfo.from_order(order)

    @tracer.capture_method
    def send_shipment_email(self, info: ShipmentInfo) -> SendResult:
        message = build_shipment_email(info, from_email=self.from_email, from_name=self.from_name)
        return self.sender.send_email(message)

    def process_order(self, order: PrintfulOrder, summary: PollSummary) -> None:
        order_id = str(order.id)

        if self.sent_flags.is_sent(order_id):
            logger.info('Skipping order, email already sent', extra={'order_id': order_id})
            return

        info = self.get_shipment_info(order.id)
        if info is None:
            logger.warning('No shipment info for order', extra={'order_id': order_id})
            return

        result = self.send_shipment_email(info)
        if result.success:
            logger.info('Shipment email sent', extra={'order_id': order_id})
            self.sent_flags.mark_sent(order_id)
            metrics.add_metric(name='ShipmentEmailSent', unit=MetricUnit.Count, value=1)
            summary.emails_sent += 1
        else:
            logger.error('Failed to send shipment email', extra={'order_id': order_id, 'error': result.error})
            metrics.add_metric(name='ShipmentEmailFailed', unit=MetricUnit.Count, value=1)
            summary.errors += 1

    @tracer.capture_method
    def run(self, now: Optional[datetime] = None) -> PollSummary:
        """Process every recently shipped order and summarize the outcome."""
        orders = self.fetch_recent_shipped_orders(now=now)
        logger.info('Found shipped orders', extra={'order_count': len(orders)})
        metrics.add_metric(name='OrdersFound', unit=MetricUnit.Count, value=len(orders))

        summary = PollSummary(orders_found=len(orders))
        for order in orders:
            try:
                self.process_order(order, summary)
            except Exception as e:
                logger.exception('Error processing order', extra={'order_id': order.id, 'error': str(e)})
                summary.errors += 1

        return summary
