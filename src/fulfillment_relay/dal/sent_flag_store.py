"""
DynamoDB implementation of the shipment-email sent flags.

One item per Printful order id, ``{"order_id": ..., "status": "sent"}``.
Lookups are best-effort: when the table cannot be read the order is treated
as not yet emailed, which may cause a duplicate email but never a missed one.
"""

from datetime import datetime, timezone
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from fulfillment_relay.handlers.utils.observability import logger, tracer

SENT = 'sent'


class DynamoDbSentFlagStore:
    """DynamoDB-backed sent-flag store."""

    def __init__(self, table_name: str, dynamodb_resource: Optional[Any] = None) -> None:
        """
        Initialize the store.

        Args:
            table_name: Name of the DynamoDB table, keyed by ``order_id``
            dynamodb_resource: Optional boto3 DynamoDB resource to use
        """
        self.table_name = table_name
        self.dynamodb = dynamodb_resource or boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)
        logger.debug(f'Sent-flag store initialized for table: {table_name}')

    @tracer.capture_method
    def is_sent(self, order_id: str) -> bool:
        try:
            response = self.table.get_item(Key={'order_id': str(order_id)})
        except (ClientError, BotoCoreError) as e:
            logger.warning('Sent-flag lookup failed, assuming not sent', extra={
                'order_id': order_id,
                'error': str(e),
            })
            return False

        item = response.get('Item') or {}
        return item.get('status') == SENT

    @tracer.capture_method
    def mark_sent(self, order_id: str) -> None:
        try:
            self.table.put_item(Item={
                'order_id': str(order_id),
                'status': SENT,
                'sent_at': datetime.now(timezone.utc).isoformat(),
            })
        except (ClientError, BotoCoreError) as e:
            logger.error('Failed to mark email as sent', extra={
                'order_id': order_id,
                'error': str(e),
            })
            return

        tracer.put_annotation('order_marked_sent', str(order_id))
