"""
Printful REST API client.
"""

from typing import Any, List, Union

from pydantic import ValidationError as PydanticValidationError

from fulfillment_relay.clients.base import BaseApiClient
from fulfillment_relay.handlers.utils.observability import logger, tracer
from fulfillment_relay.models.fulfillment import PrintfulOrder


def _result(body: Any) -> Any:
    return body.get('result') if isinstance(body, dict) else None


class PrintfulClient(BaseApiClient):
    """Read-only access to Printful orders."""

    service_name = 'printful'

    @tracer.capture_method
    def list_orders(self, status: str = 'fulfilled', limit: int = 100) -> List[PrintfulOrder]:
        """
        List orders in the given status. Records that do not parse are logged and skipped.

        Raises:
            ExternalServiceError: If Printful answers with a non-2xx status
            httpx.HTTPError: If the request cannot be sent
        """
        response = self.http.get('/orders', params={'status': status, 'limit': limit})
        self._raise_for_status(response, 'List Printful orders')

        records = _result(response.json())
        if not isinstance(records, list):
            records = []

        orders = []
        for record in records:
            try:
                orders.append(PrintfulOrder.model_validate(record))
            except PydanticValidationError as e:
                order_id = record.get('id') if isinstance(record, dict) else None
                logger.warning('Skipping unparseable Printful order', extra={'order_id': order_id, 'error': str(e)})

        logger.debug('Printful orders listed', extra={'status': status, 'order_count': len(orders)})
        return orders

    @tracer.capture_method
    def get_order(self, order_id: Union[int, str]) -> PrintfulOrder:
        """
        Fetch one order with its shipments and items.

        Raises:
            ExternalServiceError: If Printful answers with a non-2xx status
            httpx.HTTPError: If the request cannot be sent
            ValueError: If the body is not JSON or the order does not parse
        """
        response = self.http.get(f'/orders/{order_id}')
        self._raise_for_status(response, f'Get Printful order {order_id}')
        return PrintfulOrder.model_validate(_result(response.json()) or {})
