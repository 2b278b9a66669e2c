"""
Sender.net v2 API client: transactional email, subscribers and groups.
"""

from typing import Any, Dict
from urllib.parse import quote

import httpx

from fulfillment_relay.clients.base import BaseApiClient
from fulfillment_relay.handlers.utils.observability import logger, tracer
from fulfillment_relay.models.marketing import EmailMessage, SendResult, Subscriber


class SenderClient(BaseApiClient):
    """Client for the Sender.net marketing API."""

    service_name = 'sender'

    @staticmethod
    def _subscriber_path(email: str) -> str:
        return f"/subscribers/{quote(email, safe='')}"

    @tracer.capture_method
    def send_email(self, message: EmailMessage) -> SendResult:
        """Send a transactional email. Never raises; failures come back in the result."""
        try:
            response = self.http.post('/email/send', json=message.to_payload())
        except httpx.HTTPError as e:
            return SendResult(success=False, error=str(e))

        try:
            result = response.json()
        except ValueError:
            result = {}

        if response.is_success:
            return SendResult(success=True, data=result)

        error = result.get('message') if isinstance(result, dict) else None
        return SendResult(success=False, error=error or 'Failed to send email')

    @tracer.capture_method
    def upsert_subscriber(self, subscriber: Subscriber) -> httpx.Response:
        """Create or update a subscriber. The raw response is returned; 409 means it already exists."""
        response = self.http.post('/subscribers', json=subscriber.model_dump())
        logger.debug('Subscriber upsert answered', extra={'status_code': response.status_code})
        return response

    @tracer.capture_method
    def add_to_group(self, email: str, group_id: str) -> Dict[str, Any]:
        """
        Add a subscriber to a group, triggering any automation bound to it.

        Raises:
            ExternalServiceError: If Sender answers with a non-2xx status
        """
        response = self.http.post(f'{self._subscriber_path(email)}/groups', json={'groups': [group_id]})
        self._raise_for_status(response, 'Add subscriber to group')
        try:
            return response.json()
        except ValueError:
            return {}

    @tracer.capture_method
    def remove_from_group(self, email: str, group_id: str) -> httpx.Response:
        """Remove a subscriber from a group. The caller decides whether a failure matters."""
        return self.http.delete(f'{self._subscriber_path(email)}/groups/{group_id}')
