"""
Shared httpx plumbing for the outbound API clients.
"""

from typing import Dict, Optional

import httpx

from fulfillment_relay.handlers.utils.errors import ExternalServiceError


class BaseApiClient:
    """Bearer-token JSON API client. Pass ``transport`` to route requests off the network."""

    service_name = 'api'

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = 30.0,
    ) -> None:
        headers: Dict[str, str] = {
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        }
        if api_key:
            headers['Authorization'] = f'Bearer {api_key}'

        self.base_url = base_url.rstrip('/')
        self.http = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            transport=transport,
            timeout=timeout,
        )

    def _raise_for_status(self, response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        raise ExternalServiceError(
            message=f'{action} failed: {response.status_code} - {response.text}',
            service_name=self.service_name,
            status_code=response.status_code,
        )

    def close(self) -> None:
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
