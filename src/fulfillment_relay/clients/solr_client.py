"""
Solr update client.
"""

from typing import Any, Optional

import httpx

from fulfillment_relay.clients.base import BaseApiClient
from fulfillment_relay.handlers.utils.observability import logger, tracer


class SolrClient(BaseApiClient):
    """Posts documents to a Solr core's JSON update handler."""

    service_name = 'solr'

    def __init__(
        self,
        host: str,
        core: str,
        port: int = 8983,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        super().__init__(base_url=f'http://{host}:{port}/solr/{core}', transport=transport)
        self.core = core

    @tracer.capture_method
    def update(self, documents: Any, commit: bool = True) -> None:
        """
        Send documents verbatim to ``/update``.

        Raises:
            ExternalServiceError: If Solr answers with a non-2xx status
            httpx.HTTPError: If the request cannot be sent
        """
        response = self.http.post('/update', params={'commit': str(commit).lower()}, json=documents)
        self._raise_for_status(response, f'Solr update on core {self.core}')
        logger.info('Documents sent to Solr', extra={
            'core': self.core,
            'document_count': len(documents) if isinstance(documents, list) else 1,
        })
