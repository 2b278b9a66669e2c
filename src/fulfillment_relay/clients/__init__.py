"""
Outbound HTTP clients for Printful, Sender.net and Solr.
"""

from fulfillment_relay.clients.base import BaseApiClient
from fulfillment_relay.clients.printful_client import PrintfulClient
from fulfillment_relay.clients.sender_client import SenderClient
from fulfillment_relay.clients.solr_client import SolrClient

__all__ = [
    'BaseApiClient',
    'PrintfulClient',
    'SenderClient',
    'SolrClient',
]
