"""
Fulfillment Relay Service Module.

Serverless functions relaying Printful fulfillment events to Sender.net and
a small REST facade over the posts table and its Solr index:

- handlers: Lambda entry points and request/response mapping
- logic: shipment email, polling and webhook business steps
- clients: outbound HTTP to Printful, Sender.net and Solr
- dal: posts table and sent-flag store access
- models: Pydantic models for payloads and responses
"""

__version__ = "1.0.0"
__description__ = "Printful to Sender.net fulfillment relay functions"
