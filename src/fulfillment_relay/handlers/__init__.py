"""
Lambda handlers for the fulfillment relay.

Each handler is an entry point for one function and owns the
request/response mapping; business steps live in ``fulfillment_relay.logic``
and outbound calls in ``fulfillment_relay.clients`` and ``fulfillment_relay.dal``.

Handler Types:
- REST API handlers: the posts facade behind API Gateway
- Webhook handlers: Printful ``shipment_sent`` receivers
- Scheduled handlers: the hourly shipment poller
"""

from fulfillment_relay.handlers.utils.observability import logger, tracer, metrics

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
