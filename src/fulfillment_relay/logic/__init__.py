"""
Business logic for the relay functions.
"""

from fulfillment_relay.logic.shipment_email import build_shipment_email, render_shipment_html
from fulfillment_relay.logic.shipment_notifier import ShipmentNotifier, filter_recently_shipped
from fulfillment_relay.logic.shipment_webhook_service import ShipmentAction, ShipmentWebhookService

__all__ = [
    "build_shipment_email",
    "render_shipment_html",
    "ShipmentNotifier",
    "filter_recently_shipped",
    "ShipmentAction",
    "ShipmentWebhookService",
]
