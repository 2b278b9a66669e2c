"""
Pydantic models for Printful payloads, Sender.net requests and handler responses.
"""

from fulfillment_relay.models.fulfillment import PrintfulOrder, ShipmentInfo, WebhookEvent, WebhookShipment
from fulfillment_relay.models.marketing import EmailMessage, SendResult, Subscriber
from fulfillment_relay.models.output import PollSummary, WebhookResult

__all__ = [
    "PrintfulOrder",
    "ShipmentInfo",
    "WebhookEvent",
    "WebhookShipment",
    "EmailMessage",
    "SendResult",
    "Subscriber",
    "PollSummary",
    "WebhookResult",
]
