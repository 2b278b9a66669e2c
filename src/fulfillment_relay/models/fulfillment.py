"""
Printful order and shipment models.

Two payload shapes arrive from Printful: order records returned by the
``/orders`` REST endpoints, and ``shipment_sent`` webhook events. Both are
parsed leniently; unknown fields are ignored and most fields are optional
because the provider omits them freely.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

SHIPMENT_SENT_EVENT = 'shipment_sent'


def _from_unix_seconds(seconds: float) -> Optional[datetime]:
    # Out-of-range values such as NaN, infinity or millisecond timestamps read as unknown
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a Printful timestamp (Unix seconds or ISO-8601) into an aware UTC datetime."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _from_unix_seconds(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            seconds = float(text)
        except ValueError:
            seconds = None
        if seconds is not None:
            return _from_unix_seconds(seconds)
        try:
            parsed = datetime.fromisoformat(text.replace('Z', '+00:00'))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return None


class PrintfulModel(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    @field_validator("*", mode="before")
    @classmethod
    def drop_nulls(cls, value: Any, info) -> Any:
        """Treat explicit nulls as absent fields."""
        if value is None:
            field = cls.model_fields[info.field_name]
            if not field.is_required():
                return field.get_default(call_default_factory=True)
        return value


class Recipient(PrintfulModel):
    """Order recipient as reported by Printful."""

    email: Optional[str] = None
    name: Optional[str] = None


class OrderItem(PrintfulModel):
    """Line item of a Printful order."""

    name: str = ''
    quantity: int = 1
    variant_name: Optional[str] = None


class Shipment(PrintfulModel):
    """Shipment attached to a Printful order."""

    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None
    carrier: Optional[str] = None
    service: Optional[str] = None
    shipped_at: Optional[Union[int, float, str]] = None


class PrintfulOrder(PrintfulModel):
    """Order record from the Printful ``/orders`` API."""

    id: Union[int, str]
    external_id: Optional[str] = None
    status: Optional[str] = None
    recipient: Recipient = Field(default_factory=Recipient)
    items: List[OrderItem] = Field(default_factory=list)
    shipments: List[Shipment] = Field(default_factory=list)
    updated: Optional[Union[int, float, str]] = None

    @property
    def first_shipment(self) -> Optional[Shipment]:
        return self.shipments[0] if self.shipments else None

    def shipped_at(self) -> Optional[datetime]:
        """When the first shipment left, falling back to the order's last update."""
        shipment = self.first_shipment
        if shipment is None:
            return None
        return parse_timestamp(shipment.shipped_at) or parse_timestamp(self.updated)


class ShippedItem(BaseModel):
    """Item line rendered in the shipment email."""

    name: str
    quantity: int
    variant: Optional[str] = None


class ShipmentInfo(BaseModel):
    """Everything needed to tell a customer their order has shipped."""

    order_id: Annotated[str, Field(
        description='Printful order id',
        examples=['12345678']
    )]

    external_id: Annotated[Optional[str], Field(
        default=None,
        description='Store-side order number',
        examples=['1042']
    )] = None

    customer_email: Optional[str] = None
    customer_name: Optional[str] = None
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None
    carrier: Optional[str] = None
    service: Optional[str] = None
    items: List[ShippedItem] = Field(default_factory=list)

    @property
    def order_number(self) -> str:
        """Number shown to the customer: the store's id when known."""
        return self.external_id or self.order_id

    @classmethod
    def from_order(cls, order: PrintfulOrder) -> Optional['ShipmentInfo']:
        """Build shipment info from a detailed order, or None when nothing shipped yet."""
        shipment = order.first_shipment
        if shipment is None:
            return None

        return cls(
            order_id=str(order.id),
            external_id=order.external_id,
            customer_email=order.recipient.email,
            customer_name=order.recipient.name,
            tracking_number=shipment.tracking_number,
            tracking_url=shipment.tracking_url,
            carrier=shipment.carrier,
            service=shipment.service,
            items=[
                ShippedItem(name=item.name, quantity=item.quantity, variant=item.variant_name)
                for item in order.items
            ],
        )


class WebhookOrder(PrintfulModel):
    """Order summary embedded in a v2 webhook shipment."""

    id: Optional[Union[int, str]] = None
    external_id: Optional[str] = None
    recipient: Recipient = Field(default_factory=Recipient)


class WebhookShipmentItem(PrintfulModel):
    """Item line of a v2 webhook shipment."""

    order_item_name: Optional[str] = None
    quantity: Optional[int] = None


class WebhookShipment(PrintfulModel):
    """The ``data`` object of a ``shipment_sent`` webhook."""

    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None
    carrier: Optional[str] = None
    service: Optional[str] = None
    order: WebhookOrder = Field(default_factory=WebhookOrder)
    shipment_items: List[WebhookShipmentItem] = Field(default_factory=list)

    @property
    def customer_email(self) -> Optional[str]:
        return self.order.recipient.email

    @property
    def customer_name(self) -> Optional[str]:
        return self.order.recipient.name

    @property
    def order_number(self) -> Optional[str]:
        number = self.order.external_id or self.order.id
        return str(number) if number is not None else None

    @property
    def items_text(self) -> str:
        """Human-readable list such as ``2x Poster, 1x Mug``."""
        return ', '.join(
            f"{item.quantity or 1}x {item.order_item_name or 'Item'}"
            for item in self.shipment_items
        )

    @property
    def items_count(self) -> int:
        return sum(item.quantity or 0 for item in self.shipment_items)

    def to_shipment_info(self) -> ShipmentInfo:
        return ShipmentInfo(
            order_id=str(self.order.id) if self.order.id is not None else '',
            external_id=self.order.external_id,
            customer_email=self.customer_email,
            customer_name=self.customer_name,
            tracking_number=self.tracking_number,
            tracking_url=self.tracking_url,
            carrier=self.carrier,
            service=self.service,
            items=[
                ShippedItem(name=item.order_item_name or 'Item', quantity=item.quantity or 1)
                for item in self.shipment_items
            ],
        )


class WebhookEvent(BaseModel):
    """Envelope of a Printful v2 webhook."""

    type: Optional[str] = None
    data: Any = None

    @property
    def is_shipment_sent(self) -> bool:
        return self.type == SHIPMENT_SENT_EVENT

    def shipment(self) -> WebhookShipment:
        """Shipment data of a ``shipment_sent`` event; a non-object ``data`` reads as empty."""
        return WebhookShipment.model_validate(self.data if isinstance(self.data, dict) else {})
