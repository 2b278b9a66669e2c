"""
Sender.net request and result models.

These mirror the JSON bodies the Sender.net v2 API accepts for transactional
email, subscriber upserts and group membership changes.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EmailAddress(BaseModel):
    """Address with display name."""

    email: str
    name: Optional[str] = None


class EmailMessage(BaseModel):
    """Transactional email payload for ``POST /email/send``."""

    model_config = ConfigDict(populate_by_name=True)

    to: List[EmailAddress]
    sender: Annotated[EmailAddress, Field(alias='from')]
    subject: str
    html: str

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class SubscriberFields(BaseModel):
    """Custom fields stored on the subscriber and used by the automation template."""

    order_number: Optional[str] = None
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None
    carrier: Optional[str] = None
    items_shipped: str = ''
    items_count: str = '0'
    last_shipment_date: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
    )


class Subscriber(BaseModel):
    """Subscriber create-or-update body for ``POST /subscribers``."""

    email: str
    firstname: str = ''
    lastname: str = ''
    fields: SubscriberFields = Field(default_factory=SubscriberFields)

    @staticmethod
    def split_name(full_name: Optional[str]) -> tuple[str, str]:
        """Split ``"Ada Lovelace King"`` into ``("Ada", "Lovelace King")``."""
        parts = (full_name or '').split(' ')
        return parts[0], ' '.join(parts[1:])


class SendResult(BaseModel):
    """Outcome of a transactional email send. Failures are values, not exceptions."""

    success: bool
    data: Any = None
    error: Optional[str] = None
