"""
Output models for handler responses using Pydantic.

Response bodies use camelCase keys; ``dump`` serializes with the aliases.
"""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field


class OutputModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def dump(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class PollSummary(OutputModel):
    """Result of one shipment polling run."""

    message: str = 'Check completed'

    orders_found: Annotated[int, Field(
        alias='ordersFound',
        ge=0,
        description='Orders shipped inside the polling window'
    )] = 0

    emails_sent: Annotated[int, Field(
        alias='emailsSent',
        ge=0,
        description='Shipment emails delivered to Sender during this run'
    )] = 0

    errors: Annotated[int, Field(
        ge=0,
        description='Orders whose processing failed'
    )] = 0


class WebhookResult(OutputModel):
    """Successful webhook outcome."""

    success: bool = True
    message: str
    order_id: Annotated[Optional[str], Field(alias='orderId')] = None
    email: Optional[str] = None
    items_count: Annotated[Optional[int], Field(alias='itemsCount')] = None
