"""
Data Access Layer (DAL) for the relay functions.

Two stores are touched: the relational ``posts`` table behind the REST
facade, and the key-value table that remembers which orders already got a
shipment email.
"""

from typing import Any, Dict, List, Protocol, runtime_checkable


@runtime_checkable
class PostsRepository(Protocol):
    """Read access to the posts table."""

    def list_posts(self) -> List[Dict[str, Any]]:
        """Return every row of the posts table."""
        ...


@runtime_checkable
class SentFlagStore(Protocol):
    """Per-order "email sent" flags."""

    def is_sent(self, order_id: str) -> bool:
        """Whether the shipment email for this order was already sent."""
        ...

    def mark_sent(self, order_id: str) -> None:
        """Remember that the shipment email for this order was sent."""
        ...


def get_sent_flag_store(table_name: str) -> SentFlagStore:
    """
    Factory function to get the sent-flag store.

    Args:
        table_name: Name of the DynamoDB table

    Returns:
        Sent-flag store instance
    """
    # Import here to avoid circular imports
    from fulfillment_relay.dal.sent_flag_store import DynamoDbSentFlagStore

    return DynamoDbSentFlagStore(table_name)


__all__ = [
    'PostsRepository',
    'SentFlagStore',
    'get_sent_flag_store',
]
