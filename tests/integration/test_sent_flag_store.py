"""
Integration tests for the DynamoDB sent-flag store.

These tests run against a moto-mocked DynamoDB table.
"""

import boto3
from moto import mock_aws

from fulfillment_relay.dal import SentFlagStore, get_sent_flag_store
from fulfillment_relay.dal.sent_flag_store import DynamoDbSentFlagStore


class TestDynamoDbSentFlagStore:
    """Integration tests for sent flags in DynamoDB."""

    def test_factory_returns_store(self, sent_flags_table):
        store = get_sent_flag_store(sent_flags_table.name)

        assert isinstance(store, DynamoDbSentFlagStore)
        assert isinstance(store, SentFlagStore)

    def test_unknown_order_is_not_sent(self, sent_flags_table):
        store = get_sent_flag_store(sent_flags_table.name)

        assert store.is_sent("55501") is False

    def test_mark_then_check(self, sent_flags_table):
        store = get_sent_flag_store(sent_flags_table.name)

        store.mark_sent("55501")

        assert store.is_sent("55501") is True
        assert store.is_sent("55502") is False
        item = sent_flags_table.get_item(Key={"order_id": "55501"})["Item"]
        assert item["status"] == "sent"
        assert item["sent_at"].startswith("20")

    def test_numeric_ids_share_the_string_key(self, sent_flags_table):
        store = get_sent_flag_store(sent_flags_table.name)

        store.mark_sent(55501)

        assert store.is_sent("55501") is True

    def test_other_status_values_are_not_sent(self, sent_flags_table):
        sent_flags_table.put_item(Item={"order_id": "55501", "status": "pending"})
        store = get_sent_flag_store(sent_flags_table.name)

        assert store.is_sent("55501") is False

    def test_missing_table_reads_as_not_sent(self):
        with mock_aws():
            store = DynamoDbSentFlagStore("no-such-table", boto3.resource("dynamodb", region_name="us-east-1"))

            assert store.is_sent("55501") is False

    def test_mark_sent_swallows_write_failures(self):
        with mock_aws():
            store = DynamoDbSentFlagStore("no-such-table", boto3.resource("dynamodb", region_name="us-east-1"))

            assert store.mark_sent("55501") is None
