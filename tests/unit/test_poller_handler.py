"""
Unit tests for the shipment poller Lambda handler.

Printful and Sender.net are served by recording transports and the sent
flags live in a moto-backed DynamoDB table.
"""

import json
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from fulfillment_relay.clients.printful_client import PrintfulClient
from fulfillment_relay.clients.sender_client import SenderClient
from fulfillment_relay.handlers.poller_handler import lambda_handler

SCHEDULED_EVENT = {
    "version": "0",
    "detail-type": "Scheduled Event",
    "source": "aws.events",
    "detail": {},
}


def hours_ago(hours: int) -> int:
    return int((datetime.now(timezone.utc) - timedelta(hours=hours)).timestamp())


@pytest.fixture
def printful_orders(printful_order):
    return {
        55501: printful_order(order_id=55501, shipped_at=hours_ago(1)),
        55502: printful_order(order_id=55502, shipped_at=hours_ago(3), external_id="1043"),
        55503: printful_order(order_id=55503, shipped_at=hours_ago(72), external_id="1044"),
    }


@pytest.fixture
def poller_clients(recording_transport, printful_orders):
    printful = recording_transport({
        ("GET", "/orders"): (200, {"code": 200, "result": list(printful_orders.values())}),
    })
    for order_id, order in printful_orders.items():
        printful.routes[("GET", f"/orders/{order_id}")] = (200, {"code": 200, "result": order})

    sender = recording_transport({("POST", "/v2/email/send"): (200, {"success": True})})

    printful.clients = []
    sender.clients = []

    def build_printful(base_url, api_key):
        client = PrintfulClient(base_url=base_url, api_key=api_key, transport=printful)
        printful.clients.append(client)
        return client

    def build_sender(base_url, api_key):
        client = SenderClient(base_url=base_url, api_key=api_key, transport=sender)
        sender.clients.append(client)
        return client

    with patch("fulfillment_relay.handlers.poller_handler.PrintfulClient", side_effect=build_printful), \
            patch("fulfillment_relay.handlers.poller_handler.SenderClient", side_effect=build_sender):
        yield printful, sender


class TestPollerHandler:

    @pytest.mark.parametrize("missing", ["PRINTFUL_API_KEY", "SENDER_API_KEY"])
    def test_missing_api_keys(self, missing, relay_env, monkeypatch, lambda_context):
        monkeypatch.delenv(missing)

        response = lambda_handler(SCHEDULED_EVENT, lambda_context)

        assert response["statusCode"] == 500
        assert json.loads(response["body"]) == {
            "error": "Missing API keys",
            "details": "Set PRINTFUL_API_KEY and SENDER_API_KEY in environment variables",
        }

    def test_emails_recently_shipped_orders(self, relay_env, sent_flags_table, poller_clients, lambda_context):
        printful, sender = poller_clients

        response = lambda_handler(SCHEDULED_EVENT, lambda_context)

        assert response["statusCode"] == 200
        assert json.loads(response["body"]) == {
            "message": "Check completed",
            "ordersFound": 2,
            "emailsSent": 2,
            "errors": 0,
        }

        subjects = [json.loads(r.content)["subject"] for r in sender.requests]
        assert subjects == [
            "Your order #1042 has shipped! \U0001F4E6",
            "Your order #1043 has shipped! \U0001F4E6",
        ]
        assert printful.requests[0].headers["Authorization"] == "Bearer printful-test-key"
        assert printful.calls("GET", "/orders/55503") == []

        item = sent_flags_table.get_item(Key={"order_id": "55501"})["Item"]
        assert item["status"] == "sent"
        assert "sent_at" in item

    def test_second_run_skips_sent_orders(self, relay_env, sent_flags_table, poller_clients, lambda_context):
        _, sender = poller_clients

        lambda_handler(SCHEDULED_EVENT, lambda_context)
        response = lambda_handler(SCHEDULED_EVENT, lambda_context)

        assert json.loads(response["body"])["emailsSent"] == 0
        assert json.loads(response["body"])["ordersFound"] == 2
        assert len(sender.requests) == 2

    def test_rejected_email_is_retried_next_run(self, relay_env, sent_flags_table, poller_clients, lambda_context):
        _, sender = poller_clients
        sender.routes[("POST", "/v2/email/send")] = (422, {"message": "Invalid sender"})

        response = lambda_handler(SCHEDULED_EVENT, lambda_context)

        assert json.loads(response["body"])["errors"] == 2
        assert "Item" not in sent_flags_table.get_item(Key={"order_id": "55501"})

    def test_malformed_orders_do_not_block_the_run(
        self, relay_env, sent_flags_table, poller_clients, printful_order, printful_orders, lambda_context
    ):
        printful, sender = poller_clients
        bad_quantity = printful_order(order_id=60001, shipped_at=hours_ago(1))
        bad_quantity["items"][0]["quantity"] = "lots"
        listing = [
            printful_order(order_id=60002, shipped_at="inf"),
            printful_order(order_id=60003, shipped_at=hours_ago(1) * 1000),
            bad_quantity,
            printful_orders[55501],
        ]
        printful.routes[("GET", "/orders")] = (200, {"code": 200, "result": listing})

        response = lambda_handler(SCHEDULED_EVENT, lambda_context)

        assert response["statusCode"] == 200
        assert json.loads(response["body"]) == {
            "message": "Check completed",
            "ordersFound": 1,
            "emailsSent": 1,
            "errors": 0,
        }
        [email] = sender.requests
        assert json.loads(email.content)["subject"] == "Your order #1042 has shipped! \U0001F4E6"

    def test_clients_are_closed_after_the_run(self, relay_env, sent_flags_table, poller_clients, lambda_context):
        printful, sender = poller_clients

        lambda_handler(SCHEDULED_EVENT, lambda_context)

        clients = printful.clients + sender.clients
        assert len(clients) == 2
        assert all(client.http.is_closed for client in clients)

    def test_unexpected_failure_returns_500(self, relay_env, lambda_context):
        with patch(
            "fulfillment_relay.handlers.poller_handler.build_notifier",
            side_effect=RuntimeError("boom"),
        ):
            response = lambda_handler(SCHEDULED_EVENT, lambda_context)

        assert response["statusCode"] == 500
        assert json.loads(response["body"]) == {"error": "Internal error", "message": "boom"}
