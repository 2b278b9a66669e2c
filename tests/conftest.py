"""
Pytest configuration and shared fixtures for the fulfillment relay.

This module provides common test fixtures used across unit and integration
tests: environment variables, Lambda context and API Gateway events, sample
Printful payloads, a moto-backed sent-flag table, and a recording httpx
transport standing in for Printful, Sender.net and Solr.
"""

import json
import os
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import Mock

import boto3
import httpx
import pytest
from aws_lambda_env_modeler import LAMBDA_ENV_MODELER_DISABLE_CACHE
from moto import mock_aws

SENT_FLAGS_TABLE = "test-shipment-emails"


# Test environment configuration
@pytest.fixture(scope="session", autouse=True)
def test_environment():
    """Set up test environment variables."""
    os.environ.update({
        "AWS_DEFAULT_REGION": "us-east-1",
        "AWS_ACCESS_KEY_ID": "test",
        "AWS_SECRET_ACCESS_KEY": "test",
        "POWERTOOLS_SERVICE_NAME": "test-fulfillment-relay",
        "POWERTOOLS_METRICS_NAMESPACE": "TestFulfillmentRelay",
        "POWERTOOLS_LOG_LEVEL": "DEBUG",
        "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
    })


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Read configuration fresh on every call and drop cached connections between tests."""
    from fulfillment_relay.handlers import records_handler

    monkeypatch.setenv(LAMBDA_ENV_MODELER_DISABLE_CACHE, "true")
    records_handler._posts_repository = None
    yield
    records_handler._posts_repository = None


@pytest.fixture
def relay_env(monkeypatch) -> Dict[str, str]:
    """Credentials and settings for the webhook and poller functions."""
    values = {
        "SENDER_API_KEY": "sender-test-key",
        "SENDER_GROUP_ID": "grp_shipped",
        "SENDER_FROM_EMAIL": "orders@shop.example",
        "SENDER_FROM_NAME": "Test Shop",
        "SENDER_API_URL": "https://sender.test/v2",
        "PRINTFUL_API_KEY": "printful-test-key",
        "PRINTFUL_API_URL": "https://printful.test",
        "SENT_FLAGS_TABLE_NAME": SENT_FLAGS_TABLE,
    }
    for name, value in values.items():
        monkeypatch.setenv(name, value)
    return values


# DynamoDB fixtures
@pytest.fixture
def sent_flags_table():
    """Create a mock DynamoDB table for the sent flags."""
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")

        table = dynamodb.create_table(
            TableName=SENT_FLAGS_TABLE,
            KeySchema=[{"AttributeName": "order_id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "order_id", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )

        table.wait_until_exists()
        yield table


# Lambda fixtures
@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-relay-function"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-relay-function"
    context.memory_limit_in_mb = 512
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-relay-function"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    context.get_remaining_time_in_millis.return_value = 30000
    return context


@pytest.fixture
def api_gateway_event() -> Callable[..., Dict[str, Any]]:
    """Factory for API Gateway REST proxy events."""

    def make_event(method: str = "POST", path: str = "/", body: Any = None) -> Dict[str, Any]:
        if body is not None and not isinstance(body, str):
            body = json.dumps(body)
        return {
            "resource": path,
            "httpMethod": method,
            "path": path,
            "headers": {
                "Content-Type": "application/json",
                "User-Agent": "test-agent/1.0",
            },
            "multiValueHeaders": {},
            "body": body,
            "requestContext": {
                "requestId": "test-request-id-123",
                "accountId": "123456789012",
                "stage": "test",
                "httpMethod": method,
                "path": path,
                "resourcePath": path,
                "protocol": "HTTP/1.1",
                "identity": {
                    "sourceIp": "127.0.0.1",
                    "userAgent": "test-agent/1.0",
                },
            },
            "pathParameters": None,
            "queryStringParameters": None,
            "multiValueQueryStringParameters": None,
            "stageVariables": None,
            "isBase64Encoded": False,
        }

    return make_event


# Sample data fixtures
@pytest.fixture
def shipment_sent_payload() -> Dict[str, Any]:
    """Printful v2 ``shipment_sent`` webhook body."""
    return {
        "type": "shipment_sent",
        "occurred_at": "2024-05-01T10:00:00Z",
        "store_id": 1234,
        "data": {
            "id": 98765,
            "carrier": "USPS",
            "service": "First Class",
            "tracking_number": "9400111899223856927",
            "tracking_url": "https://tools.usps.com/go/TrackConfirmAction?tLabels=9400111899223856927",
            "order": {
                "id": 55501,
                "external_id": "1042",
                "recipient": {
                    "name": "Ada Lovelace King",
                    "email": "ada@example.com",
                },
            },
            "shipment_items": [
                {"order_item_name": "Bauhaus Poster 50x70", "quantity": 2},
                {"order_item_name": "Gallery Frame", "quantity": 1},
            ],
        },
    }


@pytest.fixture
def printful_order() -> Callable[..., Dict[str, Any]]:
    """Factory for Printful ``/orders`` order records."""

    def make_order(
        order_id: int = 55501,
        shipped_at: Any = None,
        updated: Any = None,
        shipments: bool = True,
        external_id: Optional[str] = "1042",
    ) -> Dict[str, Any]:
        order = {
            "id": order_id,
            "external_id": external_id,
            "status": "fulfilled",
            "updated": updated,
            "recipient": {"name": "Ada Lovelace", "email": "ada@example.com"},
            "items": [
                {"name": "Bauhaus Poster", "quantity": 2, "variant_name": "50x70 cm"},
                {"name": "Sticker", "quantity": 1, "variant_name": None},
            ],
            "shipments": [],
        }
        if shipments:
            order["shipments"] = [{
                "carrier": "USPS",
                "service": "First Class",
                "tracking_number": "9400111899223856927",
                "tracking_url": "https://tools.usps.com/track/9400111899223856927",
                "shipped_at": shipped_at,
            }]
        return order

    return make_order


# HTTP fixtures
class RecordingTransport(httpx.MockTransport):
    """MockTransport that records every request and answers from a route table."""

    def __init__(self, routes: Optional[Dict[tuple, Any]] = None) -> None:
        self.requests: List[httpx.Request] = []
        self.routes: Dict[tuple, Any] = dict(routes or {})
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        answer = self.routes.get((request.method, request.url.path))
        if answer is None:
            return httpx.Response(404, json={"message": "route not mocked"})
        if callable(answer):
            return answer(request)
        if isinstance(answer, Exception):
            raise answer
        status_code, body = answer
        return httpx.Response(status_code, json=body)

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


@pytest.fixture
def recording_transport() -> Callable[..., RecordingTransport]:
    return RecordingTransport


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
