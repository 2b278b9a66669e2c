"""
Shipment Poller Lambda Function - Entry point for the scheduled Printful shipment check.

This module serves as the Lambda function entry point that delegates to
the poller handler in the shared fulfillment_relay package.
"""

import os
import sys
from typing import Any, Dict

# Add the shared package to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from aws_lambda_powertools.utilities.typing import LambdaContext
from fulfillment_relay.handlers.poller_handler import lambda_handler as poller_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    return poller_handler(event, context)
