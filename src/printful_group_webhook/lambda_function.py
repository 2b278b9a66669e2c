"""
Printful Group Webhook Lambda Function - Entry point for shipment_sent webhooks that trigger the Sender.net automation.

This module serves as the Lambda function entry point that delegates to
the group webhook handler in the shared fulfillment_relay package.
"""

import os
import sys
from typing import Any, Dict

# Add the shared package to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from aws_lambda_powertools.utilities.typing import LambdaContext
from fulfillment_relay.handlers.webhook_handler import group_webhook_handler as webhook_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    return webhook_handler(event, context)
