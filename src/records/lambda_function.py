"""
Records Lambda Function - Entry point for the posts REST facade.

This module serves as the Lambda function entry point that delegates to
the records handler (GET /api/posts, POST /api/index) in the shared fulfillment_relay package.
"""

import os
import sys
from typing import Any, Dict

# Add the shared package to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from aws_lambda_powertools.utilities.typing import LambdaContext
from fulfillment_relay.handlers.records_handler import lambda_handler as records_handler


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    return records_handler(event, context)
