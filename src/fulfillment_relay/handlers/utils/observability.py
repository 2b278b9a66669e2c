"""
Centralized observability utilities for the relay handlers.

This module provides configured instances of AWS Lambda Powertools for logging,
tracing, and metrics collection shared by every function in the package.
"""

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import Metrics
from aws_lambda_powertools.tracing import Tracer

# Metrics namespace for relay KPIs
METRICS_NAMESPACE = 'FulfillmentRelay'

# JSON output format, service name can be set by environment variable "POWERTOOLS_SERVICE_NAME"
logger: Logger = Logger()

# Disabled by setting POWERTOOLS_TRACE_DISABLED to "True"
tracer: Tracer = Tracer()

# Service dimension comes from POWERTOOLS_SERVICE_NAME
metrics = Metrics(namespace=METRICS_NAMESPACE)
