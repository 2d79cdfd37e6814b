"""Logging configuration using AWS Lambda Powertools."""

from aws_lambda_powertools import Logger

from ..models.config import LOG_LEVEL, SERVICE_NAME
from ..version import build_info

# Powertools logger with service name and build metadata on every record.
# Lambda context (request id, function name, cold start) is added by
# logger.inject_lambda_context on the handler.
logger = Logger(
    service=SERVICE_NAME,
    level=LOG_LEVEL,
)
logger.append_keys(**build_info())


def get_logger():
    """Get the configured logger instance.

    Returns Powertools Logger with:
    - Structured JSON logging
    - Automatic Lambda context (request_id, function_name, etc.)
    - version, commit and built_at keys
    """
    return logger
