"""Utility functions for RDS tag setter Lambda."""

from .aws_helpers import (
    CLIENT_CONFIG,
    create_client,
    convert_dict_to_tags,
    build_instance_arn,
)
from .deadline import Deadline
from .logging_config import get_logger

__all__ = [
    "CLIENT_CONFIG",
    "create_client",
    "convert_dict_to_tags",
    "build_instance_arn",
    "Deadline",
    "get_logger",
]
