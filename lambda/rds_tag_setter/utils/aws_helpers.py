"""AWS helper functions."""

from __future__ import annotations
from collections.abc import Mapping

import boto3
from botocore.config import Config

from ..models.config import ARN_REGION, AWS_CONNECT_TIMEOUT, AWS_READ_TIMEOUT

# Single attempt per call: failures go straight back to the handler
CLIENT_CONFIG = Config(
    retries={"total_max_attempts": 1, "mode": "standard"},
    connect_timeout=AWS_CONNECT_TIMEOUT,
    read_timeout=AWS_READ_TIMEOUT,
)


def create_client(service: str):
    """Create a boto3 client with the tag setter's retry and timeout settings."""
    return boto3.client(service, config=CLIENT_CONFIG)


def convert_dict_to_tags(tags_dict: Mapping[str, str] | None) -> list[dict[str, str]]:
    """Convert dictionary to AWS tag list."""
    return [{"Key": k, "Value": v} for k, v in tags_dict.items()] if tags_dict else []


def build_instance_arn(account_id: str, instance_id: str, region: str = ARN_REGION) -> str:
    """Build the ARN of a DB instance."""
    return f"arn:aws:rds:{region}:{account_id}:db:{instance_id}"
