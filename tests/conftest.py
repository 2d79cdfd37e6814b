"""Pytest configuration and shared fixtures for RDS tag setter tests.

This file contains:
1. RDSEventBuilder - Builder pattern for EventBridge RDS instance events
2. DBInstanceBuilder - Builder pattern for DescribeDBInstances responses
3. Fixtures for environment configuration, mock clients and Lambda context
"""

from __future__ import annotations
import json
import os
import pytest
from typing import Any
from unittest.mock import Mock

from botocore.exceptions import ClientError

# Keep Powertools offline during tests
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

CLUSTER_ID = "planet-express"
ACCOUNT_ID = "123456789012"

# Professor Farnsworth's tags
DEFAULT_TAGS = {
    "Owner": "professor-farnsworth",
    "Purpose": "delivery-company",
}


class RDSEventBuilder:
    """Builder pattern for creating EventBridge RDS instance events.

    Mirrors the shape of "RDS DB Instance Event" notifications; only
    detail.SourceIdentifier is read by the handler.
    """

    def __init__(self):
        self._event = {
            "version": "0",
            "id": "68f6e973-1a0c-d37b-f2f2-94a7f62ffd4e",
            "detail-type": "RDS DB Instance Event",
            "source": "aws.rds",
            "account": ACCOUNT_ID,
            "time": "2024-05-01T12:00:00Z",
            "region": "us-east-1",
            "resources": [],
            "detail": {
                "EventCategories": ["creation"],
                "SourceType": "DB_INSTANCE",
                "Message": "DB instance created",
                "EventID": "RDS-EVENT-0005",
            },
        }

    def with_source_identifier(self, instance_id: str) -> RDSEventBuilder:
        """Set detail.SourceIdentifier."""
        self._event["detail"]["SourceIdentifier"] = instance_id
        self._event["resources"] = [
            f"arn:aws:rds:us-east-1:{ACCOUNT_ID}:db:{instance_id}"
        ]
        return self

    def with_detail(self, detail: Any) -> RDSEventBuilder:
        """Replace the whole detail payload."""
        self._event["detail"] = detail
        return self

    def without_detail(self) -> RDSEventBuilder:
        """Drop the detail payload."""
        self._event.pop("detail", None)
        return self

    def build(self) -> dict[str, Any]:
        """Build and return the event dictionary."""
        return self._event


class DBInstanceBuilder:
    """Builder pattern for DescribeDBInstances responses."""

    def __init__(self):
        self._instance = {
            "DBInstanceIdentifier": "bender",
            "DBInstanceClass": "db.r6g.large",
            "Engine": "aurora-postgresql",
            "DBInstanceStatus": "creating",
            "DBClusterIdentifier": CLUSTER_ID,
            "DBInstanceArn": f"arn:aws:rds:us-east-1:{ACCOUNT_ID}:db:bender",
        }

    def with_instance_id(self, instance_id: str) -> DBInstanceBuilder:
        """Set identifier and matching ARN."""
        self._instance["DBInstanceIdentifier"] = instance_id
        self._instance["DBInstanceArn"] = (
            f"arn:aws:rds:us-east-1:{ACCOUNT_ID}:db:{instance_id}"
        )
        return self

    def with_cluster(self, cluster_id: str) -> DBInstanceBuilder:
        """Set DBClusterIdentifier."""
        self._instance["DBClusterIdentifier"] = cluster_id
        return self

    def without_cluster(self) -> DBInstanceBuilder:
        """Standalone instance (no DBClusterIdentifier)."""
        self._instance.pop("DBClusterIdentifier", None)
        return self

    def without_arn(self) -> DBInstanceBuilder:
        """Drop DBInstanceArn."""
        self._instance.pop("DBInstanceArn", None)
        return self

    def build(self) -> dict[str, Any]:
        """Build a single instance dictionary."""
        return self._instance

    def build_response(self) -> dict[str, Any]:
        """Build a full DescribeDBInstances response."""
        return {"DBInstances": [self._instance]}


# Shared fixtures


@pytest.fixture
def event_builder():
    """Fixture that returns a new RDSEventBuilder."""
    return RDSEventBuilder()


@pytest.fixture
def db_instance_builder():
    """Fixture that returns a new DBInstanceBuilder."""
    return DBInstanceBuilder()


@pytest.fixture
def default_tags():
    """Tag set configured in TAGS."""
    return dict(DEFAULT_TAGS)


@pytest.fixture
def tag_setter_env(monkeypatch, default_tags):
    """Valid RDS_CLUSTER_IDENTIFIER and TAGS environment."""
    monkeypatch.setenv("RDS_CLUSTER_IDENTIFIER", CLUSTER_ID)
    monkeypatch.setenv("TAGS", json.dumps(default_tags))
    return {"RDS_CLUSTER_IDENTIFIER": CLUSTER_ID, "TAGS": json.dumps(default_tags)}


@pytest.fixture
def client_error():
    """Factory for botocore ClientError instances.

    Example:
        raise client_error("ThrottlingException", "Rate exceeded", "DescribeDBInstances")
    """

    def _create(code: str, message: str = "", operation: str = "Operation"):
        return ClientError(
            {"Error": {"Code": code, "Message": message}}, operation
        )

    return _create


@pytest.fixture
def mock_rds(db_instance_builder):
    """Mock RDS client; the instance belongs to planet-express by default."""
    mock = Mock()
    mock.describe_db_instances.return_value = db_instance_builder.build_response()
    mock.add_tags_to_resource.return_value = {}
    return mock


@pytest.fixture
def mock_sts():
    """Mock STS client returning a fixed account id."""
    mock = Mock()
    mock.get_caller_identity.return_value = {
        "UserId": "AROAEXAMPLE:rds-tag-setter",
        "Account": ACCOUNT_ID,
        "Arn": f"arn:aws:sts::{ACCOUNT_ID}:assumed-role/RDSTagSetterRole/rds-tag-setter",
    }
    return mock


@pytest.fixture
def mock_lambda_context():
    """Create a mock Lambda context object."""
    context = Mock()
    context.function_name = "rds-tag-setter"
    context.function_version = "$LATEST"
    context.invoked_function_arn = (
        f"arn:aws:lambda:us-east-1:{ACCOUNT_ID}:function:rds-tag-setter"
    )
    context.memory_limit_in_mb = 256
    context.aws_request_id = "test-request-id"
    context.log_group_name = "/aws/lambda/rds-tag-setter"
    context.log_stream_name = "2024/05/01/[$LATEST]test"
    context.get_remaining_time_in_millis = Mock(return_value=30000)
    return context
