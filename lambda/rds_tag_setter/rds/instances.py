"""RDS instance lookups."""

from __future__ import annotations
from typing import Any, Protocol

from aws_lambda_powertools import Tracer
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import InstanceNotFoundError, UpstreamError
from ..models import InstanceDescriptor
from ..models.config import SERVICE_NAME
from ..utils import get_logger

logger = get_logger()
tracer = Tracer(service=SERVICE_NAME)

NOT_FOUND_ERROR_CODES = {"DBInstanceNotFound", "DBInstanceNotFoundFault"}


class DescribeDBInstancesAPI(Protocol):
    """The part of the RDS client used to look up instances."""

    def describe_db_instances(self, **kwargs: Any) -> dict[str, Any]: ...


@tracer.capture_method(capture_response=False)
def resolve_cluster(rds: DescribeDBInstancesAPI, instance_id: str) -> InstanceDescriptor:
    """
    Look up which Aurora cluster a DB instance belongs to.

    Exactly one instance is described; no pagination and no retries.

    Returns:
        InstanceDescriptor with the cluster identifier and instance ARN

    Raises:
        InstanceNotFoundError: instance unknown, or missing cluster/ARN details
        UpstreamError: DescribeDBInstances failed
    """
    try:
        response = rds.describe_db_instances(DBInstanceIdentifier=instance_id)
    except ClientError as e:
        if e.response.get("Error", {}).get("Code") in NOT_FOUND_ERROR_CODES:
            raise InstanceNotFoundError(
                instance_id, f"No DB instance found with ID: {instance_id}"
            ) from e
        raise UpstreamError(
            "DescribeDBInstances", f"Failed to describe DB instance {instance_id}", e
        ) from e
    except BotoCoreError as e:
        raise UpstreamError(
            "DescribeDBInstances", f"Failed to describe DB instance {instance_id}", e
        ) from e

    db_instances = response.get("DBInstances") or []
    if not db_instances:
        raise InstanceNotFoundError(
            instance_id, f"No DB instance found with ID: {instance_id}"
        )

    db_instance = db_instances[0]
    cluster_id = db_instance.get("DBClusterIdentifier")
    instance_arn = db_instance.get("DBInstanceArn")
    if not cluster_id or not instance_arn:
        raise InstanceNotFoundError(
            instance_id,
            f"Instance {instance_id} is not part of a cluster or details are missing",
        )

    logger.debug(
        "Resolved cluster membership",
        extra={"instance_id": instance_id, "cluster_id": cluster_id},
    )
    return InstanceDescriptor(
        instance_id=instance_id, cluster_id=cluster_id, instance_arn=instance_arn
    )
