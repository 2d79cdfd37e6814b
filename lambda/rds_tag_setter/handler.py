"""Main Lambda handler for RDS tag setter.

Applies the configured tags to Aurora read replicas created by application
autoscaling. Triggered by RDS instance events delivered through EventBridge.
"""

from __future__ import annotations
import json
import os
from typing import Any, Protocol

from aws_lambda_powertools import Tracer, Metrics
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from .exceptions import InvocationCancelledError, TagSetterError
from .models import TagResult, TAGGED, SKIPPED, load_config, parse_instance_id
from .models.config import (
    ARN_REGION,
    AUTOSCALING_PREFIX,
    METRICS_NAMESPACE,
    SERVICE_NAME,
)
from .rds import (
    AddTagsToResourceAPI,
    DescribeDBInstancesAPI,
    apply_tags,
    resolve_cluster,
)
from .sts import GetCallerIdentityAPI, resolve_account_id
from .utils import Deadline, build_instance_arn, create_client, get_logger

logger = get_logger()
tracer = Tracer(service=SERVICE_NAME)
metrics = Metrics(namespace=METRICS_NAMESPACE, service=SERVICE_NAME)


class RDSClient(DescribeDBInstancesAPI, AddTagsToResourceAPI, Protocol):
    """RDS operations used by the tag setter."""


class TagSetter:
    """Tags autoscaled read replicas that belong to the configured cluster.

    The AWS clients are passed in so that tests can substitute them. Holds no
    state between invocations: configuration is read by every call to handle().
    """

    def __init__(self, rds: RDSClient, sts: GetCallerIdentityAPI):
        self.rds = rds
        self.sts = sts

    def handle(self, event: dict[str, Any], context: Any = None) -> TagResult:
        """Process one RDS instance event.

        Returns a TagResult for both outcomes that count as success (tags
        applied, event skipped). Every failure is raised as a TagSetterError
        subclass.
        """
        deadline = Deadline(context)

        try:
            config = load_config()
        except TagSetterError as e:
            logger.error(f"Invalid configuration: {e}", extra={"stage": "config"})
            raise

        try:
            instance_id = parse_instance_id(event)
        except TagSetterError as e:
            logger.error(f"Error parsing event detail: {e}", extra={"stage": "event"})
            raise

        logger.info(
            "Received event for DB instance",
            extra={"instance_id": instance_id, "stage": "event"},
        )

        if AUTOSCALING_PREFIX not in instance_id:
            return self._skip(
                instance_id,
                f"Instance is not an autoscaled replica (no '{AUTOSCALING_PREFIX}' in name)",
            )

        self._check_deadline(deadline, "DescribeDBInstances", instance_id)
        try:
            descriptor = resolve_cluster(self.rds, instance_id)
        except TagSetterError as e:
            logger.error(
                f"Error getting cluster identifier for instance {instance_id}: {e}",
                extra={"instance_id": instance_id, "stage": "resolve_cluster"},
            )
            raise

        if descriptor.cluster_id != config.cluster_identifier:
            return self._skip(
                instance_id,
                f"Instance is not a member of cluster {config.cluster_identifier}",
                cluster_id=descriptor.cluster_id,
            )

        self._check_deadline(deadline, "GetCallerIdentity", instance_id)
        try:
            account_id = resolve_account_id(self.sts)
        except TagSetterError as e:
            logger.error(
                f"Error getting AWS caller identity: {e}",
                extra={"instance_id": instance_id, "stage": "resolve_account"},
            )
            raise

        resource_arn = build_instance_arn(account_id, instance_id)

        self._check_deadline(deadline, "AddTagsToResource", instance_id)
        try:
            apply_tags(self.rds, resource_arn, config.tags)
        except TagSetterError as e:
            logger.error(
                f"Error adding tags to DB instance {instance_id}: {e}",
                extra={
                    "instance_id": instance_id,
                    "resource_arn": resource_arn,
                    "stage": "apply_tags",
                },
            )
            raise

        logger.info(
            "Tags applied to DB instance",
            extra={
                "instance_id": instance_id,
                "cluster_id": descriptor.cluster_id,
                "resource_arn": resource_arn,
                "tag_keys": sorted(config.tags),
                "stage": "complete",
            },
        )
        return TagResult(
            instance_id=instance_id,
            outcome=TAGGED,
            reason=f"Autoscaled replica of cluster {descriptor.cluster_id}",
            cluster_id=descriptor.cluster_id,
            resource_arn=resource_arn,
            tags=dict(config.tags),
        )

    @staticmethod
    def _check_deadline(deadline: Deadline, operation: str, instance_id: str) -> None:
        try:
            deadline.check(operation)
        except InvocationCancelledError as e:
            logger.error(
                f"Invocation cancelled for DB instance {instance_id}: {e}",
                extra={
                    "instance_id": instance_id,
                    "operation": operation,
                    "stage": "deadline",
                },
            )
            raise

    @staticmethod
    def _skip(instance_id: str, reason: str, cluster_id: str | None = None) -> TagResult:
        logger.info(
            "Skipping DB instance",
            extra={
                "instance_id": instance_id,
                "cluster_id": cluster_id,
                "reason": reason,
                "stage": "skip",
            },
        )
        return TagResult(
            instance_id=instance_id,
            outcome=SKIPPED,
            reason=reason,
            cluster_id=cluster_id,
        )


@logger.inject_lambda_context(correlation_id_path=correlation_paths.EVENT_BRIDGE)
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Main Lambda handler."""
    logger.append_keys(function_version=getattr(context, "function_version", None))

    region = os.environ.get("AWS_REGION")
    if region and region != ARN_REGION:
        logger.warning(
            "Function region differs from the region used in instance ARNs",
            extra={"aws_region": region, "arn_region": ARN_REGION},
        )

    try:
        tag_setter = TagSetter(rds=create_client("rds"), sts=create_client("sts"))
        result = tag_setter.handle(event, context)
    except TagSetterError:
        metrics.add_metric(name="TaggingFailures", unit=MetricUnit.Count, value=1)
        raise
    except Exception as e:
        metrics.add_metric(name="TaggingFailures", unit=MetricUnit.Count, value=1)
        logger.exception(f"Lambda execution failed: {e}")
        raise

    metrics.add_metric(
        name="InstancesSkipped" if result.skipped else "InstancesTagged",
        unit=MetricUnit.Count,
        value=1,
    )

    return {
        "statusCode": 200,
        "body": json.dumps(result.to_dict()),
    }
