"""InstanceDescriptor data class."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class InstanceDescriptor:
    """Cluster membership of a DB instance as reported by DescribeDBInstances."""

    instance_id: str
    cluster_id: str
    instance_arn: str
