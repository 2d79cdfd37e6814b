"""RDS instance lookup and tagging."""

from .instances import DescribeDBInstancesAPI, resolve_cluster
from .tagging import AddTagsToResourceAPI, apply_tags

__all__ = [
    "DescribeDBInstancesAPI",
    "resolve_cluster",
    "AddTagsToResourceAPI",
    "apply_tags",
]
