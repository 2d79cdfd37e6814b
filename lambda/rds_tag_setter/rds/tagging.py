"""RDS resource tagging."""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Protocol

from aws_lambda_powertools import Tracer
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import UpstreamError
from ..models.config import SERVICE_NAME
from ..utils import convert_dict_to_tags, get_logger

logger = get_logger()
tracer = Tracer(service=SERVICE_NAME)


class AddTagsToResourceAPI(Protocol):
    """The part of the RDS client used to tag resources."""

    def add_tags_to_resource(self, **kwargs: Any) -> dict[str, Any]: ...


@tracer.capture_method
def apply_tags(
    rds: AddTagsToResourceAPI, resource_arn: str, tags: Mapping[str, str]
) -> None:
    """Attach tags to an RDS resource.

    AddTagsToResource overwrites existing values for the same keys, so
    re-applying the same tag set leaves the resource unchanged. Every failure
    (access denied, invalid ARN, throttling) is raised as UpstreamError.
    """
    try:
        rds.add_tags_to_resource(
            ResourceName=resource_arn,
            Tags=convert_dict_to_tags(tags),
        )
    except (ClientError, BotoCoreError) as e:
        raise UpstreamError(
            "AddTagsToResource", f"Failed to add tags to {resource_arn}", e
        ) from e

    logger.debug(
        "Tags added to resource",
        extra={"resource_arn": resource_arn, "tag_keys": sorted(tags)},
    )
