"""Configuration from environment variables."""

from __future__ import annotations
import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ..exceptions import ConfigurationError, TagsParseError

# Names of the required per-invocation settings
CLUSTER_IDENTIFIER_ENV = "RDS_CLUSTER_IDENTIFIER"
TAGS_ENV = "TAGS"

# Autoscaled replicas are named "application-autoscaling-<uuid>" by RDS
AUTOSCALING_PREFIX = "application-autoscaling-"

# Region used when building the instance ARN
ARN_REGION = "us-east-1"

# Deadline handling: abort before an AWS call when less time than this remains
MIN_REMAINING_TIME_MS = int(os.environ.get("MIN_REMAINING_TIME_MS", "1000"))

# AWS client timeouts (seconds)
AWS_CONNECT_TIMEOUT = int(os.environ.get("AWS_CONNECT_TIMEOUT", "5"))
AWS_READ_TIMEOUT = int(os.environ.get("AWS_READ_TIMEOUT", "10"))

# Logging configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Observability names
SERVICE_NAME = "rds-tag-setter"
METRICS_NAMESPACE = "RDSTagSetter"


@dataclass(frozen=True)
class TagSetterConfig:
    """Settings for a single invocation."""

    cluster_identifier: str
    tags: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the tag mapping along with the dataclass
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))


def parse_tags(raw: str | None) -> dict[str, str]:
    """Parse the TAGS setting into a tag mapping.

    The value must be a JSON object whose values are all strings, e.g.
    ``{"Owner": "platform", "iit-billing-tag": "aurora"}``.

    Raises:
        TagsParseError: if the value is not valid JSON or not a string->string object
    """
    try:
        tags = json.loads(raw or "")
    except json.JSONDecodeError as e:
        raise TagsParseError(f"{TAGS_ENV} is not valid JSON: {e}") from e

    if not isinstance(tags, dict):
        raise TagsParseError(
            f"{TAGS_ENV} must be a JSON object, got {type(tags).__name__}"
        )

    invalid = sorted(k for k, v in tags.items() if not isinstance(v, str))
    if invalid:
        raise TagsParseError(
            f"{TAGS_ENV} values must be strings (invalid keys: {', '.join(invalid)})"
        )

    return tags


def load_config(environ: Mapping[str, str] | None = None) -> TagSetterConfig:
    """Read the required settings from the environment.

    Called at the start of every invocation so that each run works on its own
    immutable snapshot.

    Raises:
        ConfigurationError: if RDS_CLUSTER_IDENTIFIER is missing or empty
        TagsParseError: if TAGS cannot be parsed
    """
    env = os.environ if environ is None else environ

    cluster_identifier = env.get(CLUSTER_IDENTIFIER_ENV, "")
    if not cluster_identifier:
        raise ConfigurationError(f"{CLUSTER_IDENTIFIER_ENV} environment variable is required")

    tags = parse_tags(env.get(TAGS_ENV))

    return TagSetterConfig(cluster_identifier=cluster_identifier, tags=tags)
