"""Data models for RDS tag setter Lambda."""

from .instance import InstanceDescriptor
from .tag_result import TagResult, TAGGED, SKIPPED
from .config import TagSetterConfig, load_config, parse_tags
from .event import parse_instance_id

__all__ = [
    "InstanceDescriptor",
    "TagResult",
    "TAGGED",
    "SKIPPED",
    "TagSetterConfig",
    "load_config",
    "parse_tags",
    "parse_instance_id",
]
