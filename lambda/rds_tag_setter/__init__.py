"""RDS Tag Setter Lambda for AWS."""

from .handler import lambda_handler, TagSetter
from .version import __version__

__description__ = "Tags Aurora read replicas created by application autoscaling"

__all__ = ["lambda_handler", "TagSetter", "__version__"]
