"""TagResult data class."""

from __future__ import annotations
from dataclasses import dataclass, asdict, field
from typing import Any

TAGGED = "TAGGED"
SKIPPED = "SKIPPED"


@dataclass(frozen=True)
class TagResult:
    """Outcome of a successful invocation (tags applied or event skipped)."""

    instance_id: str
    outcome: str
    reason: str
    cluster_id: str | None = None
    resource_arn: str | None = None
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def skipped(self) -> bool:
        return self.outcome == SKIPPED

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
