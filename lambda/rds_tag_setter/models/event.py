"""Parsing of RDS EventBridge notifications."""

from __future__ import annotations
import json
from typing import Any

from ..exceptions import EventParseError


def parse_instance_id(event: Any) -> str:
    """Extract the DB instance identifier from an RDS event.

    RDS instance events carry it as ``detail.SourceIdentifier``. The detail
    may arrive as an object or as a JSON string. A missing SourceIdentifier
    yields an empty string, which the naming filter then skips.

    Raises:
        EventParseError: if the event or its detail is not a JSON object, or
            SourceIdentifier is not a string
    """
    if not isinstance(event, dict):
        raise EventParseError(f"Event must be an object, got {type(event).__name__}")

    detail = event.get("detail")
    if isinstance(detail, (str, bytes)):
        try:
            detail = json.loads(detail)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise EventParseError(f"Event detail is not valid JSON: {e}") from e

    if not isinstance(detail, dict):
        raise EventParseError(
            f"Event detail must be an object, got {type(detail).__name__}"
        )

    source_identifier = detail.get("SourceIdentifier", "")
    if not isinstance(source_identifier, str):
        raise EventParseError(
            f"SourceIdentifier must be a string, got {type(source_identifier).__name__}"
        )

    return source_identifier
