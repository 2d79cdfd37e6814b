"""Caller identity lookup."""

from __future__ import annotations
from typing import Any, Protocol

from aws_lambda_powertools import Tracer
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import UpstreamError
from ..models.config import SERVICE_NAME

tracer = Tracer(service=SERVICE_NAME)


class GetCallerIdentityAPI(Protocol):
    """The part of the STS client used to find the account id."""

    def get_caller_identity(self, **kwargs: Any) -> dict[str, Any]: ...


@tracer.capture_method
def resolve_account_id(sts: GetCallerIdentityAPI) -> str:
    """Return the AWS account id the function runs in."""
    try:
        identity = sts.get_caller_identity()
    except (ClientError, BotoCoreError) as e:
        raise UpstreamError("GetCallerIdentity", "Failed to get AWS caller identity", e) from e

    account_id = identity.get("Account")
    if not account_id:
        raise UpstreamError("GetCallerIdentity", "No account in caller identity")
    return account_id
