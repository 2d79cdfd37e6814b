"""STS caller identity."""

from .identity import GetCallerIdentityAPI, resolve_account_id

__all__ = ["GetCallerIdentityAPI", "resolve_account_id"]
