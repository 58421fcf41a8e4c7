"""Shared-token guard for operational endpoints."""

import hmac

from fastapi import Header, HTTPException, status

from licenze_api.config import get_settings

OPS_TOKEN_HEADER = "X-Ops-Token"


async def require_ops_token(
    x_ops_token: str | None = Header(default=None, alias=OPS_TOKEN_HEADER),
) -> None:
    """Reject requests without the configured ops token.

    An empty ``ops_token`` setting disables the endpoints entirely.

    Raises:
        HTTPException: 403 when the token is missing, wrong or not configured
    """
    expected = get_settings().ops_token
    if not expected or not x_ops_token:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    if not hmac.compare_digest(x_ops_token.encode(), expected.encode()):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
