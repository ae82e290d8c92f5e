"""
FastAPI dependencies for authorization.

Read endpoints are public. Write endpoints depend on get_admin_user,
which only inspects the signed token claims; there is no user table.
"""

import logging
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from typing import Optional

from app.core.security import decode_token

logger = logging.getLogger(__name__)

# auto_error=False so a missing header reaches get_admin_user and becomes a 403
security = HTTPBearer(auto_error=False)


async def get_current_user_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[dict]:
    """
    Decode the Bearer token if one was sent.

    Returns None when no token is present or it fails validation.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        logger.warning("Rejected invalid bearer token")
        return None

    if payload.get("sub") is None:
        return None
    return payload


async def get_admin_user(
    claims: Optional[dict] = Depends(get_current_user_claims),
) -> dict:
    """
    Require a valid token carrying is_admin=True.

    Raises:
        HTTPException 403: Missing, invalid or non-admin token
    """
    if not claims or claims.get("is_admin") is not True:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required"
        )

    return claims
