from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader

from splitledger.core.config import settings

caller_header = APIKeyHeader(name=settings.CALLER_IDENTITY_HEADER, auto_error=False)


async def get_caller_identity(identity: str | None = Depends(caller_header)) -> str:
    """
    Caller identity as asserted by the upstream identity layer.

    The value is opaque; this service does not authenticate it.
    """
    if not identity or not identity.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing caller identity"
        )
    return identity.strip()
