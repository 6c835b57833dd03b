from datetime import datetime, timezone
from typing import Annotated

from pydantic import Field

ZERO_IDENTITY = "0x0000000000000000000000000000000000000000"

# Unsigned 256-bit range
MAX_AMOUNT = 2 ** 256 - 1

Identity = str
Amount = Annotated[int, Field(ge=0, le=MAX_AMOUNT)]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_zero_identity(identity: str | None) -> bool:
    """The empty string counts as the zero identity too."""
    return not identity or identity == ZERO_IDENTITY
