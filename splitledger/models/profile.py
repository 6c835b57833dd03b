"""
Profile model - display name registered for an identity.

- One profile per identity, created once
- Renamed only through an explicit rename; identity never changes
- Never deleted
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from splitledger.models.base import ZERO_IDENTITY, Identity, is_zero_identity


class Profile(BaseModel):
    model_config = ConfigDict(frozen=True)

    identity: Identity
    display_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def zero(cls) -> "Profile":
        """Value returned for identities that never registered."""
        return cls(identity=ZERO_IDENTITY, display_name="")

    @property
    def is_registered(self) -> bool:
        return not is_zero_identity(self.identity)
