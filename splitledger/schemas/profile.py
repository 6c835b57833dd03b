from pydantic import BaseModel
from typing import List


class ProfileRegister(BaseModel):
    """Register the caller under a display name."""
    name: str


class ProfileRename(BaseModel):
    """Rename the caller's profile."""
    name: str


class ProfileResponse(BaseModel):
    """Profile lookup. Unregistered identities come back with the zero identity and an empty name."""
    identity: str
    name: str
    registered: bool

    model_config = {"from_attributes": True}


class IdentityListResponse(BaseModel):
    identities: List[str]
