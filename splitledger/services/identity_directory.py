from typing import List

from splitledger.models.base import is_zero_identity
from splitledger.models.profile import Profile
from splitledger.utils.ledger_validation import (
    AlreadyRegistered,
    InvalidInput,
    ProfileNotFound,
    validate_name,
)


class IdentityDirectory:
    """Maps caller identities to registered profiles."""

    def __init__(self, repo):
        self.repo = repo

    async def register(self, identity: str, name: str) -> Profile:
        """
        Create the profile for an identity.

        Raises InvalidInput for the zero identity or an empty name, and
        AlreadyRegistered if the identity has a profile. The stored name
        is never overwritten by a second registration.
        """
        if is_zero_identity(identity):
            raise InvalidInput("Cannot register the zero identity")
        validate_name(name)

        if await self.repo.get_profile(identity) is not None:
            raise AlreadyRegistered(identity)
        return await self.repo.insert_profile(identity, name)

    async def rename(self, identity: str, new_name: str) -> Profile:
        """Change the display name of a registered identity."""
        validate_name(new_name)
        profile = await self.repo.update_name(identity, new_name)
        if profile is None:
            raise ProfileNotFound(identity)
        return profile

    async def get(self, identity: str) -> Profile:
        """Returns the zero-value profile for unregistered identities."""
        profile = await self.repo.get_profile(identity)
        if profile is None:
            return Profile.zero()
        return profile

    async def list_all(self) -> List[str]:
        return await self.repo.list_identities()
