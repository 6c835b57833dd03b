"""
Profile repositories - identity directory storage.

Two backends with the same async interface:
- MemoryProfileRepository: dict plus registration-order list
- ProfileRepository: MongoDB "profiles" collection, _id = identity
"""

from typing import Dict, List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from splitledger.models.base import _utcnow
from splitledger.models.profile import Profile
from splitledger.utils.ledger_validation import AlreadyRegistered


class MemoryProfileRepository:
    """In-process profile storage."""

    def __init__(self):
        self._profiles: Dict[str, Profile] = {}
        self._order: List[str] = []

    async def insert_profile(self, identity: str, name: str) -> Profile:
        if identity in self._profiles:
            raise AlreadyRegistered(identity)
        now = _utcnow()
        profile = Profile(identity=identity, display_name=name, created_at=now, updated_at=now)
        self._profiles[identity] = profile
        self._order.append(identity)
        return profile

    async def get_profile(self, identity: str) -> Optional[Profile]:
        return self._profiles.get(identity)

    async def update_name(self, identity: str, name: str) -> Optional[Profile]:
        existing = self._profiles.get(identity)
        if existing is None:
            return None
        updated = existing.model_copy(update={"display_name": name, "updated_at": _utcnow()})
        self._profiles[identity] = updated
        return updated

    async def list_identities(self) -> List[str]:
        return list(self._order)


class ProfileRepository:
    """Profile storage in MongoDB."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["profiles"]

    async def insert_profile(self, identity: str, name: str) -> Profile:
        """
        Insert a new profile.

        seq records registration order. Callers hold the service write
        lock, so the document count is a stable next value.
        """
        now = _utcnow()
        seq = await self.collection.count_documents({})
        doc = {
            "_id": identity,
            "display_name": name,
            "seq": seq,
            "created_at": now,
            "updated_at": now,
        }
        try:
            await self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise AlreadyRegistered(identity)
        return _profile_from_doc(doc)

    async def get_profile(self, identity: str) -> Optional[Profile]:
        doc = await self.collection.find_one({"_id": identity})
        if doc:
            return _profile_from_doc(doc)
        return None

    async def update_name(self, identity: str, name: str) -> Optional[Profile]:
        result = await self.collection.find_one_and_update(
            {"_id": identity},
            {"$set": {"display_name": name, "updated_at": _utcnow()}},
            return_document=True
        )
        if result:
            return _profile_from_doc(result)
        return None

    async def list_identities(self) -> List[str]:
        cursor = self.collection.find({}, {"_id": 1}).sort("seq", 1)
        return [doc["_id"] async for doc in cursor]


def _profile_from_doc(doc: dict) -> Profile:
    return Profile(
        identity=doc["_id"],
        display_name=doc["display_name"],
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )
