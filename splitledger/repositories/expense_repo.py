"""
ExpenseRepository - append-only storage for expense records.

Record visibility:
1. A record is built completely before it is stored
2. Storing is one step (list append or a single insert_one)
3. Readers therefore never see a record without all of its splits

Amounts are kept as decimal strings in MongoDB so values beyond the
64-bit BSON integer range survive a round trip.
"""

from typing import AsyncIterator, List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from splitledger.models.expense import ExpenseRecord


class MemoryExpenseRepository:
    """
    In-process expense storage. The list index is the expense id.

    Stored records are never handed out: every read returns a deep copy,
    so callers cannot reach the stored paid/owed maps or participant list.
    """

    def __init__(self):
        self._records: List[ExpenseRecord] = []

    async def count(self) -> int:
        return len(self._records)

    async def insert_record(self, record: ExpenseRecord) -> None:
        if record.id != len(self._records):
            raise ValueError(f"Expected expense id {len(self._records)}, got {record.id}")
        self._records.append(record.model_copy(deep=True))

    async def get_record(self, expense_id: int) -> Optional[ExpenseRecord]:
        if 0 <= expense_id < len(self._records):
            return self._records[expense_id].model_copy(deep=True)
        return None

    async def list_records(self, offset: int = 0, limit: int = 50) -> List[ExpenseRecord]:
        return [record.model_copy(deep=True) for record in self._records[offset:offset + limit]]

    async def iter_records(
        self, participant: Optional[str] = None, upto: Optional[int] = None
    ) -> AsyncIterator[ExpenseRecord]:
        """Yield records with id < upto in id order, optionally only those listing participant."""
        end = len(self._records) if upto is None else min(upto, len(self._records))
        for record in self._records[:end]:
            if participant is None or participant in record.paid:
                yield record.model_copy(deep=True)


class ExpenseRepository:
    """Expense storage in MongoDB."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["expenses"]

    async def count(self) -> int:
        return await self.collection.count_documents({})

    async def insert_record(self, record: ExpenseRecord) -> None:
        """
        Insert a full record document.

        _id is the expense id, so a second writer racing for the same id
        fails with DuplicateKeyError instead of overwriting.
        """
        await self.collection.insert_one(_record_to_doc(record))

    async def get_record(self, expense_id: int) -> Optional[ExpenseRecord]:
        if expense_id < 0:
            return None
        doc = await self.collection.find_one({"_id": expense_id})
        if doc:
            return _record_from_doc(doc)
        return None

    async def list_records(self, offset: int = 0, limit: int = 50) -> List[ExpenseRecord]:
        cursor = self.collection.find({}).sort("_id", 1).skip(offset).limit(limit)
        return [_record_from_doc(doc) async for doc in cursor]

    async def iter_records(
        self, participant: Optional[str] = None, upto: Optional[int] = None
    ) -> AsyncIterator[ExpenseRecord]:
        query: dict = {}
        if participant is not None:
            query["participants"] = participant
        if upto is not None:
            query["_id"] = {"$lt": upto}
        cursor = self.collection.find(query).sort("_id", 1)
        async for doc in cursor:
            yield _record_from_doc(doc)


# ===== DOCUMENT MAPPING =====

def _record_to_doc(record: ExpenseRecord) -> dict:
    return {
        "_id": record.id,
        "label": record.label,
        "created_at": record.created_at,
        "participants": list(record.participants),
        # Identities are values here, never field names
        "splits": [
            {
                "identity": identity,
                "paid": str(record.paid[identity]),
                "owed": str(record.owed[identity]),
            }
            for identity in record.paid
        ],
    }


def _record_from_doc(doc: dict) -> ExpenseRecord:
    splits = doc.get("splits", [])
    return ExpenseRecord(
        id=doc["_id"],
        label=doc["label"],
        created_at=doc["created_at"],
        participants=doc["participants"],
        paid={s["identity"]: int(s["paid"]) for s in splits},
        owed={s["identity"]: int(s["owed"]) for s in splits},
    )
