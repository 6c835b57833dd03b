from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple

from splitledger.models.base import _utcnow
from splitledger.models.expense import ExpenseRecord
from splitledger.utils.ledger_validation import (
    ExpenseNotFound,
    dedupe_splits,
    validate_expense,
)


class ExpenseLedger:
    """
    Append-only store of expense records.

    add_expense must run under the service write lock: the next id is the
    current count, read and used without interleaving writers.
    """

    def __init__(self, repo, clock: Callable[[], datetime] = _utcnow):
        self.repo = repo
        self.clock = clock

    async def add_expense(
        self,
        label: str,
        participants: Sequence[str],
        paid_amounts: Sequence[int],
        owed_amounts: Sequence[int],
    ) -> ExpenseRecord:
        validate_expense(label, participants, paid_amounts, owed_amounts)

        participants = list(participants)
        paid, owed = dedupe_splits(participants, list(paid_amounts), list(owed_amounts))

        record = ExpenseRecord(
            id=await self.repo.count(),
            label=label,
            created_at=self.clock(),
            participants=participants,
            paid=paid,
            owed=owed,
        )
        await self.repo.insert_record(record)
        return record

    async def get_expense(self, expense_id: int) -> ExpenseRecord:
        record = await self.repo.get_record(expense_id)
        if record is None:
            raise ExpenseNotFound(expense_id)
        return record

    async def get_basic_info(self, expense_id: int) -> Tuple[int, str, datetime]:
        record = await self.get_expense(expense_id)
        return record.id, record.label, record.created_at

    async def get_participants(self, expense_id: int) -> List[str]:
        record = await self.get_expense(expense_id)
        return list(record.participants)

    async def get_amount_paid(self, expense_id: int, participant: str) -> int:
        """0 when the participant is not part of the split."""
        record = await self.get_expense(expense_id)
        return record.amount_paid(participant)

    async def get_amount_owed(self, expense_id: int, participant: str) -> int:
        record = await self.get_expense(expense_id)
        return record.amount_owed(participant)

    async def count(self) -> int:
        return await self.repo.count()

    async def list_expenses(self, offset: int = 0, limit: int = 50) -> List[ExpenseRecord]:
        return await self.repo.list_records(offset=offset, limit=limit)

    def iter_records(self, participant: Optional[str] = None, upto: Optional[int] = None):
        """Async iterator over records with id < upto, in id order."""
        return self.repo.iter_records(participant=participant, upto=upto)
