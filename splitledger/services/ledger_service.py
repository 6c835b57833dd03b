"""
LedgerService - the ledger's single entry point.

Writes (register, rename, add_expense, settle) run one at a time under
a single asyncio lock: validate, write, queue a notification. Expense ids
are therefore gapless and strictly increasing, and notifications go out
in write order. Subscribers run after the lock is released, so a
subscriber may itself write to the ledger.

Reads take no lock. Records and profiles become visible in one step,
so a reader never observes a half-written record.
"""

import asyncio
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from splitledger.core.logging_config import get_logger
from splitledger.models.base import _utcnow
from splitledger.models.expense import ExpenseRecord
from splitledger.models.notification import (
    DebtSettled,
    ExpenseAdded,
    NameUpdated,
    PersonRegistered,
)
from splitledger.models.profile import Profile
from splitledger.models.settlement import SettlementEvent
from splitledger.repositories.expense_repo import MemoryExpenseRepository
from splitledger.repositories.profile_repo import MemoryProfileRepository
from splitledger.services.balance_engine import DEFAULT_CACHE_ENTRIES, BalanceEngine
from splitledger.services.expense_ledger import ExpenseLedger
from splitledger.services.identity_directory import IdentityDirectory
from splitledger.services.notifier import NotificationBus, Subscriber
from splitledger.services.settlement_recorder import SettlementRecorder
from splitledger.utils.ledger_validation import LedgerError

logger = get_logger("services.ledger")


class LedgerService:

    def __init__(
        self,
        directory: IdentityDirectory,
        ledger: ExpenseLedger,
        engine: BalanceEngine,
        recorder: SettlementRecorder,
        bus: Optional[NotificationBus] = None,
    ):
        self.directory = directory
        self.ledger = ledger
        self.engine = engine
        self.recorder = recorder
        self.bus = bus or NotificationBus()
        self._write_lock = asyncio.Lock()

    @classmethod
    def in_memory(
        cls,
        balance_cache: bool = False,
        clock=None,
        balance_cache_size: int = DEFAULT_CACHE_ENTRIES,
    ) -> "LedgerService":
        """Service backed by in-process repositories."""
        ledger = ExpenseLedger(MemoryExpenseRepository(), clock or _utcnow)
        return cls(
            directory=IdentityDirectory(MemoryProfileRepository()),
            ledger=ledger,
            engine=BalanceEngine(ledger, cache_enabled=balance_cache, max_entries=balance_cache_size),
            recorder=SettlementRecorder(),
        )

    # ===== OBSERVERS =====

    def subscribe(self, subscriber: Subscriber) -> None:
        self.bus.subscribe(subscriber)

    def unsubscribe(self, subscriber: Subscriber) -> None:
        self.bus.unsubscribe(subscriber)

    async def flush(self) -> None:
        """Wait for queued notifications to reach their subscribers."""
        await self.bus.join()

    # ===== WRITES =====

    async def register(self, identity: str, name: str) -> Profile:
        async with self._write_lock:
            try:
                profile = await self.directory.register(identity, name)
            except LedgerError as exc:
                _log_rejected("register", exc, identity=identity)
                raise
            logger.info("Person registered", extra={"identity": identity})
            self.bus.publish(PersonRegistered(identity=identity, name=name))
        return profile

    async def rename(self, identity: str, new_name: str) -> Profile:
        async with self._write_lock:
            try:
                profile = await self.directory.rename(identity, new_name)
            except LedgerError as exc:
                _log_rejected("rename", exc, identity=identity)
                raise
            logger.info("Name updated", extra={"identity": identity})
            self.bus.publish(NameUpdated(identity=identity, new_name=new_name))
        return profile

    async def add_expense(
        self,
        label: str,
        participants: Sequence[str],
        paid_amounts: Sequence[int],
        owed_amounts: Sequence[int],
    ) -> int:
        """Append an expense and return its id."""
        async with self._write_lock:
            try:
                record = await self.ledger.add_expense(label, participants, paid_amounts, owed_amounts)
            except LedgerError as exc:
                _log_rejected("add_expense", exc, label=label)
                raise
            logger.info(
                "Expense added",
                extra={
                    "expense_id": record.id,
                    "label": record.label,
                    "participant_count": len(record.participants),
                },
            )
            self.bus.publish(ExpenseAdded(expense_id=record.id, label=record.label))
        return record.id

    async def settle(self, from_identity: str, to_identity: str, amount: int) -> SettlementEvent:
        async with self._write_lock:
            try:
                event = self.recorder.settle(from_identity, to_identity, amount)
            except LedgerError as exc:
                _log_rejected("settle", exc, from_identity=from_identity, to_identity=to_identity)
                raise
            logger.info(
                "Debt settled",
                extra={"from_identity": from_identity, "to_identity": to_identity, "amount": amount},
            )
            self.bus.publish(
                DebtSettled(from_identity=from_identity, to_identity=to_identity, amount=amount)
            )
        return event

    # ===== READS =====

    async def get_profile(self, identity: str) -> Profile:
        return await self.directory.get(identity)

    async def list_identities(self) -> List[str]:
        return await self.directory.list_all()

    async def get_expense_info(self, expense_id: int) -> Tuple[int, str, datetime]:
        return await self.ledger.get_basic_info(expense_id)

    async def get_expense(self, expense_id: int) -> ExpenseRecord:
        return await self.ledger.get_expense(expense_id)

    async def get_expense_participants(self, expense_id: int) -> List[str]:
        return await self.ledger.get_participants(expense_id)

    async def get_amount_paid(self, expense_id: int, identity: str) -> int:
        return await self.ledger.get_amount_paid(expense_id, identity)

    async def get_amount_owed(self, expense_id: int, identity: str) -> int:
        return await self.ledger.get_amount_owed(expense_id, identity)

    async def expense_count(self) -> int:
        return await self.ledger.count()

    async def list_expenses(self, offset: int = 0, limit: int = 50) -> List[ExpenseRecord]:
        return await self.ledger.list_expenses(offset=offset, limit=limit)

    async def net_balance(self, identity: str) -> int:
        return await self.engine.net_balance(identity)

    async def balances(self, identities: Optional[Iterable[str]] = None) -> Dict[str, int]:
        """Balances for the given identities, or for every registered identity."""
        if identities is None:
            identities = await self.directory.list_all()
        return await self.engine.balances(identities)


def _log_rejected(operation: str, exc: LedgerError, **fields) -> None:
    logger.warning(
        "%s rejected: %s",
        operation,
        exc,
        extra={"operation": operation, "error": type(exc).__name__, **fields},
    )
