from fastapi import Request

from splitledger.core.config import settings
from splitledger.db.mongo import get_db
from splitledger.repositories.expense_repo import ExpenseRepository
from splitledger.repositories.profile_repo import ProfileRepository
from splitledger.services.balance_engine import BalanceEngine
from splitledger.services.expense_ledger import ExpenseLedger
from splitledger.services.identity_directory import IdentityDirectory
from splitledger.services.ledger_service import LedgerService
from splitledger.services.settlement_recorder import SettlementRecorder


def build_ledger_service(backend: str | None = None) -> LedgerService:
    """
    Build the ledger service for the configured storage backend.

    The mongo backend expects connect_to_mongo() to have run already.
    """
    backend = backend or settings.STORAGE_BACKEND
    if backend == "memory":
        return LedgerService.in_memory(
            balance_cache=settings.BALANCE_CACHE_ENABLED,
            balance_cache_size=settings.BALANCE_CACHE_MAX_ENTRIES,
        )
    if backend == "mongo":
        db = get_db()
        if db is None:
            raise RuntimeError("MongoDB is not connected")
        ledger = ExpenseLedger(ExpenseRepository(db))
        return LedgerService(
            directory=IdentityDirectory(ProfileRepository(db)),
            ledger=ledger,
            engine=BalanceEngine(
                ledger,
                cache_enabled=settings.BALANCE_CACHE_ENABLED,
                max_entries=settings.BALANCE_CACHE_MAX_ENTRIES,
            ),
            recorder=SettlementRecorder(),
        )
    raise ValueError(f"Unknown storage backend: {backend}")


async def get_ledger_service(request: Request) -> LedgerService:
    """Return the ledger service owned by the running application."""
    return request.app.state.ledger_service
