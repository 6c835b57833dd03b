"""
BalanceEngine - net balance per identity.

net(P) = sum(paid[P]) - sum(owed[P]) over every expense record.

Every call is a full recompute over the ledger, O(total records).
Python ints do not overflow, so no accumulator width is chosen.

The optional cache stores (record_count, balance) per identity and is
only used while the ledger still has exactly record_count records.
Records are append-only, so a hit always equals a fresh recompute.
Only identities that appear in at least one record are cached, and the
cache holds at most max_entries identities, least recently used first out.
"""

from collections import OrderedDict
from typing import Dict, Iterable, Tuple

from splitledger.services.expense_ledger import ExpenseLedger

DEFAULT_CACHE_ENTRIES = 10_000


class BalanceEngine:

    def __init__(
        self,
        ledger: ExpenseLedger,
        cache_enabled: bool = False,
        max_entries: int = DEFAULT_CACHE_ENTRIES,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.ledger = ledger
        self.cache_enabled = cache_enabled
        self.max_entries = max_entries
        self._cache: "OrderedDict[str, Tuple[int, int]]" = OrderedDict()

    async def net_balance(self, identity: str) -> int:
        snapshot = await self.ledger.count()

        if self.cache_enabled:
            cached = self._cache.get(identity)
            if cached is not None and cached[0] == snapshot:
                self._cache.move_to_end(identity)
                return cached[1]

        total = 0
        seen = False
        async for record in self.ledger.iter_records(participant=identity, upto=snapshot):
            seen = True
            total += record.net_for(identity)

        if self.cache_enabled and seen:
            self._remember(identity, snapshot, total)
        return total

    async def balances(self, identities: Iterable[str]) -> Dict[str, int]:
        """Net balances for several identities in one pass over the ledger."""
        totals = {identity: 0 for identity in identities}
        if not totals:
            return totals

        snapshot = await self.ledger.count()
        async for record in self.ledger.iter_records(upto=snapshot):
            for identity in record.paid:
                if identity in totals:
                    totals[identity] += record.net_for(identity)
        return totals

    def clear_cache(self) -> None:
        self._cache.clear()

    def _remember(self, identity: str, snapshot: int, total: int) -> None:
        self._cache[identity] = (snapshot, total)
        self._cache.move_to_end(identity)
        while len(self._cache) > self.max_entries:
            self._cache.popitem(last=False)
