import asyncio

import pytest

from conftest import ALICE, BOB, CAROL
from splitledger.models.notification import DebtSettled, ExpenseAdded, PersonRegistered


@pytest.mark.asyncio
async def test_dinner_end_to_end(service, notifications):
    await service.register(ALICE, "Alice")
    await service.register(BOB, "Bob")

    expense_id = await service.add_expense("Dinner", [ALICE, BOB], [100, 0], [50, 50])

    assert expense_id == 0
    assert await service.net_balance(ALICE) == 50
    assert await service.net_balance(BOB) == -50

    await service.settle(BOB, ALICE, 50)

    await service.flush()
    settled = notifications[-1]
    assert isinstance(settled, DebtSettled)
    assert (settled.from_identity, settled.to_identity, settled.amount) == (BOB, ALICE, 50)
    # Settlement is an attestation only
    assert await service.net_balance(ALICE) == 50
    assert await service.net_balance(BOB) == -50
    assert await service.expense_count() == 1

    assert [n.kind for n in notifications] == [
        "person_registered",
        "person_registered",
        "expense_added",
        "debt_settled",
    ]


@pytest.mark.asyncio
async def test_concurrent_add_expense_ids_are_gapless(service, notifications):
    total = 50

    ids = await asyncio.gather(*[
        service.add_expense(f"expense-{i}", [ALICE, BOB], [i, 0], [0, i])
        for i in range(total)
    ])

    assert sorted(ids) == list(range(total))
    assert await service.expense_count() == total

    await service.flush()
    # Notifications follow id order
    added = [n.expense_id for n in notifications if isinstance(n, ExpenseAdded)]
    assert added == list(range(total))

    for expense_id in ids:
        label, = [n.label for n in notifications if isinstance(n, ExpenseAdded) and n.expense_id == expense_id]
        assert (await service.get_expense_info(expense_id))[1] == label


@pytest.mark.asyncio
async def test_concurrent_register_same_identity_one_wins(service, notifications):
    results = await asyncio.gather(
        *[service.register(CAROL, f"Carol {i}") for i in range(5)],
        return_exceptions=True,
    )

    successes = [r for r in results if not isinstance(r, Exception)]
    assert len(successes) == 1
    assert await service.list_identities() == [CAROL]
    await service.flush()
    assert len([n for n in notifications if isinstance(n, PersonRegistered)]) == 1


@pytest.mark.asyncio
async def test_slow_subscriber_does_not_hold_writes(service):
    """Writes complete while a subscriber is still busy; delivery keeps write order."""
    order = []
    release = asyncio.Event()

    async def slow(notification):
        order.append(("start", notification.kind))
        await release.wait()
        order.append(("end", notification.kind))

    service.subscribe(slow)

    await asyncio.wait_for(
        asyncio.gather(
            service.register(ALICE, "Alice"),
            service.add_expense("Dinner", [ALICE], [1], [1]),
        ),
        timeout=1,
    )
    assert await service.expense_count() == 1

    release.set()
    await service.flush()

    assert order == [
        ("start", "person_registered"),
        ("end", "person_registered"),
        ("start", "expense_added"),
        ("end", "expense_added"),
    ]


@pytest.mark.asyncio
async def test_subscriber_can_write_to_ledger(service):
    received = []

    async def welcome(notification):
        if isinstance(notification, PersonRegistered):
            await service.add_expense(f"Welcome {notification.name}", [notification.identity], [0], [0])

    service.subscribe(welcome)
    service.subscribe(received.append)

    await asyncio.wait_for(service.register(ALICE, "Alice"), timeout=1)
    await asyncio.wait_for(service.flush(), timeout=1)

    assert await service.expense_count() == 1
    assert (await service.get_expense_info(0))[1] == "Welcome Alice"
    assert [n.kind for n in received] == ["person_registered", "expense_added"]


@pytest.mark.asyncio
async def test_failing_subscriber_does_not_fail_write(service, notifications):
    def broken(notification):
        raise RuntimeError("observer down")

    service.subscribe(broken)
    service.subscribe(notifications.append)

    expense_id = await service.add_expense("Dinner", [ALICE], [1], [1])

    assert expense_id == 0
    assert await service.expense_count() == 1
    await service.flush()
    # notifications fixture subscribed first, then the explicit append
    assert len(notifications) == 2


@pytest.mark.asyncio
async def test_async_subscriber_and_unsubscribe(service):
    seen = []

    async def observer(notification):
        seen.append(notification)

    service.subscribe(observer)
    await service.register(ALICE, "Alice")
    service.unsubscribe(observer)
    await service.register(BOB, "Bob")

    await service.flush()
    assert [n.identity for n in seen] == [ALICE]


@pytest.mark.asyncio
async def test_reads_during_writes_see_complete_records(service):
    async def writer():
        for i in range(20):
            await service.add_expense(f"e{i}", [ALICE, BOB, CAROL], [3, 0, 0], [1, 1, 1])
            await asyncio.sleep(0)

    async def reader():
        for _ in range(40):
            count = await service.expense_count()
            for expense_id in range(count):
                assert await service.get_expense_participants(expense_id) == [ALICE, BOB, CAROL]
                assert await service.get_amount_owed(expense_id, CAROL) == 1
            balance = await service.net_balance(ALICE)
            assert balance % 2 == 0
            await asyncio.sleep(0)

    await asyncio.gather(writer(), reader())

    assert await service.net_balance(ALICE) == 40
