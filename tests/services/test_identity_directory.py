import pytest

from conftest import ALICE, BOB
from splitledger.models.base import ZERO_IDENTITY
from splitledger.models.notification import NameUpdated, PersonRegistered
from splitledger.utils.ledger_validation import AlreadyRegistered, InvalidInput, ProfileNotFound


@pytest.mark.asyncio
async def test_register_creates_profile(service, notifications):
    profile = await service.register(ALICE, "Alice")

    assert profile.identity == ALICE
    assert profile.display_name == "Alice"
    assert profile.is_registered

    stored = await service.get_profile(ALICE)
    assert stored.display_name == "Alice"

    await service.flush()
    assert len(notifications) == 1
    assert isinstance(notifications[0], PersonRegistered)
    assert notifications[0].identity == ALICE
    assert notifications[0].name == "Alice"


@pytest.mark.asyncio
async def test_register_twice_keeps_first_name(service, notifications):
    await service.register(ALICE, "Alice")

    with pytest.raises(AlreadyRegistered):
        await service.register(ALICE, "Mallory")

    assert (await service.get_profile(ALICE)).display_name == "Alice"
    assert await service.list_identities() == [ALICE]
    await service.flush()
    assert len(notifications) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   "])
async def test_register_rejects_empty_name(service, notifications, name):
    with pytest.raises(InvalidInput):
        await service.register(ALICE, name)

    assert await service.list_identities() == []
    await service.flush()
    assert notifications == []


@pytest.mark.asyncio
async def test_register_rejects_zero_identity(service):
    with pytest.raises(InvalidInput):
        await service.register(ZERO_IDENTITY, "Nobody")


@pytest.mark.asyncio
async def test_get_unregistered_returns_zero_profile(service):
    profile = await service.get_profile(BOB)

    assert profile.identity == ZERO_IDENTITY
    assert profile.display_name == ""
    assert not profile.is_registered


@pytest.mark.asyncio
async def test_list_all_in_registration_order(service):
    await service.register(BOB, "Bob")
    await service.register(ALICE, "Alice")

    assert await service.list_identities() == [BOB, ALICE]


@pytest.mark.asyncio
async def test_rename_preserves_identity(registered, notifications):
    profile = await registered.rename(ALICE, "Alice Cooper")

    assert profile.identity == ALICE
    assert profile.display_name == "Alice Cooper"
    assert (await registered.get_profile(ALICE)).display_name == "Alice Cooper"
    assert await registered.list_identities() == [ALICE, BOB]

    await registered.flush()
    assert isinstance(notifications[-1], NameUpdated)
    assert notifications[-1].new_name == "Alice Cooper"


@pytest.mark.asyncio
async def test_rename_unregistered_is_rejected(service, notifications):
    with pytest.raises(ProfileNotFound):
        await service.rename(ALICE, "Ghost")

    assert not (await service.get_profile(ALICE)).is_registered
    await service.flush()
    assert notifications == []


@pytest.mark.asyncio
async def test_rename_rejects_empty_name(registered):
    with pytest.raises(InvalidInput):
        await registered.rename(ALICE, "")

    assert (await registered.get_profile(ALICE)).display_name == "Alice"
