"""Tests for ledger validation rules."""
import pytest

from conftest import ALICE, BOB
from splitledger.models.base import MAX_AMOUNT, ZERO_IDENTITY, is_zero_identity
from splitledger.utils.ledger_validation import (
    InvalidInput,
    dedupe_splits,
    validate_amount,
    validate_expense,
    validate_name,
)


class TestAmounts:
    """Amounts are integers in [0, MAX_AMOUNT]."""

    @pytest.mark.parametrize("amount", [0, 1, MAX_AMOUNT])
    def test_valid(self, amount):
        validate_amount(amount)

    @pytest.mark.parametrize("amount", [-1, MAX_AMOUNT + 1, 1.5, "10", True, None])
    def test_invalid(self, amount):
        with pytest.raises(InvalidInput):
            validate_amount(amount)


def test_zero_identity():
    assert is_zero_identity(ZERO_IDENTITY)
    assert is_zero_identity("")
    assert is_zero_identity(None)
    assert not is_zero_identity(ALICE)


def test_validate_name():
    validate_name("Alice")
    with pytest.raises(InvalidInput):
        validate_name("  ")


def test_validate_expense_accepts_unbalanced_split():
    validate_expense("Dinner", [ALICE, BOB], [100, 0], [0, 0])


def test_zero_participant_checked_before_amounts():
    with pytest.raises(InvalidInput, match="zero identity"):
        validate_expense("Dinner", [ZERO_IDENTITY], [-1], [-1])


def test_dedupe_splits_last_wins():
    paid, owed = dedupe_splits([ALICE, BOB, ALICE], [1, 2, 3], [4, 5, 6])

    assert paid == {ALICE: 3, BOB: 2}
    assert owed == {ALICE: 6, BOB: 5}
    assert list(paid) == [ALICE, BOB]
