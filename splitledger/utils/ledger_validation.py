"""Ledger validation utilities and error types."""
from typing import Any, List, Sequence

from splitledger.models.base import MAX_AMOUNT, is_zero_identity


class LedgerError(Exception):
    """Base class for every error the ledger reports to callers."""
    pass


class InvalidInput(LedgerError):
    """Malformed caller-supplied data. Nothing was written."""
    pass


class AlreadyRegistered(LedgerError):
    """The identity already has a profile."""

    def __init__(self, identity: str):
        super().__init__(f"Identity '{identity}' is already registered")
        self.identity = identity


class NotFound(LedgerError):
    """Lookup of something that does not exist."""
    pass


class ExpenseNotFound(NotFound):
    def __init__(self, expense_id: int):
        super().__init__(f"Expense {expense_id} not found")
        self.expense_id = expense_id


class ProfileNotFound(NotFound):
    def __init__(self, identity: str):
        super().__init__(f"Identity '{identity}' is not registered")
        self.identity = identity


def validate_name(name: Any) -> None:
    """Display names must be non-empty strings."""
    if not isinstance(name, str) or not name.strip():
        raise InvalidInput("Name must not be empty")


def validate_amount(amount: Any, field: str = "amount") -> None:
    """
    Amounts are integers in [0, MAX_AMOUNT].

    bool is rejected even though it subclasses int.
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidInput(f"{field} must be an integer, got {amount!r}")
    if amount < 0:
        raise InvalidInput(f"{field} must be non-negative, got {amount}")
    if amount > MAX_AMOUNT:
        raise InvalidInput(f"{field} exceeds the maximum supported amount")


def validate_expense(
    label: Any,
    participants: Sequence[str],
    paid_amounts: Sequence[int],
    owed_amounts: Sequence[int],
) -> None:
    """
    Validate an expense before anything is written.

    Rules, checked in this order:
    - label must be non-empty
    - participants must be non-empty
    - participants, paid_amounts and owed_amounts must have equal lengths
    - no participant may be the zero identity
    - every amount must be a non-negative integer within range

    Paid and owed totals are not compared: balancing a split is the
    caller's responsibility.
    """
    if not isinstance(label, str) or not label:
        raise InvalidInput("Label must not be empty")

    if not participants:
        raise InvalidInput("Participants must not be empty")

    if not (len(participants) == len(paid_amounts) == len(owed_amounts)):
        raise InvalidInput(
            f"Length mismatch: {len(participants)} participants, "
            f"{len(paid_amounts)} paid amounts, {len(owed_amounts)} owed amounts"
        )

    for index, participant in enumerate(participants):
        if is_zero_identity(participant):
            raise InvalidInput(f"Participant {index} is the zero identity")

    for index, (paid, owed) in enumerate(zip(paid_amounts, owed_amounts)):
        validate_amount(paid, f"paid_amounts[{index}]")
        validate_amount(owed, f"owed_amounts[{index}]")


def validate_settlement(from_identity: str, to_identity: str, amount: Any) -> None:
    """
    Validate a settlement attestation.

    A zero amount is allowed and recorded as-is.
    """
    if is_zero_identity(to_identity):
        raise InvalidInput("Settlement recipient must not be the zero identity")
    if to_identity == from_identity:
        raise InvalidInput("Cannot settle with yourself")
    validate_amount(amount)


def dedupe_splits(
    participants: List[str], paid_amounts: List[int], owed_amounts: List[int]
) -> tuple[dict, dict]:
    """
    Fold the parallel lists into paid/owed maps.

    When an identity is listed more than once the last occurrence wins
    for both its paid and owed amount.
    """
    paid: dict = {}
    owed: dict = {}
    for participant, paid_amount, owed_amount in zip(participants, paid_amounts, owed_amounts):
        paid[participant] = paid_amount
        owed[participant] = owed_amount
    return paid, owed
